"""uriref.charclass
Character classes of RFC 3986, stored as a pair of 64-bit masks.

The low mask covers code points 0-63 and the high mask covers 64-127.
Bit 0 of the low mask would belong to NUL, which never appears in a URI, so
it is borrowed to mean "percent-encoded octets are also allowed here".
"""

import dataclasses

from typing import Self

from .errors import UriSyntaxError


def match(c: str, low: int, high: int) -> bool:
    """Tells whether the character c is permitted by the given mask pair."""
    n: int = ord(c)
    if n == 0:  # NUL has no slot in the masks
        return False
    if n < 64:
        return (1 << n) & low != 0
    if n < 128:
        return (1 << (n - 64)) & high != 0
    return False


def _low_mask(chars: str) -> int:
    m: int = 0
    for c in chars:
        if ord(c) < 64:
            m |= 1 << ord(c)
    return m


def _high_mask(chars: str) -> int:
    m: int = 0
    for c in chars:
        if 64 <= ord(c) < 128:
            m |= 1 << (ord(c) - 64)
    return m


def _range(first: str, last: str) -> str:
    return "".join(chr(n) for n in range(ord(first), ord(last) + 1))


@dataclasses.dataclass(frozen=True)
class CharClass:
    """A set of ASCII characters, optionally extended by percent-encoded octets."""

    low: int
    high: int

    @classmethod
    def of(cls, chars: str) -> Self:
        return cls(_low_mask(chars), _high_mask(chars))

    def __or__(self: Self, other: Self) -> Self:
        return self.__class__(self.low | other.low, self.high | other.high)

    def __sub__(self: Self, other: Self) -> Self:
        return self.__class__(self.low & ~other.low, self.high & ~other.high)

    def __contains__(self: Self, c: str) -> bool:
        return self.matches(c)

    def matches(self: Self, c: str) -> bool:
        return match(c, self.low, self.high)

    @property
    def allows_pct_encoded(self: Self) -> bool:
        return self.low & 1 != 0


# DIGIT = %x30-39
DIGIT: CharClass = CharClass.of(_range("0", "9"))

# ALPHA = %x41-5A / %x61-7A
ALPHA: CharClass = CharClass.of(_range("A", "Z") + _range("a", "z"))

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
HEXDIG: CharClass = DIGIT | CharClass.of("ABCDEFabcdef")

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS: CharClass = CharClass.of("!$&'()*+,;=")

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED: CharClass = ALPHA | DIGIT | CharClass.of("-._~")

# pct-encoded = "%" HEXDIG HEXDIG
# (handled by scan() below, flagged through bit 0)
PCT_ENCODED: CharClass = CharClass(1, 0)

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
PCHAR: CharClass = UNRESERVED | PCT_ENCODED | SUB_DELIMS | CharClass.of(":@")

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME: CharClass = ALPHA | DIGIT | CharClass.of("+-.")

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
USERINFO: CharClass = UNRESERVED | PCT_ENCODED | SUB_DELIMS | CharClass.of(":")

# reg-name = *( unreserved / pct-encoded / sub-delims )
REG_NAME: CharClass = UNRESERVED | PCT_ENCODED | SUB_DELIMS

# Every character that may appear in a path, segment separators included
PATH: CharClass = PCHAR | CharClass.of("/")

# query = *( pchar / "/" / "?" )
# fragment = *( pchar / "/" / "?" )
QUERY_FRAGMENT: CharClass = PCHAR | CharClass.of("/?")

# A query parameter name or value keeps "&", "+" and "=" as separators
QUERY_PARAM: CharClass = QUERY_FRAGMENT - CharClass.of("&+=")

# ZoneID = 1*( unreserved / pct-encoded )
ZONE_ID: CharClass = UNRESERVED | PCT_ENCODED

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
IPVFUTURE: CharClass = UNRESERVED | SUB_DELIMS | CharClass.of(":")


def _scan_pct_encoded(s: str, start: int, end: int) -> bool:
    if s[start] != "%":
        return False
    if start + 3 <= end and HEXDIG.matches(s[start + 1]) and HEXDIG.matches(s[start + 2]):
        return True
    raise UriSyntaxError(s, "Malformed percent-encoded octet", start)


def scan(s: str, start: int, end: int, cls: CharClass) -> int:
    """Returns the index of the first character in s[start:end] that cls does not permit.
    Percent-encoded octets are skipped when cls allows them, and a malformed one is an error.
    """
    p: int = start
    allow_pct_encoded: bool = cls.allows_pct_encoded
    while p < end:
        if match(s[p], cls.low, cls.high):
            p += 1
        elif allow_pct_encoded and _scan_pct_encoded(s, p, end):
            p += 3
        else:
            break
    return p


def check_chars(s: str, start: int, end: int, cls: CharClass, what: str) -> None:
    p: int = scan(s, start, end, cls)
    if p < end:
        raise UriSyntaxError(s, f"Illegal character in {what}", p)


def check_char(s: str, p: int, cls: CharClass, what: str) -> None:
    if not match(s[p], cls.low, cls.high):
        raise UriSyntaxError(s, f"Illegal character in {what}", p)
