"""uriref.codec
Percent-encoding and decoding (RFC 3986 section 2.1), with UTF-8 for non-ASCII text.
"""

from .charclass import CharClass, HEXDIG, match
from .errors import EncodedSlashError, UriSyntaxError

_HEX_DIGITS: str = "0123456789ABCDEF"


def _escape(octet: int) -> str:
    return f"%{_HEX_DIGITS[octet >> 4]}{_HEX_DIGITS[octet & 0x0F]}"


def _needs_encoding(c: str, cls: CharClass) -> bool:
    return ord(c) >= 0x80 or not match(c, cls.low, cls.high)


def encode(s: str, cls: CharClass, encode_space_as_plus: bool = False) -> str:
    """Percent-encodes every character of s that cls does not permit.
    Non-ASCII characters are always encoded, one escape per UTF-8 octet.
    e.g. encode("a b", QUERY_PARAM, encode_space_as_plus=True) == "a+b"
    """
    i: int = 0
    n: int = len(s)
    while i < n and not _needs_encoding(s[i], cls):
        i += 1
    if i == n:
        return s

    result: list[str] = [s[:i]]
    for c in s[i:]:
        if ord(c) < 0x80:
            if match(c, cls.low, cls.high):
                result.append(c)
            elif encode_space_as_plus and c == " ":
                result.append("+")
            else:
                result.append(_escape(ord(c)))
        else:
            # Lone surrogates have no UTF-8 form; they come out as "%3F".
            result.extend(_escape(b) for b in c.encode("utf-8", errors="replace"))
    return "".join(result)


def _hex_value(c: str) -> int:
    return int(c, base=16)


def decode(s: str, decode_plus_as_space: bool = False, allow_encoded_slash: bool = True) -> str:
    """Decodes percent-encoded octets in s.
    Runs of consecutive escapes are decoded together as UTF-8, with malformed
    sequences replaced by U+FFFD. A "%" not followed by two hex digits is an error.
    When allow_encoded_slash is false, EncodedSlashError is raised on "%2F".
    """
    if "%" not in s:
        return s.replace("+", " ") if decode_plus_as_space else s

    result: list[str] = []
    n: int = len(s)
    i: int = 0
    while i < n:
        c: str = s[i]
        if c != "%":
            result.append(" " if decode_plus_as_space and c == "+" else c)
            i += 1
            continue
        octets: bytearray = bytearray()
        while i < n and s[i] == "%":
            if i + 3 > n or not HEXDIG.matches(s[i + 1]) or not HEXDIG.matches(s[i + 2]):
                raise UriSyntaxError(s, "Malformed percent-encoded octet", i)
            octet: int = (_hex_value(s[i + 1]) << 4) | _hex_value(s[i + 2])
            if not allow_encoded_slash and octet == 0x2F:
                raise EncodedSlashError(s, i)
            octets.append(octet)
            i += 3
        result.append(octets.decode("utf-8", errors="replace"))
    return "".join(result)
