"""uriref.hosts
Syntax checks for the host component: IPv6 literals (RFC 3986, RFC 6874),
IPvFuture literals, DNS-compatible host names, and the IDNA bridge.
"""

import idna

from .charclass import ALPHA, DIGIT, HEXDIG, IPVFUTURE, ZONE_ID, CharClass, check_chars, scan
from .errors import UriSyntaxError

# Longest textual IPv6address, "ffff:ffff:ffff:ffff:ffff:ffff:255.255.255.255"
_IPV6_MAX_LENGTH: int = 45

# Shortest textual IPv6address, "::"
_IPV6_MIN_LENGTH: int = 2

_DNS_HOST_MAX_LENGTH: int = 253
_DNS_LABEL_MAX_LENGTH: int = 63

# let-dig-hyp = ALPHA / DIGIT / "-"   (RFC 1034 section 3.5)
_LDH: CharClass = ALPHA | DIGIT | CharClass.of("-")


def _check_zone_id(s: str, pct: int, end: int, encoded: bool) -> None:
    if encoded:
        # IPv6addrz = IPv6address "%25" ZoneID
        if not s.startswith("%25", pct, end):
            raise UriSyntaxError(s, "Expected %25", pct)
        zone_start: int = pct + 3
    else:
        zone_start = pct + 1
    if zone_start >= end:
        raise UriSyntaxError(s, "Empty zone ID", pct)
    if encoded:
        p: int = scan(s, zone_start, end, ZONE_ID)
        if p < end:
            raise UriSyntaxError(s, "Illegal character in zone ID", p)


def _check_ipv4_address(s: str, start: int, end: int) -> None:
    """IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet"""
    p: int = start
    for i in range(4):
        q: int = p
        while q < end and DIGIT.matches(s[q]):
            q += 1
        digits: int = q - p
        # dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
        if digits == 0 or digits > 3 or (digits > 1 and s[p] == "0") or int(s[p:q]) > 255:
            raise UriSyntaxError(s, "Expected IPv4 address", p)
        if i < 3:
            if q >= end or s[q] != ".":
                raise UriSyntaxError(s, "Expected IPv4 address", q)
            p = q + 1
        elif q != end:
            raise UriSyntaxError(s, "Expected IPv4 address", q)


def check_ipv6_address(s: str, start: int, end: int, encoded: bool) -> None:
    """Checks that s[start:end] is an IPv6address with an optional zone ID.
    If encoded is true, the zone ID must be introduced by "%25" (the form used
    inside a URI); otherwise a bare "%" introduces it.
    """
    pct: int = s.find("%", start, end)
    if pct >= 0:
        _check_zone_id(s, pct, end, encoded)
        end = pct

    n: int = end - start
    if n < _IPV6_MIN_LENGTH:
        raise UriSyntaxError(s, "IPv6 address too short", start)
    if n > _IPV6_MAX_LENGTH:
        raise UriSyntaxError(s, "IPv6 address too long", start)

    groups: int = 0
    compressed: bool = False
    p: int = start
    if s[p] == ":":
        if s[p + 1] != ":":
            raise UriSyntaxError(s, "Malformed IPv6 address", p)
        compressed = True
        p += 2

    while p < end:
        q: int = p
        while q < end and HEXDIG.matches(s[q]):
            q += 1
        if q < end and s[q] == ".":
            # ls32 may end the address with an embedded IPv4address
            _check_ipv4_address(s, p, end)
            groups += 2
            break
        if q == p:
            if s[q] == ":":
                raise UriSyntaxError(s, "Malformed IPv6 address", q)
            raise UriSyntaxError(s, "Illegal character in IPv6 address", q)
        if q - p > 4:
            raise UriSyntaxError(s, "IPv6 hex sequence too long", p)
        groups += 1
        if q == end:
            break
        if s[q] != ":":
            raise UriSyntaxError(s, "Illegal character in IPv6 address", q)
        q += 1
        if q < end and s[q] == ":":
            if compressed:
                raise UriSyntaxError(s, "Multiple IPv6 compressions", q - 1)
            compressed = True
            q += 1
        elif q == end:
            raise UriSyntaxError(s, "Malformed IPv6 address", q - 1)
        p = q

    # "::" stands for at least one group of zeros.
    if (compressed and groups > 7) or (not compressed and groups != 8):
        raise UriSyntaxError(s, "Malformed IPv6 address", start)


def check_ipvfuture(s: str, start: int, end: int) -> None:
    """IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )"""
    if start >= end or s[start] not in "vV":
        raise UriSyntaxError(s, "Expected IPvFuture address", start)
    p: int = scan(s, start + 1, end, HEXDIG)
    if p == start + 1:
        raise UriSyntaxError(s, "Expected hex digit in IPvFuture address", p)
    if p >= end or s[p] != ".":
        raise UriSyntaxError(s, "Expected '.' in IPvFuture address", p)
    p += 1
    if p == end:
        raise UriSyntaxError(s, "Empty IPvFuture address", p)
    check_chars(s, p, end, IPVFUTURE, "IPvFuture address")


def check_ip_literal(s: str, start: int, end: int, encoded: bool) -> None:
    """Checks the interior of a bracketed IP-literal."""
    if start < end and s[start] in "vV":
        check_ipvfuture(s, start, end)
    else:
        check_ipv6_address(s, start, end, encoded)


def check_dns_host(host: str) -> None:
    """Checks that host is usable as a DNS name (RFC 1034 section 3.5, RFC 1123 section 2.1).
    A single trailing dot (a fully-qualified name) is allowed.
    """
    n: int = len(host)
    if n == 0 or n > _DNS_HOST_MAX_LENGTH:
        raise UriSyntaxError(host, "Illegal DNS host length")
    label_start: int = 0
    for i in range(n + 1):
        if i < n and host[i] != ".":
            if not _LDH.matches(host[i]):
                raise UriSyntaxError(host, "Illegal character in DNS host", i)
            continue
        length: int = i - label_start
        if length == 0:
            if i == n:  # trailing dot
                break
            raise UriSyntaxError(host, "Empty DNS label", i)
        if length > _DNS_LABEL_MAX_LENGTH:
            raise UriSyntaxError(host, "DNS label too long", label_start)
        if host[label_start] == "-":
            raise UriSyntaxError(host, "DNS label starts with hyphen", label_start)
        if host[i - 1] == "-":
            raise UriSyntaxError(host, "DNS label ends with hyphen", i - 1)
        label_start = i + 1


def host_to_ascii(host: str) -> str:
    """ToASCII through UTS #46 mapping, e.g. host_to_ascii("Bücher.example") == "xn--bcher-kva.example"
    Raises idna.IDNAError when the host cannot be converted.
    """
    return idna.encode(host, uts46=True).decode("ascii")


def _label_to_unicode(label: str) -> str:
    if label[:4].lower() != "xn--":
        return label
    try:
        return idna.decode(label)
    except UnicodeError:  # idna.IDNAError, or a bad punycode label
        return label


def host_to_unicode(host: str) -> str:
    """ToUnicode for each ACE ("xn--") label of host; every other label is left as it is."""
    return ".".join(_label_to_unicode(label) for label in host.split("."))
