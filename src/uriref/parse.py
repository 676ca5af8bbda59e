"""uriref.parse
An RFC 3986 URI-reference parser.

The parser makes a single pass over the input, using the positions of the
first ":", "/", "?" and "#" to split it into components, and checks each
component against its character class from uriref.charclass.

URI-reference = URI / relative-ref
URI           = scheme ":" hier-part [ "?" query ] [ "#" fragment ]
relative-ref  = relative-part [ "?" query ] [ "#" fragment ]
hier-part     = "//" authority path-abempty / path-absolute / path-rootless / path-empty
authority     = [ userinfo "@" ] host [ ":" port ]
"""

from typing import Self

from .charclass import ALPHA, DIGIT, PATH, QUERY_FRAGMENT, REG_NAME, SCHEME, USERINFO, check_char, check_chars
from .errors import UriSyntaxError
from .hosts import check_ip_literal
from .uri import Uri


class _Parser:
    def __init__(self: Self, data: str) -> None:
        self.input: str = data
        self.scheme: str | None = None
        self.user_info: str | None = None
        self.host: str | None = None
        self.port: int | None = None
        self.path: str = ""
        self.query: str | None = None
        self.fragment: str | None = None

    def _find(self: Self, c: str) -> int:
        i: int = self.input.find(c)
        return len(self.input) if i < 0 else i

    def _scan_back(self: Self, start: int, end: int, c: str, stop: str) -> int:
        """Searches backwards from start down to end for c, giving up at stop."""
        for i in range(start, end - 1, -1):
            if self.input[i] == c:
                return i
            if self.input[i] == stop:
                return -1
        return -1

    def parse(self: Self) -> Uri:
        data: str = self.input
        n: int = len(data)
        if n == 0:
            return Uri()

        colon: int = self._find(":")
        slash: int = self._find("/")
        q_mark: int = self._find("?")
        sharp: int = self._find("#")

        if colon == 0:
            raise UriSyntaxError(data, "Expected scheme", 0)
        if sharp < q_mark:  # a "?" inside the fragment
            q_mark = n

        p: int = 0
        if colon < slash and colon < q_mark and colon < sharp:
            check_char(data, 0, ALPHA, "scheme")
            check_chars(data, 1, colon, SCHEME, "scheme")
            self.scheme = data[:colon]
            p = colon + 1

        has_query: bool = q_mark != n
        self._parse_hier_part(p, q_mark if has_query else sharp)

        if has_query:
            p = q_mark + 1
            check_chars(data, p, sharp, QUERY_FRAGMENT, "query")
            self.query = data[p:sharp]
        if sharp != n:
            p = sharp + 1
            check_chars(data, p, n, QUERY_FRAGMENT, "fragment")
            self.fragment = data[p:]

        return Uri(
            scheme=self.scheme,
            encoded_user_info=self.user_info,
            encoded_host=self.host,
            port=self.port,
            encoded_path=self.path,
            encoded_query=self.query,
            encoded_fragment=self.fragment,
        )

    def _parse_hier_part(self: Self, start: int, end: int) -> None:
        p: int = start
        if self.input.startswith("//", p, end):
            p += 2
            authority_end: int = self.input.find("/", p, end)
            if authority_end < 0:
                authority_end = end
            self._parse_authority(p, authority_end)
            p = authority_end
        check_chars(self.input, p, end, PATH, "path")
        self.path = self.input[p:end]

    def _parse_authority(self: Self, start: int, end: int) -> None:
        data: str = self.input
        p: int = start
        at: int = data.find("@", p, end)
        if at >= 0:
            check_chars(data, p, at, USERINFO, "userinfo")
            self.user_info = data[p:at]
            p = at + 1

        # An IPv6 literal is full of colons, so only look for the port past its "]".
        colon: int = self._scan_back(end - 1, p, ":", "]")
        if colon >= 0:
            if colon != end - 1:  # "host:" has an empty port, which is the same as none
                check_chars(data, colon + 1, end, DIGIT, "port")
                try:
                    self.port = int(data[colon + 1 : end], base=10)
                except ValueError as exc:  # past the interpreter's int digit limit
                    raise UriSyntaxError(data, "Port too long", colon + 1) from exc
            end = colon

        if end - p >= 2 and data[p] == "[" and data[end - 1] == "]":
            check_ip_literal(data, p + 1, end - 1, encoded=True)
        else:
            check_chars(data, p, end, REG_NAME, "host")
        self.host = data[p:end]


def parse(data: str) -> Uri:
    """RFC 3986 URI-reference parser.
    Raises UriSyntaxError, which carries the input, the reason and the index of the offending character.
    e.g. parse("http://example.org/path?query#fragment").encoded_host == "example.org"
    """
    return _Parser(data).parse()
