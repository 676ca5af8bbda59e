"""uriref.builder
A mutable, validating builder for Uri.

Raw setters percent-encode what they are given; encoded setters check that
their argument is already valid. The checks that the grammar makes while
parsing are made by build().
"""

import enum
import logging

from typing import Callable, Self

from . import paths
from .charclass import (
    ALPHA,
    PATH,
    PCHAR,
    QUERY_FRAGMENT,
    QUERY_PARAM,
    REG_NAME,
    SCHEME,
    USERINFO,
    ZONE_ID,
    CharClass,
    check_char,
    check_chars,
)
from .codec import encode
from .errors import UriStateError, UriSyntaxError, UriValidationError
from .hosts import check_dns_host, check_ip_literal, check_ipv6_address, host_to_ascii
from .uri import Uri

logger = logging.getLogger("uriref.builder")


class HostEncodingOption(enum.Enum):
    """How build() turns a raw (non-IP) host into its encoded form."""

    # IDNA ToASCII, after which the host must be a valid DNS name
    DNS_COMPATIBLE = "dns_compatible"
    # Percent-encoding against reg-name
    PERCENT_ENCODED = "percent_encoded"


def _check_encoded(value: str, cls: CharClass, what: str) -> None:
    try:
        check_chars(value, 0, len(value), cls, what)
    except UriSyntaxError as exc:
        raise UriValidationError(str(exc)) from exc


class UriBuilder:
    """Builds a Uri one component at a time.

    A builder is meant to be used by a single owner; it does no locking.
    The option to encode a host for DNS is never inferred from the scheme, so
    callers that need a DNS name should keep the default DNS_COMPATIBLE.
    """

    def __init__(self: Self, host_to_ascii: Callable[[str], str] = host_to_ascii) -> None:
        self._host_to_ascii: Callable[[str], str] = host_to_ascii
        self._scheme: str | None = None
        self._user_info: str | None = None
        self._host: str | None = None
        self._encoded_host: str | None = None
        self._host_encoding: HostEncodingOption = HostEncodingOption.DNS_COMPATIBLE
        self._port: int | None = None
        self._path: str = ""
        self._path_segments: list[str] | None = None
        self._query: str | None = None
        self._query_parameters: list[str] | None = None
        self._fragment: str | None = None

    def scheme(self: Self, scheme: str | None) -> Self:
        if scheme is not None:
            if len(scheme) == 0:
                raise UriValidationError("Empty scheme")
            try:
                check_char(scheme, 0, ALPHA, "scheme")
                check_chars(scheme, 1, len(scheme), SCHEME, "scheme")
            except UriSyntaxError as exc:
                raise UriValidationError(str(exc)) from exc
        self._scheme = scheme
        return self

    def user_info(self: Self, user_info: str | None) -> Self:
        self._user_info = encode(user_info, USERINFO) if user_info is not None else None
        return self

    def encoded_user_info(self: Self, encoded_user_info: str | None) -> Self:
        if encoded_user_info is not None:
            _check_encoded(encoded_user_info, USERINFO, "userinfo")
        self._user_info = encoded_user_info
        return self

    def host(self: Self, host: str | None) -> Self:
        """Sets the raw host. A host containing ":" is taken to be an IPv6 address
        without brackets, with an optional zone ID after a plain "%".
        """
        self._host = host
        self._encoded_host = None
        return self

    def host_encoding(self: Self, option: HostEncodingOption) -> Self:
        if not isinstance(option, HostEncodingOption):
            raise UriValidationError(f"Invalid host encoding option: {option!r}")
        self._host_encoding = option
        return self

    def encoded_host(self: Self, encoded_host: str | None) -> Self:
        if encoded_host is not None:
            n: int = len(encoded_host)
            if n >= 2 and encoded_host.startswith("[") and encoded_host.endswith("]"):
                try:
                    check_ip_literal(encoded_host, 1, n - 1, encoded=True)
                except UriSyntaxError as exc:
                    raise UriValidationError(str(exc)) from exc
            else:
                _check_encoded(encoded_host, REG_NAME, "host")
        self._encoded_host = encoded_host
        self._host = None
        return self

    def port(self: Self, port: int | None) -> Self:
        if port is not None:
            if not isinstance(port, int) or isinstance(port, bool):
                raise UriValidationError(f"Invalid port: {port!r}")
            if port < 0:
                raise UriValidationError(f"Negative port: {port}")
        self._port = port
        return self

    def path(self: Self, path: str | None) -> Self:
        """Sets the raw path, discarding any appended segments. "/" separates segments."""
        self._path = encode(path, PATH) if path is not None else ""
        self._path_segments = None
        return self

    def append_path_segment(self: Self, segment: str) -> Self:
        """Appends a segment to the path. A "/" in segment is encoded, not treated as a separator."""
        if self._path_segments is None:
            self._path_segments = []
        self._path_segments.append(encode(segment, PCHAR))
        return self

    def encoded_path(self: Self, encoded_path: str | None) -> Self:
        if self._path_segments is not None:
            raise UriStateError("path already appended to")
        if encoded_path is not None:
            _check_encoded(encoded_path, PATH, "path")
        self._path = encoded_path if encoded_path is not None else ""
        return self

    def append_query_parameter(self: Self, name: str, value: str) -> Self:
        pair: str = f"{encode(name, QUERY_PARAM, True)}={encode(value, QUERY_PARAM, True)}"
        if self._query_parameters is None:
            self._query_parameters = [self._query] if self._query else []
        self._query_parameters.append(pair)
        return self

    def encoded_query(self: Self, encoded_query: str | None) -> Self:
        if self._query_parameters is not None:
            raise UriStateError("query already appended to")
        if encoded_query is not None:
            _check_encoded(encoded_query, QUERY_FRAGMENT, "query")
        self._query = encoded_query
        return self

    def clear_query(self: Self) -> Self:
        if self._query_parameters is not None:
            raise UriStateError("query already appended to")
        self._query = None
        return self

    def fragment(self: Self, fragment: str | None) -> Self:
        self._fragment = encode(fragment, QUERY_FRAGMENT) if fragment is not None else None
        return self

    def encoded_fragment(self: Self, encoded_fragment: str | None) -> Self:
        if encoded_fragment is not None:
            _check_encoded(encoded_fragment, QUERY_FRAGMENT, "fragment")
        self._fragment = encoded_fragment
        return self

    def _encode_ipv6_host(self: Self, host: str) -> str:
        try:
            check_ipv6_address(host, 0, len(host), encoded=False)
        except UriSyntaxError as exc:
            raise UriValidationError(str(exc)) from exc
        address, pct, zone_id = host.partition("%")
        if not pct:
            return f"[{address}]"
        return f"[{address}%25{encode(zone_id, ZONE_ID)}]"

    def _encode_host(self: Self, host: str) -> str:
        if ":" in host:
            return self._encode_ipv6_host(host)
        if self._host_encoding is HostEncodingOption.PERCENT_ENCODED:
            return encode(host, REG_NAME)
        try:
            ascii_host: str = self._host_to_ascii(host)
        except UnicodeError as exc:  # idna.IDNAError
            raise UriValidationError(f"Host is not convertible to ASCII: {host}") from exc
        try:
            check_dns_host(ascii_host)
        except UriSyntaxError as exc:
            raise UriValidationError(str(exc)) from exc
        return ascii_host

    def build(self: Self) -> Uri:
        encoded_host: str | None = self._encoded_host
        if encoded_host is None and self._host is not None:
            encoded_host = self._encode_host(self._host)
            logger.debug("host_encoded option=%s host=%s", self._host_encoding.name, encoded_host)

        path: str = self._path
        if self._path_segments is not None:
            if len(path) > 0 and not path.endswith("/"):
                path += "/"
            path += "/".join(self._path_segments)
        if encoded_host is None:
            # When authority is not present, the path cannot begin with "//" (RFC 3986 section 3.3).
            if path.startswith("//"):
                raise UriValidationError('path begins with "//" when authority is not present')
            if self._user_info is not None or self._port is not None:
                raise UriValidationError("user info or port without host")
        elif len(path) > 0 and not path.startswith("/"):
            # When authority is present, the path must either be empty or begin with "/".
            raise UriValidationError("rootless path with authority present")
        if self._scheme is None:
            path = paths.correct_no_scheme_path(path)

        query: str | None = self._query
        if self._query_parameters is not None:
            query = "&".join(self._query_parameters)

        return Uri(
            scheme=self._scheme,
            encoded_user_info=self._user_info,
            encoded_host=encoded_host,
            port=self._port,
            encoded_path=path,
            encoded_query=query,
            encoded_fragment=self._fragment,
        )


def new_builder(host_to_ascii: Callable[[str], str] = host_to_ascii) -> UriBuilder:
    return UriBuilder(host_to_ascii)
