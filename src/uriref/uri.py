"""uriref.uri
The immutable URI reference value.
"""

import dataclasses
import logging
import types

from functools import cached_property
from typing import TYPE_CHECKING, Mapping, Self

from . import paths
from .codec import decode
from .errors import EncodedSlashError
from .hosts import host_to_unicode

if TYPE_CHECKING:
    from .builder import UriBuilder

logger = logging.getLogger("uriref.uri")


def _split_segments(path: str) -> list[str]:
    if len(path) == 0:
        return []
    if path.startswith("/"):
        path = path[1:]
    return path.split("/")


def _parse_query_parameters(query: str) -> dict[str, tuple[str | None, ...]]:
    result: dict[str, list[str | None]] = {}
    for param in query.split("&"):
        if len(param) == 0:
            continue
        name, equals, value = param.partition("=")
        result.setdefault(decode(name, decode_plus_as_space=True), []).append(
            decode(value, decode_plus_as_space=True) if equals else None
        )
    return {name: tuple(values) for name, values in result.items()}


@dataclasses.dataclass(frozen=True, eq=False)
class Uri:
    """A URI reference, held as its percent-encoded components.

    Build one with parse() or UriBuilder rather than instantiating it directly;
    neither the grammar nor the invariants are checked here.
    Decoded views are computed on first access and then cached. Two threads racing
    on the first access compute the same value, so no locking is needed.
    """

    scheme: str | None = None
    encoded_user_info: str | None = None
    encoded_host: str | None = None
    port: int | None = None
    encoded_path: str = ""
    encoded_query: str | None = None
    encoded_fragment: str | None = None

    @cached_property
    def user_info(self: Self) -> str | None:
        if self.encoded_user_info is None:
            return None
        return decode(self.encoded_user_info)

    @cached_property
    def host(self: Self) -> str | None:
        """The host with IP-literal brackets removed, ACE labels converted to Unicode and
        percent-encoded octets decoded. A zone ID comes back behind a plain "%".
        """
        host: str | None = self.encoded_host
        if host is None:
            return None
        if len(host) >= 2 and host.startswith("[") and host.endswith("]"):
            return decode(host[1:-1])
        return decode(host_to_unicode(host))

    @cached_property
    def path(self: Self) -> str | None:
        """The decoded path, or None if it contains an encoded slash ("%2F").
        Decoding would make such a slash indistinguishable from a separator; use path_segments instead.
        """
        try:
            return decode(self.encoded_path, allow_encoded_slash=False)
        except EncodedSlashError:
            return None

    @property
    def path_segments(self: Self) -> list[str]:
        path: str | None = self.path
        if path is not None:
            return _split_segments(path)
        return [decode(segment) for segment in _split_segments(self.encoded_path)]

    @cached_property
    def query(self: Self) -> str | None:
        if self.encoded_query is None:
            return None
        return decode(self.encoded_query)

    @cached_property
    def _query_parameters(self: Self) -> Mapping[str, tuple[str | None, ...]] | None:
        if self.encoded_query is None:
            return None
        return types.MappingProxyType(_parse_query_parameters(self.encoded_query))

    @property
    def query_parameters(self: Self) -> dict[str, list[str | None]] | None:
        """The query as "&"-separated name=value pairs, in order of first appearance.
        A parameter without "=" has the value None. "+" decodes to a space.
        """
        if self._query_parameters is None:
            return None
        return {name: list(values) for name, values in self._query_parameters.items()}

    def query_parameter(self: Self, name: str) -> list[str | None]:
        if self._query_parameters is None:
            return []
        return list(self._query_parameters.get(name, ()))

    @cached_property
    def fragment(self: Self) -> str | None:
        if self.encoded_fragment is None:
            return None
        return decode(self.encoded_fragment)

    @property
    def encoded_authority(self: Self) -> str | None:
        """userinfo@host:port"""
        if self.encoded_host is None:
            return None
        result: str = ""
        if self.encoded_user_info is not None:
            result += f"{self.encoded_user_info}@"
        result += self.encoded_host
        if self.port is not None:
            result += f":{self.port}"
        return result

    @property
    def authority(self: Self) -> str | None:
        if self.host is None:
            return None
        result: str = ""
        if self.user_info is not None:
            result += f"{self.user_info}@"
        result += f"[{self.host}]" if self.encoded_host.startswith("[") else self.host
        if self.port is not None:
            result += f":{self.port}"
        return result

    @property
    def encoded_scheme_specific_part(self: Self) -> str:
        """Everything between "scheme:" and "#fragment"."""
        result: str = ""
        if self.encoded_host is not None:
            result += f"//{self.encoded_authority}"
        result += self.encoded_path
        if self.encoded_query is not None:
            result += f"?{self.encoded_query}"
        return result

    @property
    def scheme_specific_part(self: Self) -> str:
        return decode(self.encoded_scheme_specific_part)

    @property
    def is_relative(self: Self) -> bool:
        return self.scheme is None

    @property
    def is_opaque(self: Self) -> bool:
        return self.scheme is not None and self.encoded_host is None and not self.encoded_path.startswith("/")

    def normalize(self: Self) -> Self:
        """Removes dot segments from the path. Returns self if there are none."""
        path: str = paths.normalize_path(self.encoded_path)
        if path == self.encoded_path:
            return self
        if self.scheme is None:
            path = paths.correct_no_scheme_path(path)
        if self.encoded_host is None:
            path = paths.correct_no_authority_path(path)
        logger.debug("path_normalized before=%s after=%s", self.encoded_path, path)
        return dataclasses.replace(self, encoded_path=path)

    def resolve(self: Self, r: "Uri | str") -> "Uri":
        """Resolves r against this URI (RFC 3986 section 5.2).
        Raises UriStateError if this URI is relative.
        """
        if isinstance(r, str):
            from .parse import parse

            r = parse(r)
        return paths.resolve(self, r)

    def as_builder(self: Self) -> "UriBuilder":
        """Returns a builder holding the components of this URI."""
        from .builder import UriBuilder

        return (
            UriBuilder()
            .scheme(self.scheme)
            .encoded_user_info(self.encoded_user_info)
            .encoded_host(self.encoded_host)
            .port(self.port)
            .encoded_path(self.encoded_path)
            .encoded_query(self.encoded_query)
            .encoded_fragment(self.encoded_fragment)
        )

    @cached_property
    def _string(self: Self) -> str:
        """Direct translation of RFC 3986 section 5.3"""
        result: str = ""
        if self.scheme is not None:
            result += f"{self.scheme}:"
        result += self.encoded_scheme_specific_part
        if self.encoded_fragment is not None:
            result += f"#{self.encoded_fragment}"
        return result

    def __str__(self: Self) -> str:
        return self._string

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self._string == other._string

    def __hash__(self: Self) -> int:
        return hash(self._string)
