"""uriref.paths
Dot-segment removal and reference resolution (RFC 3986 section 5.2).

All of these work on percent-encoded paths: only a literal "/" separates
segments, so an encoded "%2F" stays inside its segment.
"""

from typing import TYPE_CHECKING

from .errors import UriStateError

if TYPE_CHECKING:
    from .uri import Uri


def _rewind(buf: list[str], limit: int) -> int:
    """Drops the last segment of buf (with its leading "/"), stopping at limit."""
    pos: int = len(buf)
    if pos == 0:
        return 0
    i: int = pos - 1
    while i > limit:
        if buf[i] == "/":
            break
        i -= 1
    del buf[i:]
    return i


def normalize_path(path: str) -> str:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4,
    as a single forward pass over path.

    Leading ".." segments of a relative path have nothing to remove, so they are
    kept; limit marks where they end in the output. A non-empty path that
    normalizes to nothing becomes ".".
    e.g. normalize_path("a/./../b/./c/d/..") == "b/c/"
    """
    n: int = len(path)
    if n == 0:
        return path

    buf: list[str] = []
    absolute: bool = path[0] == "/"
    limit: int = 0
    seg_start: int = 0
    # Dots seen in the current segment, or -1 once anything else shows up
    dots: int = 0

    for i in range(1 if absolute else 0, n + 1):
        end: bool = i == n
        if not end and path[i] != "/":
            if path[i] == ".":
                if dots != -1:
                    dots += 1
            else:
                dots = -1
            continue

        # path[seg_start:i] is one segment, with its leading "/" unless it is the first
        start, dot_count = seg_start, dots
        seg_start, dots = i, 0
        pos: int = len(buf)
        if dot_count == 1:
            if end and (absolute or pos != 0):
                buf.append("/")
            continue
        if dot_count == 2:
            if absolute or pos != limit:
                pos = _rewind(buf, limit)
                if end and (absolute or pos != 0):
                    buf.append("/")
                continue
            limit = pos + i - start
        buf.extend(path[start:i])

    result: str = "".join(buf)
    # A relative path whose first segments were removed is left with a "/" in front.
    if not absolute and result.startswith("/"):
        result = result[1:]
    if len(result) == 0:
        return "."
    return result


def merge_paths(base_path: str, ref_path: str, base_has_authority: bool = False) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3"""
    if base_has_authority and len(base_path) == 0:
        return f"/{ref_path}"
    dirname, slash, _ = base_path.rpartition("/")
    return dirname + slash + ref_path


def correct_no_scheme_path(path: str) -> str:
    """Prepends "./" to a rootless path whose first segment contains ":".

    Without a scheme, such a segment would be read back as one (RFC 3986 section 4.2).
    e.g. correct_no_scheme_path("te:st") == "./te:st"
    """
    first_segment, _, _ = path.partition("/")
    if ":" in first_segment:
        return f"./{path}"
    return path


def correct_no_authority_path(path: str) -> str:
    """Prepends "/." to a path starting with "//", which would otherwise be read back as an authority."""
    if path.startswith("//"):
        return f"/.{path}"
    return path


def resolve(base: "Uri", r: "Uri") -> "Uri":
    """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2"""
    if base.scheme is None:
        raise UriStateError(f"cannot resolve against a relative reference: {base}")

    scheme: str | None
    user_info: str | None
    host: str | None
    port: int | None
    path: str
    query: str | None

    # Kept close to the RFC pseudocode so that it is easy to check against it.
    if r.scheme is not None:
        scheme = r.scheme
        user_info = r.encoded_user_info
        host = r.encoded_host
        port = r.port
        path = normalize_path(r.encoded_path)
        query = r.encoded_query
    else:
        if r.encoded_host is not None:
            user_info = r.encoded_user_info
            host = r.encoded_host
            port = r.port
            path = normalize_path(r.encoded_path)
            query = r.encoded_query
        else:
            if len(r.encoded_path) == 0:
                path = base.encoded_path
                if r.encoded_query is not None:
                    query = r.encoded_query
                else:
                    query = base.encoded_query
            else:
                if r.encoded_path.startswith("/"):
                    path = normalize_path(r.encoded_path)
                else:
                    path = merge_paths(base.encoded_path, r.encoded_path, base.encoded_host is not None)
                    path = normalize_path(path)
                query = r.encoded_query
            user_info = base.encoded_user_info
            host = base.encoded_host
            port = base.port
        scheme = base.scheme

    if host is None:
        path = correct_no_authority_path(path)

    return base.__class__(
        scheme=scheme,
        encoded_user_info=user_info,
        encoded_host=host,
        port=port,
        encoded_path=path,
        encoded_query=query,
        encoded_fragment=r.encoded_fragment,
    )
