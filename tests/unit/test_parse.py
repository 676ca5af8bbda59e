import pytest

from uriref import parse
from uriref.errors import UriSyntaxError


def test_parse_empty() -> None:
    uri = parse("")
    assert uri.scheme is None
    assert uri.encoded_user_info is None
    assert uri.user_info is None
    assert uri.encoded_host is None
    assert uri.host is None
    assert uri.port is None
    assert uri.encoded_path == ""
    assert uri.path == ""
    assert uri.path_segments == []
    assert uri.encoded_query is None
    assert uri.query_parameters is None
    assert uri.encoded_fragment is None
    assert uri.fragment is None
    assert not uri.is_opaque
    assert uri.is_relative


def test_parse_empty_query_and_fragment() -> None:
    uri = parse("?#")
    assert uri.encoded_query == ""
    assert uri.query_parameters == {}
    assert uri.encoded_fragment == ""
    assert str(uri) == "?#"


def test_parse_encoded_slash_in_path() -> None:
    uri = parse("%2F")
    assert uri.path is None
    assert uri.path_segments == ["/"]


def test_parse_all_components() -> None:
    uri = parse("http://user:pw@example.org:8080/a/b%20c?x=1&y#frag")
    assert uri.scheme == "http"
    assert uri.encoded_user_info == "user:pw"
    assert uri.encoded_host == "example.org"
    assert uri.port == 8080
    assert uri.encoded_path == "/a/b%20c"
    assert uri.path == "/a/b c"
    assert uri.path_segments == ["a", "b c"]
    assert uri.encoded_query == "x=1&y"
    assert uri.query_parameters == {"x": ["1"], "y": [None]}
    assert uri.encoded_fragment == "frag"
    assert not uri.is_relative
    assert not uri.is_opaque


def test_parse_ipv6_host_with_zone_and_port() -> None:
    uri = parse("http://[fe80::1%25eth0]:80/")
    assert uri.encoded_host == "[fe80::1%25eth0]"
    assert uri.host == "fe80::1%eth0"
    assert uri.port == 80
    assert uri.encoded_path == "/"


def test_parse_ipv6_host_without_port() -> None:
    uri = parse("http://[::1]")
    assert uri.encoded_host == "[::1]"
    assert uri.host == "::1"
    assert uri.port is None
    assert uri.encoded_path == ""


def test_parse_ipvfuture_host() -> None:
    uri = parse("foo://[v7.abc:def]/")
    assert uri.encoded_host == "[v7.abc:def]"


def test_parse_empty_port_is_absent() -> None:
    uri = parse("http://h:/p")
    assert uri.encoded_host == "h"
    assert uri.port is None
    assert str(uri) == "http://h/p"


def test_parse_empty_authority() -> None:
    uri = parse("file:///etc/hosts")
    assert uri.encoded_host == ""
    assert uri.encoded_path == "/etc/hosts"
    assert not uri.is_opaque


def test_parse_network_path_reference() -> None:
    uri = parse("//host")
    assert uri.scheme is None
    assert uri.encoded_host == "host"
    assert uri.encoded_path == ""


def test_parse_opaque() -> None:
    uri = parse("mailto:someone@example.org")
    assert uri.is_opaque
    assert uri.encoded_host is None
    assert uri.encoded_path == "someone@example.org"


def test_colon_after_slash_is_not_a_scheme() -> None:
    uri = parse("a/b:c")
    assert uri.scheme is None
    assert uri.encoded_path == "a/b:c"


def test_query_may_contain_question_marks_and_slashes() -> None:
    uri = parse("a?b/c?d#e?f/g")
    assert uri.encoded_path == "a"
    assert uri.encoded_query == "b/c?d"
    assert uri.encoded_fragment == "e?f/g"


def test_question_mark_in_fragment_is_not_a_query() -> None:
    uri = parse("a#b?c")
    assert uri.encoded_query is None
    assert uri.encoded_fragment == "b?c"


@pytest.mark.parametrize(
    "s",
    [
        "http://example.org",
        "http://example.org/",
        "https://u%20x:p@example.org:8443/a/b;c?d=e&f#g",
        "urn:isbn:0451450523",
        "mailto:a@b",
        "//h/p",
        "/abs/path?q",
        "rel/path#f",
        "./te:st",
        "ftp://[2001:db8::7]/c=GB?objectClass?one",
        "ldap://[2001:db8::1%25en0]:389/",
        "?",
        "#",
        "tel:+1-816-555-1212",
    ],
)
def test_canonical_strings_round_trip(s: str) -> None:
    assert str(parse(s)) == s


@pytest.mark.parametrize(
    "s, reason, index",
    [
        (":a", "Expected scheme", 0),
        ("1http:x", "Illegal character in scheme", 0),
        ("ht~tp:x", "Illegal character in scheme", 2),
        ("http://a b/", "Illegal character in host", 8),
        ("http://h:8x/", "Illegal character in port", 10),
        ("http://a@b@c/", "Illegal character in host", 10),
        ("http://a^b@c/", "Illegal character in userinfo", 8),
        ("/a%zz", "Malformed percent-encoded octet", 2),
        ("/a b", "Illegal character in path", 2),
        ("?a b", "Illegal character in query", 2),
        ("#a#b", "Illegal character in fragment", 2),
        ("http://[::1%0]/", "Expected %25", 11),
        ("http://[::1%25]/", "Empty zone ID", 11),
        ("http://[1::2::3]/", "Multiple IPv6 compressions", 12),
        ("http://[::1/", "Illegal character in host", 7),
        ("http://é/", "Illegal character in host", 7),
    ],
)
def test_parse_errors(s: str, reason: str, index: int) -> None:
    with pytest.raises(UriSyntaxError) as exc_info:
        parse(s)
    assert exc_info.value.input == s
    assert exc_info.value.reason == reason
    assert exc_info.value.index == index


def test_parse_port_too_long() -> None:
    s = "http://h:" + "1" * 5000 + "/"
    with pytest.raises(UriSyntaxError) as exc_info:
        parse(s)
    assert exc_info.value.reason == "Port too long"
    assert exc_info.value.index == 9
