import pytest

from uriref.errors import UriSyntaxError
from uriref.hosts import check_dns_host, check_ip_literal, check_ipv6_address, check_ipvfuture, host_to_ascii, host_to_unicode


@pytest.mark.parametrize(
    "address",
    [
        "::",
        "1234:5678:90AB:CDEF:1234:5678:90AB:CDEF",
        "0:a:b:c:d:e:f:0",
        "::0:0:0:0:0:0:0",
        "0:0:0:0:0:0:0::",
        "a:b::c:d",
        "::cd",
        "FFFF::1.1.1.1",
        "::1.1.1.1",
        "a:b:c:d:e::1.1.1.1",
        "a:b::255.133.244.255",
        "1:2:3:4:5:6:1.2.3.4",
    ],
)
def test_legal_ipv6_addresses(address: str) -> None:
    check_ipv6_address(address, 0, len(address), False)


@pytest.mark.parametrize(
    "address",
    [
        ":0",
        "0:",
        ":::",
        "::cd::",
        "0:a:b:c:d:e:f:g",
        "0:a:b:c:d:e:f:0:0",
        "a:b::255.255.255.256",
        "a:b:c:d:e:f::1.1.1.1",
        "a:b::1.2.3.a",
        "a:b::01.2.3.4",
        "aaaaa::",
        "::111.111.111",
        "::1.1.1.1.1",
        "::1.1.1",
        "1:2:3:4:5:6:7",
        "1.2.3.4",
        ":",
    ],
)
def test_illegal_ipv6_addresses(address: str) -> None:
    with pytest.raises(UriSyntaxError):
        check_ipv6_address(address, 0, len(address), False)


@pytest.mark.parametrize("zone_id", ["0", "1", "en1", "eth0", "0a-.~_%20"])
def test_legal_zone_ids(zone_id: str) -> None:
    raw = f"::%{zone_id}"
    check_ipv6_address(raw, 0, len(raw), False)
    encoded = f"::%25{zone_id}"
    check_ipv6_address(encoded, 0, len(encoded), True)


@pytest.mark.parametrize("zone_id", ["", "<>", "a^b", "%2"])
def test_illegal_encoded_zone_ids(zone_id: str) -> None:
    encoded = f"::%25{zone_id}"
    with pytest.raises(UriSyntaxError):
        check_ipv6_address(encoded, 0, len(encoded), True)


def test_encoded_zone_id_requires_pct_25() -> None:
    with pytest.raises(UriSyntaxError) as exc_info:
        check_ipv6_address("::%0", 0, 4, True)
    assert exc_info.value.reason == "Expected %25"
    assert exc_info.value.index == 2
    assert str(exc_info.value) == "Expected %25 at index 2: ::%0"


def test_ipv6_errors_report_position_in_whole_string() -> None:
    s = "http://[aaaaa::]/"
    with pytest.raises(UriSyntaxError) as exc_info:
        check_ipv6_address(s, 8, 15, True)
    assert exc_info.value.reason == "IPv6 hex sequence too long"
    assert exc_info.value.index == 8


def test_ipv6_address_length_limits() -> None:
    with pytest.raises(UriSyntaxError, match="too short"):
        check_ipv6_address("1", 0, 1, False)
    address = "ffff:ffff:ffff:ffff:ffff:ffff:255.255.255.2555"
    with pytest.raises(UriSyntaxError, match="too long"):
        check_ipv6_address(address, 0, len(address), False)


def test_multiple_compressions_reason() -> None:
    with pytest.raises(UriSyntaxError) as exc_info:
        check_ipv6_address("1::2::3", 0, 7, False)
    assert exc_info.value.reason == "Multiple IPv6 compressions"
    assert exc_info.value.index == 4


@pytest.mark.parametrize("literal", ["v1.fe80::a+en1", "VF.x", "v1a.:"])
def test_legal_ipvfuture(literal: str) -> None:
    check_ipvfuture(literal, 0, len(literal))
    check_ip_literal(literal, 0, len(literal), True)


@pytest.mark.parametrize("literal", ["v.abc", "v1abc", "v1.", "v1.a b", "w1.a"])
def test_illegal_ipvfuture(literal: str) -> None:
    with pytest.raises(UriSyntaxError):
        check_ipvfuture(literal, 0, len(literal))


@pytest.mark.parametrize("host", ["a", "a.", "A-a", "a-A.B-b", "a" * 63, ("a" * 63 + ".") * 3 + "a" * 61])
def test_dns_compatible_hosts(host: str) -> None:
    check_dns_host(host)


@pytest.mark.parametrize(
    "host",
    ["", ".", ".a", "a-", "-a", "a.-a.a", "a.a-.a", "a..a", "a@a", "a_a.com", "\x00" * 254, "a" * 64, "a.."],
)
def test_dns_incompatible_hosts(host: str) -> None:
    with pytest.raises(UriSyntaxError):
        check_dns_host(host)


def test_idna_bridge() -> None:
    assert host_to_ascii("bücher.example") == "xn--bcher-kva.example"
    assert host_to_ascii("Example.COM") == "example.com"
    assert host_to_unicode("xn--bcher-kva.example") == "bücher.example"
    assert host_to_unicode("Example.COM") == "Example.COM"
