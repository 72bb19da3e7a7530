"""Tests for the human-readable `wg show` parser."""

from wgstats.services.stats.parser import parse_wg_show, split_after_colon
from wgstats.services.stats.records import InterfaceRecord, LegacyPeerRecord


def test_fixture_blocks(show_output):
    result = parse_wg_show(show_output)
    interfaces = [r for r in result.records if isinstance(r, InterfaceRecord)]
    peers = [r for r in result.records if isinstance(r, LegacyPeerRecord)]

    assert [i.name for i in interfaces] == ["home", "remote"]
    assert interfaces[0].public_key == "p3p3Uzj50FS7sdrTEviJwlsFaUu1TUdBsp+VZUdzm1I="
    assert interfaces[0].listen_port == "12345"
    assert interfaces[0].fwmark == "0xca6c"

    assert [p.interface for p in peers] == ["home", "remote"]
    home = peers[0]
    assert home.endpoint == "198.51.100.1:54321"
    assert home.allowed_ips == "192.168.2.0/24, 192.168.1.0/24"
    assert home.latest_handshake == "21 seconds ago"
    assert home.transfer == "74.90 KiB received, 98.13 KiB sent"
    assert peers[1].latest_handshake == "1 minute, 54 seconds ago"


def test_private_key_is_not_kept(show_output):
    result = parse_wg_show(show_output)
    assert "(hidden)" not in repr(result.records)


def test_reordered_and_unknown_lines_inside_block():
    raw = "\n".join(
        [
            "interface: wg0",
            "  listening port: 51820",
            "  garbage without colon",
            "  public key: abc=",
            "  something: else",
        ]
    )
    result = parse_wg_show(raw)
    (iface,) = result.records
    assert iface.public_key == "abc="
    assert iface.listen_port == "51820"
    assert iface.fwmark is None


def test_short_peer_block_does_not_swallow_next_peer():
    raw = "\n".join(
        [
            "interface: wg0",
            "  public key: abc=",
            "peer: first=",
            "  allowed ips: 10.0.0.2/32",
            "peer: second=",
            "  endpoint: 1.2.3.4:51820",
        ]
    )
    result = parse_wg_show(raw)
    peers = [r for r in result.records if isinstance(r, LegacyPeerRecord)]
    assert [p.public_key for p in peers] == ["first=", "second="]
    assert peers[0].endpoint is None
    assert peers[1].endpoint == "1.2.3.4:51820"


def test_peer_before_interface_is_warned():
    result = parse_wg_show("peer: orphan=\n  endpoint: 1.2.3.4:1\n")
    assert result.records == []
    assert len(result.warnings) == 1


def test_split_after_colon():
    assert split_after_colon("  endpoint: [::1]:51820") == ("endpoint", "[::1]:51820")
    assert split_after_colon("no colon here") is None
