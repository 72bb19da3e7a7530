import pytest

from wgstats.services.stats.emitter import METRIC_NAME, emit, to_metric
from wgstats.services.stats.records import InterfaceRecord, LegacyPeerRecord, PeerRecord


def test_interface_metric_has_tags_only(acc):
    emit(acc, InterfaceRecord("wg0", "pub=", "51820", "0xca6c"))
    assert acc.metrics == [
        (
            METRIC_NAME,
            {},
            {"interface": "wg0", "public_key": "pub=", "listen_port": "51820", "fwmark": "0xca6c"},
        )
    ]


def test_interface_fwmark_off_is_left_out():
    fields, tags = to_metric(InterfaceRecord("wg0", "pub=", "51820", "off"))
    assert "fwmark" not in tags
    assert fields == {}


def test_peer_metric():
    fields, tags = to_metric(
        PeerRecord("wg0", "peer=", "1.2.3.4:51820", "10.0.0.0/24, 10.1.0.0/24", 10, 20, 30, "off")
    )
    assert tags == {
        "interface": "wg0",
        "public_key": "peer=",
        "endpoint": "1.2.3.4:51820",
        "allowed_ips": "10.0.0.0/24, 10.1.0.0/24",
        "persistent_keepalive": "off",
    }
    assert fields == {"latest_handshake": 10, "transfer_rx": 20, "transfer_tx": 30}


def test_peer_missing_columns_are_left_out():
    fields, tags = to_metric(PeerRecord("wg0", "peer=", "(none)", "", latest_handshake=0))
    assert fields == {"latest_handshake": 0}
    assert "persistent_keepalive" not in tags
    assert tags["endpoint"] == "(none)"


def test_legacy_peer_values_stay_strings():
    fields, tags = to_metric(
        LegacyPeerRecord("wg0", "peer=", "1.2.3.4:1", "0.0.0.0/0", "21 seconds ago", "1 KiB received")
    )
    assert fields == {"latest_handshake": "21 seconds ago", "transfer": "1 KiB received"}
    assert tags["allowed_ips"] == "0.0.0.0/0"


def test_unknown_record_type():
    with pytest.raises(TypeError):
        to_metric(object())
