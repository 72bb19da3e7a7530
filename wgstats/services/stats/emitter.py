from typing import Any, Protocol

from .records import InterfaceRecord, LegacyPeerRecord, PeerRecord, Record

METRIC_NAME = "wireguard"


class Accumulator(Protocol):
    def add_fields(
        self, measurement: str, fields: dict[str, Any], tags: dict[str, str]
    ) -> None: ...

    def add_error(self, err: Exception) -> None: ...


def _drop_none(values: dict) -> dict:
    return {k: v for k, v in values.items() if v is not None}


def to_metric(record: Record) -> tuple[dict[str, Any], dict[str, str]]:
    """Возвращает (fields, tags) для записи."""
    if isinstance(record, InterfaceRecord):
        tags = {
            "interface": record.name,
            "public_key": record.public_key,
            "listen_port": record.listen_port,
        }
        if record.fwmark and record.fwmark != "off":
            tags["fwmark"] = record.fwmark
        return {}, tags

    if isinstance(record, PeerRecord):
        tags = _drop_none(
            {
                "interface": record.interface,
                "public_key": record.public_key,
                "endpoint": record.endpoint,
                "allowed_ips": record.allowed_ips,
                "persistent_keepalive": record.persistent_keepalive,
            }
        )
        fields = _drop_none(
            {
                "latest_handshake": record.latest_handshake,
                "transfer_rx": record.transfer_rx,
                "transfer_tx": record.transfer_tx,
            }
        )
        return fields, tags

    if isinstance(record, LegacyPeerRecord):
        tags = _drop_none(
            {
                "interface": record.interface,
                "public_key": record.public_key,
                "endpoint": record.endpoint,
                "allowed_ips": record.allowed_ips,
            }
        )
        fields = _drop_none(
            {
                "latest_handshake": record.latest_handshake,
                "transfer": record.transfer,
            }
        )
        return fields, tags

    raise TypeError(f"unsupported record type: {type(record).__name__}")


def emit(acc: Accumulator, record: Record) -> None:
    fields, tags = to_metric(record)
    acc.add_fields(METRIC_NAME, fields, tags)
