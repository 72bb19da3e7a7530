import re
from typing import Callable, Optional, Union

from .records import (
    FIELD_COERCION,
    LINE_FORMAT,
    InterfaceRecord,
    LegacyPeerRecord,
    ParseResult,
    ParseWarning,
    PeerRecord,
)

INTERFACE_FIELDS = 5
PEER_MIN_FIELDS = 6
PEER_MAX_FIELDS = 9

UINT64_MAX = 2**64 - 1
_DIGITS_RE = re.compile(r"[0-9]+")

# ключевые слова legacy-блоков
LEGACY_BLOCK_LINES = 4
LEGACY_INTERFACE_KEYS = ("public key", "listening port", "fwmark")
LEGACY_PEER_KEYS = ("endpoint", "allowed ips", "latest handshake", "transfer")


def _decode(raw: Union[bytes, str]) -> list[str]:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    return [line.rstrip("\r") for line in raw.split("\n")]


def parse_uint64(value: str) -> Optional[int]:
    """Строгий разбор беззнакового 64-битного числа в десятичной записи."""
    if not _DIGITS_RE.fullmatch(value):
        return None
    number = int(value)
    if number > UINT64_MAX:
        return None
    return number


def _column(parts: list[str], index: int) -> Optional[str]:
    return parts[index] if index < len(parts) else None


def _parse_dump_peer(
    parts: list[str], line_number: int
) -> Union[PeerRecord, ParseWarning]:
    # [iface, pubkey, psk, endpoint, allowed_ips, handshake, rx, tx, keepalive]
    numbers = {}
    for name, index in (("latest_handshake", 5), ("transfer_rx", 6), ("transfer_tx", 7)):
        raw_value = _column(parts, index)
        if raw_value is None:
            numbers[name] = None
            continue
        number = parse_uint64(raw_value)
        if number is None:
            return ParseWarning(
                FIELD_COERCION,
                line_number,
                "not an unsigned 64-bit integer",
                field=name,
                value=raw_value,
                interface=parts[0],
            )
        numbers[name] = number

    return PeerRecord(
        interface=parts[0],
        public_key=parts[1],
        endpoint=parts[3],
        allowed_ips=parts[4],
        persistent_keepalive=_column(parts, 8),
        **numbers,
    )


def parse_wg_dump(raw: Union[bytes, str]) -> ParseResult:
    """
    Разбирает вывод `wg show all dump`.

    5 колонок: интерфейс (приватный ключ отбрасывается).
    6-9 колонок: пир (preshared key отбрасывается).
    Всё остальное пропускается с предупреждением, как и пиры с
    нечисловыми счётчиками и пиры без предшествующего интерфейса.
    """
    result = ParseResult()
    seen_interfaces: set[str] = set()

    for line_number, line in enumerate(_decode(raw), start=1):
        if not line.strip():
            continue

        parts = line.split("\t")

        if len(parts) == INTERFACE_FIELDS:
            name, _private_key, public_key, listen_port, fwmark = parts
            seen_interfaces.add(name)
            result.records.append(
                InterfaceRecord(
                    name=name,
                    public_key=public_key,
                    listen_port=listen_port,
                    fwmark=fwmark,
                )
            )
            continue

        if not PEER_MIN_FIELDS <= len(parts) <= PEER_MAX_FIELDS:
            result.warnings.append(
                ParseWarning(
                    LINE_FORMAT,
                    line_number,
                    f"unexpected number of fields: {len(parts)}",
                )
            )
            continue

        if parts[0] not in seen_interfaces:
            result.warnings.append(
                ParseWarning(
                    LINE_FORMAT,
                    line_number,
                    f"peer for unknown interface {parts[0]!r}",
                    interface=parts[0],
                )
            )
            continue

        peer = _parse_dump_peer(parts, line_number)
        if isinstance(peer, ParseWarning):
            result.warnings.append(peer)
        else:
            result.records.append(peer)

    return result


def split_after_colon(line: str) -> Optional[tuple[str, str]]:
    """'  public key: abc' -> ('public key', 'abc'); без двоеточия -> None."""
    if ":" not in line:
        return None
    stat, value = line.split(":", 1)
    return stat.strip(), value.strip()


def _is_block_start(stat: str) -> bool:
    return stat.startswith("interface") or stat.startswith("peer")


def parse_wg_show(raw: Union[bytes, str]) -> ParseResult:
    """
    Разбирает человекочитаемый `wg show`.

    После строки `interface:` или `peer:` читаются следующие 4 строки,
    значения сопоставляются по префиксу ключа. Непонятные строки внутри
    блока пропускаются по одной, новый заголовок блока завершает текущий.
    Числа не разбираются.
    """
    result = ParseResult()
    lines = _decode(raw)
    interface: Optional[str] = None
    i = 0

    while i < len(lines):
        line_number, line = i + 1, lines[i]
        i += 1

        pair = split_after_colon(line)
        if pair is None or not _is_block_start(pair[0]):
            continue
        stat, value = pair

        block: dict[str, str] = {}
        keys = LEGACY_INTERFACE_KEYS if stat.startswith("interface") else LEGACY_PEER_KEYS
        consumed = 0
        while consumed < LEGACY_BLOCK_LINES and i < len(lines):
            inner = split_after_colon(lines[i])
            if inner is not None and _is_block_start(inner[0]):
                break
            i += 1
            consumed += 1
            if inner is None:
                continue
            for key in keys:
                if inner[0].startswith(key):
                    block[key] = inner[1]
                    break

        if stat.startswith("interface"):
            interface = value
            result.records.append(
                InterfaceRecord(
                    name=value,
                    public_key=block.get("public key", ""),
                    listen_port=block.get("listening port", ""),
                    fwmark=block.get("fwmark"),
                )
            )
            continue

        if interface is None:
            result.warnings.append(
                ParseWarning(LINE_FORMAT, line_number, "peer before any interface")
            )
            continue

        result.records.append(
            LegacyPeerRecord(
                interface=interface,
                public_key=value,
                endpoint=block.get("endpoint"),
                allowed_ips=block.get("allowed ips"),
                latest_handshake=block.get("latest handshake"),
                transfer=block.get("transfer"),
            )
        )

    return result


PARSERS: dict[str, Callable[[Union[bytes, str]], ParseResult]] = {
    "dump": parse_wg_dump,
    "show": parse_wg_show,
}
