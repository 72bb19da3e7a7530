from dataclasses import dataclass, field
from typing import Optional, Union

LINE_FORMAT = "line_format"
FIELD_COERCION = "field_coercion"


@dataclass(frozen=True)
class InterfaceRecord:
    """Локальный интерфейс. Приватный ключ сюда никогда не попадает."""

    name: str
    public_key: str
    listen_port: str
    fwmark: Optional[str] = None


@dataclass(frozen=True)
class PeerRecord:
    """Пир из формата dump. Отсутствующие хвостовые колонки = None."""

    interface: str
    public_key: str
    endpoint: str
    allowed_ips: str
    latest_handshake: Optional[int] = None
    transfer_rx: Optional[int] = None
    transfer_tx: Optional[int] = None
    persistent_keepalive: Optional[str] = None


@dataclass(frozen=True)
class LegacyPeerRecord:
    """Пир из человекочитаемого `wg show`: все значения строками как есть."""

    interface: str
    public_key: str
    endpoint: Optional[str] = None
    allowed_ips: Optional[str] = None
    latest_handshake: Optional[str] = None
    transfer: Optional[str] = None


Record = Union[InterfaceRecord, PeerRecord, LegacyPeerRecord]


class ParseWarning(Exception):
    """
    Проблема с отдельной строкой вывода. Строка пропускается,
    разбор продолжается. Текст строки не хранится: в нём бывают ключи.
    Наследуется от Exception, чтобы уйти в acc.add_error.
    """

    def __init__(
        self,
        kind: str,
        line_number: int,
        reason: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        interface: Optional[str] = None,
    ):
        self.kind = kind
        self.line_number = line_number
        self.reason = reason
        self.field = field
        self.value = value
        self.interface = interface
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.field is not None:
            return (
                f"line {self.line_number}: {self.reason} "
                f"(field {self.field}={self.value!r})"
            )
        return f"line {self.line_number}: {self.reason}"


@dataclass
class ParseResult:
    records: list[Record] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
