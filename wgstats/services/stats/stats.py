import threading
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from wgstats.services.command import CommandFailure


@dataclass
class Metric:
    name: str
    tags: dict[str, str]
    fields: dict[str, Any]
    timestamp: int


@dataclass
class Snapshot:
    collected_at: Optional[int] = None
    metrics: list[Metric] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class MemoryAccumulator:
    """Accumulator, складывающий метрики одного цикла в память."""

    def __init__(self):
        self.timestamp = int(time.time())
        self.metrics: list[Metric] = []
        self.errors: list[Exception] = []

    def add_fields(self, measurement, fields, tags):
        self.metrics.append(Metric(measurement, dict(tags), dict(fields), self.timestamp))

    def add_error(self, err):
        self.errors.append(err)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            collected_at=self.timestamp,
            metrics=list(self.metrics),
            errors=[str(e) for e in self.errors],
        )


class StatsStore:
    """Хранит результат последнего успешного цикла сбора."""

    def __init__(self):
        self._lock = threading.Lock()
        self._latest = Snapshot()

    def update(self, snapshot: Snapshot):
        with self._lock:
            self._latest = snapshot

    def latest(self) -> Snapshot:
        with self._lock:
            return self._latest

    def peer_metrics(self, public_key: str) -> list[Metric]:
        return [
            m
            for m in self.latest().metrics
            if m.tags.get("public_key") == public_key and "listen_port" not in m.tags
        ]


def collect_once(collector, store: StatsStore) -> Snapshot:
    """
    Один цикл: gather в новый аккумулятор, результат в store.
    При CommandFailure store обновляется только если из частичного
    вывода что-то разобрали (WG_PARSE_PARTIAL_OUTPUT).
    """
    acc = MemoryAccumulator()
    try:
        collector.gather(acc)
    except CommandFailure:
        if acc.metrics:
            store.update(acc.snapshot())
        raise
    snapshot = acc.snapshot()
    store.update(snapshot)
    return snapshot


store = StatsStore()
