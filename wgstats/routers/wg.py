from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from wgstats.core.config import settings
from wgstats.deps.auth import require_scope
from wgstats.services.command import CommandFailure
from wgstats.services.stats.collector import WireguardCollector
from wgstats.services.stats.stats import Snapshot, StatsStore, collect_once, store

router = APIRouter(tags=["wireguard"])


class MetricOut(BaseModel):
    name: str
    tags: dict[str, str]
    fields: dict[str, Any]
    timestamp: int


class SnapshotOut(BaseModel):
    collected_at: Optional[int]
    metrics: list[MetricOut]
    errors: list[str]


def get_store() -> StatsStore:
    return store


def get_collector() -> WireguardCollector:
    return WireguardCollector.from_settings(settings)


def _snapshot_out(snapshot: Snapshot) -> SnapshotOut:
    return SnapshotOut(
        collected_at=snapshot.collected_at,
        metrics=[MetricOut(**vars(m)) for m in snapshot.metrics],
        errors=snapshot.errors,
    )


@router.get("/metrics", response_model=SnapshotOut)
def metrics(
    stats: StatsStore = Depends(get_store),
    user=Depends(require_scope("metrics:read")),
):
    """
    Метрики последнего успешного цикла сбора
    """
    return _snapshot_out(stats.latest())


@router.get("/metrics/peers/{public_key:path}", response_model=list[MetricOut])
def peer_metrics(
    public_key: str,
    stats: StatsStore = Depends(get_store),
    user=Depends(require_scope("metrics:read")),
):
    """
    Метрики одного пира (ключи base64 могут содержать '/')
    """
    found = stats.peer_metrics(public_key)
    if not found:
        raise HTTPException(status_code=404, detail="Пир не найден")
    return [MetricOut(**vars(m)) for m in found]


@router.post("/gather", response_model=SnapshotOut)
def gather(
    stats: StatsStore = Depends(get_store),
    collector: WireguardCollector = Depends(get_collector),
    user=Depends(require_scope("metrics:gather")),
):
    """
    Запустить цикл сбора прямо сейчас
    """
    try:
        snapshot = collect_once(collector, stats)
    except CommandFailure as e:
        raise HTTPException(status_code=502, detail=str(e))
    return _snapshot_out(snapshot)
