# src/saleor_configurator/core/engine/metrics.py
"""
Métricas de uma run de deployment.

O `MetricsCollector` registra o instante de início e fim de cada estágio,
a duração total da run e a contagem de entidades aplicadas por tipo e
operação. Os timestamps seguem a convenção UTC do projeto.

Invariantes:
    - Durações são inteiros em milissegundos e nunca negativas
    - `end_stage` sem `start_stage` correspondente é ignorado
    - `complete()` congela o instante final; chamadas posteriores o reutilizam
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

Clock = Callable[[], datetime]

_OPERATION_COUNTERS = {"create": "created", "update": "updated", "delete": "deleted"}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def ms_between(start: datetime, end: datetime) -> int:
    """Duração em milissegundos entre dois instantes (truncada em zero)."""
    delta = _ensure_tzaware_utc(end) - _ensure_tzaware_utc(start)
    return max(0, int(delta.total_seconds() * 1000))


@dataclass(frozen=True)
class DeploymentMetrics:
    started_at: datetime
    ended_at: datetime
    duration_ms: int
    stage_durations: Dict[str, int] = field(default_factory=dict)
    entity_counts: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startedAt": _ensure_tzaware_utc(self.started_at).isoformat(),
            "endedAt": _ensure_tzaware_utc(self.ended_at).isoformat(),
            "durationMs": self.duration_ms,
            "stageDurations": dict(self.stage_durations),
            "entityCounts": {k: dict(v) for k, v in self.entity_counts.items()},
        }


class MetricsCollector:
    def __init__(self, *, clock: Optional[Clock] = None, started_at: Optional[datetime] = None):
        self._clock: Clock = clock or utc_now
        self.started_at: datetime = started_at or self._clock()
        self._ended_at: Optional[datetime] = None
        self._stage_starts: Dict[str, datetime] = {}
        self._stage_durations: Dict[str, int] = {}
        self._entity_counts: Dict[str, Dict[str, int]] = {}
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return self._clock()

    def start_stage(self, name: str) -> None:
        self._stage_starts[name] = self._clock()

    def end_stage(self, name: str) -> int:
        start = self._stage_starts.pop(name, None)
        if start is None:
            return 0
        duration = ms_between(start, self._clock())
        self._stage_durations[name] = duration
        return duration

    def record_entity(self, entity_type: str, operation: str) -> None:
        """
        Contabiliza uma entidade aplicada.

        Raises:
            ValueError: operação fora de create/update/delete.
        """
        counter = _OPERATION_COUNTERS.get(operation.lower())
        if counter is None:
            raise ValueError(f"Unknown operation: {operation}")
        with self._lock:
            counts = self._entity_counts.setdefault(
                entity_type, {"created": 0, "updated": 0, "deleted": 0}
            )
            counts[counter] += 1

    def _snapshot(self, ended_at: datetime) -> DeploymentMetrics:
        with self._lock:
            entity_counts = {k: dict(v) for k, v in self._entity_counts.items()}
        return DeploymentMetrics(
            started_at=self.started_at,
            ended_at=ended_at,
            duration_ms=ms_between(self.started_at, ended_at),
            stage_durations=dict(self._stage_durations),
            entity_counts=entity_counts,
        )

    def complete(self) -> DeploymentMetrics:
        if self._ended_at is None:
            self._ended_at = self._clock()
        return self._snapshot(self._ended_at)

    def current(self) -> DeploymentMetrics:
        return self._snapshot(self._ended_at or self._clock())
