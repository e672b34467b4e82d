# tests/core/engine/test_metrics.py
"""
Testes do coletor de métricas.

Usa o relógio determinístico do conftest (cada leitura avança 100ms).
"""

from datetime import datetime, timedelta, timezone

import pytest

from saleor_configurator.core.engine.metrics import MetricsCollector, ms_between


def test_stage_and_total_durations(clock):
    metrics = MetricsCollector(clock=clock)

    metrics.start_stage("Managing channels")
    assert metrics.end_stage("Managing channels") == 100

    final = metrics.complete()
    assert final.stage_durations == {"Managing channels": 100}
    assert final.duration_ms == 300


def test_complete_freezes_end_time(clock):
    metrics = MetricsCollector(clock=clock)
    first = metrics.complete()
    second = metrics.complete()
    assert first.ended_at == second.ended_at
    assert first.duration_ms == second.duration_ms


def test_end_without_start_is_ignored(clock):
    metrics = MetricsCollector(clock=clock)
    assert metrics.end_stage("never started") == 0
    assert metrics.complete().stage_durations == {}


def test_entity_counts_by_type_and_operation():
    metrics = MetricsCollector()
    metrics.record_entity("Channels", "create")
    metrics.record_entity("Channels", "UPDATE")
    metrics.record_entity("Categories", "create")

    counts = metrics.current().entity_counts

    assert counts["Channels"] == {"created": 1, "updated": 1, "deleted": 0}
    assert counts["Categories"]["created"] == 1


def test_unknown_operation_is_rejected():
    with pytest.raises(ValueError):
        MetricsCollector().record_entity("Channels", "rename")


def test_ms_between_never_negative():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert ms_between(now, now - timedelta(seconds=1)) == 0
    assert ms_between(now.replace(tzinfo=None), now + timedelta(milliseconds=250)) == 250


def test_to_dict_is_serializable(clock):
    data = MetricsCollector(clock=clock).complete().to_dict()
    assert data["startedAt"].startswith("2026-01-01T12:00:00")
    assert set(data) == {"startedAt", "endedAt", "durationMs", "stageDurations", "entityCounts"}
