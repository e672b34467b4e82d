# tests/core/engine/test_deployment_formatter.py
"""Testes da renderização textual e das sugestões de limpeza."""

from datetime import datetime, timezone

from saleor_configurator.core.engine.cleanup import analyze_deployment_cleanup
from saleor_configurator.core.engine.formatter import format_deployment_report, format_deployment_result
from saleor_configurator.core.engine.metrics import DeploymentMetrics
from saleor_configurator.core.engine.results import ResultCollector
from saleor_configurator.core.exceptions import EntityFailure, StageAggregateError
from saleor_configurator.core.pipeline.context import AppliedEntity
from saleor_configurator.diff.types import DiffChange, DiffOperation, DiffResult, DiffSummary, EntityType
from saleor_configurator.schema.model import Channel

START = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
END = datetime(2026, 1, 1, 12, 0, 2, tzinfo=timezone.utc)


def _partial_result():
    collector = ResultCollector()
    collector.succeeded(
        "Updating shop settings",
        duration_ms=1200,
        applied=[AppliedEntity("Updating shop settings", "Shop Settings", "Shop Settings", "update")],
    )
    collector.failed(
        "Managing categories",
        error=StageAggregateError.for_stage(
            "Managing categories",
            [EntityFailure("Shoes", RuntimeError("Parent category 'footwear' not found"))],
            ["Apparel"],
        ),
        duration_ms=300,
        operations={"Apparel": "create", "Shoes": "create"},
    )
    collector.skipped("Managing page types")
    return collector.build(started_at=START, ended_at=END)


def test_partial_result_rendering():
    text = format_deployment_result(_partial_result())

    assert text.startswith("Deployment Partially Completed")
    assert "  2 entities deployed successfully" in text
    assert "  1 entities failed to deploy" in text
    assert "  [ok] Updating shop settings (1.2s)" in text
    assert "  [partial] Managing categories (0.3s)" in text
    assert "    - CREATE: Shoes [failed]" in text
    assert "      Error: Parent category 'footwear' not found" in text
    assert "      Hint: Verify the category exists in your categories configuration" in text
    assert "Skipped Stages (no changes detected):\n  - Managing page types" in text
    assert "Next Steps:" in text
    assert text.endswith("Exit code: 5")


def test_success_rendering():
    collector = ResultCollector()
    collector.skipped("Managing channels")
    text = format_deployment_result(collector.build(started_at=START, ended_at=END))

    assert text.startswith("Deployment Completed Successfully")
    assert "All changes deployed successfully." in text
    assert "Stage Results:" not in text
    assert text.endswith("Exit code: 0")


def test_failed_stage_shows_error_and_hint():
    collector = ResultCollector()
    collector.failed("Managing channels", error=RuntimeError("boom"), duration_ms=0)
    text = format_deployment_result(collector.build(started_at=START, ended_at=END))

    assert text.startswith("Deployment Failed")
    assert "    Error: boom" in text
    assert "    Hint: " in text
    assert text.endswith("Exit code: 1")


def test_report_rendering():
    metrics = DeploymentMetrics(
        started_at=START,
        ended_at=END,
        duration_ms=2000,
        stage_durations={"Managing channels": 1500},
        entity_counts={"Channels": {"created": 2, "updated": 1, "deleted": 0}},
    )
    unapplied = [{"entityType": "Channels", "entityName": "France", "description": "France exists only remotely"}]

    text = format_deployment_report(metrics, unapplied)

    assert "  Duration: 2.0s" in text
    assert "  Managing channels: 1.5s" in text
    assert "  Channels: 2 created, 1 updated" in text
    assert "Not Applied (reported only):\n  - Channels France: France exists only remotely" in text


def _delete(entity_type, name, current=None):
    return DiffResult(operation=DiffOperation.DELETE, entity_type=entity_type, entity_name=name, current=current)


def test_cleanup_suggestions():
    default = Channel(name="Default Channel", slug="default-channel", currency_code="USD", default_country="US")
    summary = DiffSummary(results=(
        _delete(EntityType.CHANNELS, "Default Channel", current=default),
        _delete(EntityType.CATEGORIES, "Old"),
        _delete(EntityType.CATEGORIES, "Older"),
        DiffResult(
            operation=DiffOperation.UPDATE,
            entity_type=EntityType.ATTRIBUTES,
            entity_name="Color",
            changes=(DiffChange(field="values", current=["Red"], desired=[], description="gone", destructive=True),),
        ),
    ))

    suggestions = analyze_deployment_cleanup(summary)

    assert [s.type for s in suggestions] == [
        "default-channel-delete",
        "remote-only-entities",
        "destructive-changes",
    ]
    assert "Old, Older" in suggestions[1].message
    assert suggestions[2].message.startswith("1 removal(s)")


def test_no_cleanup_for_creates_only():
    summary = DiffSummary(results=(
        DiffResult(operation=DiffOperation.CREATE, entity_type=EntityType.CHANNELS, entity_name="Germany"),
    ))
    assert analyze_deployment_cleanup(summary) == []
