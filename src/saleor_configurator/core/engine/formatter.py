# src/saleor_configurator/core/engine/formatter.py
"""
Renderização dos resultados de deployment.

Duas saídas:
    - `format_deployment_result`: resumo humano por estágio, com erros e
      sugestões por entidade
    - `format_deployment_report`: duração, tempos por estágio, mudanças
      aplicadas e mudanças não aplicadas (deleções)

A forma serializável é obtida pelos `to_dict()` dos próprios tipos.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from saleor_configurator.core.pipeline.types import (
    DeploymentResult,
    OverallStatus,
    StageResult,
    StageStatus,
)

from .metrics import DeploymentMetrics
from .results import get_exit_code

_STATUS_TEXT = {
    OverallStatus.SUCCESS: "Completed Successfully",
    OverallStatus.PARTIAL: "Partially Completed",
    OverallStatus.FAILED: "Failed",
}

_STAGE_MARK = {
    StageStatus.SUCCESS: "[ok]",
    StageStatus.PARTIAL: "[partial]",
    StageStatus.FAILED: "[failed]",
    StageStatus.SKIPPED: "[skipped]",
}


def _seconds(ms: int) -> str:
    return f"{ms / 1000:.1f}s"


def _stage_lines(stage: StageResult) -> List[str]:
    lines = [f"  {_STAGE_MARK[stage.status]} {stage.name} ({_seconds(stage.duration_ms)})"]

    if stage.entities:
        for entity in stage.entities:
            op = f"{entity.operation.upper()}: " if entity.operation else ""
            mark = "ok" if entity.success else "failed"
            lines.append(f"    - {op}{entity.name} [{mark}]")
            if entity.error:
                lines.append(f"      Error: {entity.error}")
            for suggestion in entity.suggestions:
                lines.append(f"      Hint: {suggestion}")
        if stage.status != StageStatus.SUCCESS and stage.error_message:
            lines.append(f"    {stage.error_message}")
    elif stage.error_message:
        lines.append(f"    Error: {stage.error_message}")
        if stage.error is not None and stage.error.hint:
            lines.append(f"    Hint: {stage.error.hint}")
    return lines


def format_deployment_result(result: DeploymentResult) -> str:
    lines: List[str] = [f"Deployment {_STATUS_TEXT[result.overall_status]}", ""]

    if result.total_operations > 0:
        lines.append("Summary:")
        lines.append(f"  {result.successful_operations} entities deployed successfully")
        if result.failed_operations:
            lines.append(f"  {result.failed_operations} entities failed to deploy")
        lines.append("")

    processed = [s for s in result.stages if s.status != StageStatus.SKIPPED]
    if processed:
        lines.append("Stage Results:")
        for stage in processed:
            lines.extend(_stage_lines(stage))
        lines.append("")

    skipped = [s for s in result.stages if s.status == StageStatus.SKIPPED]
    if skipped:
        lines.append("Skipped Stages (no changes detected):")
        lines.extend(f"  - {s.name}" for s in skipped)
        lines.append("")

    if result.overall_status == OverallStatus.PARTIAL:
        lines.append("Next Steps:")
        lines.append("  - Review the failed items above")
        lines.append("  - Fix the issues and run deploy again")
        lines.append("  - Run diff to verify the current state")
    elif result.overall_status == OverallStatus.SUCCESS:
        lines.append("All changes deployed successfully.")

    lines.append(f"Exit code: {int(get_exit_code(result))}")
    return "\n".join(lines)


def format_deployment_report(
    metrics: DeploymentMetrics,
    unapplied: Optional[Sequence[Dict[str, Any]]] = None,
) -> str:
    lines: List[str] = ["Deployment Report", f"  Duration: {_seconds(metrics.duration_ms)}"]

    if metrics.stage_durations:
        lines.append("")
        lines.append("Stage Timing:")
        for name, ms in metrics.stage_durations.items():
            lines.append(f"  {name}: {_seconds(ms)}")

    applied = {k: v for k, v in metrics.entity_counts.items() if any(v.values())}
    if applied:
        lines.append("")
        lines.append("Changes Applied:")
        for entity_type, counts in applied.items():
            parts = [f"{n} {op}" for op, n in counts.items() if n]
            lines.append(f"  {entity_type}: {', '.join(parts)}")

    if unapplied:
        lines.append("")
        lines.append("Not Applied (reported only):")
        for item in unapplied:
            lines.append(
                f"  - {item['entityType']} {item['entityName']}: {item['description']}"
            )

    return "\n".join(lines)
