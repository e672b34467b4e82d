# src/saleor_configurator/diff/formatter.py
"""Renderização textual do DiffSummary (diff pré-deploy)."""

from __future__ import annotations

from typing import Dict, List

from .types import DiffOperation, DiffResult, DiffSummary


_SYMBOL = {
    DiffOperation.CREATE: "+",
    DiffOperation.UPDATE: "~",
    DiffOperation.DELETE: "-",
}


def format_diff_summary(summary: DiffSummary) -> str:
    if not summary.has_changes:
        return "No differences found. Local configuration matches the remote store."

    grouped: Dict[str, List[DiffResult]] = {}
    for result in summary.results:
        grouped.setdefault(result.entity_type.value, []).append(result)

    lines: List[str] = ["Configuration diff", ""]
    for entity_type, results in grouped.items():
        lines.append(f"{entity_type}:")
        for r in results:
            lines.append(f"  {_SYMBOL[r.operation]} {r.operation.value} {r.entity_name}")
            for change in r.changes:
                marker = " (not applied)" if change.destructive else ""
                lines.append(f"      {change.description}{marker}")
        lines.append("")

    lines.append(
        f"Total: {summary.total_changes} change(s) "
        f"({summary.creates} create, {summary.updates} update, {summary.deletes} delete)"
    )
    if summary.deletes:
        lines.append("Deletions are reported only and are never executed by deploy.")
    return "\n".join(lines)
