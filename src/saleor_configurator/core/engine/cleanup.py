# src/saleor_configurator/core/engine/cleanup.py
"""
Sugestões de limpeza pós-deploy.

Analisa o DiffSummary e produz sugestões acionáveis para o operador,
sem I/O e sem efeitos remotos. Deleções nunca são executadas pelo
deploy; estas sugestões indicam como silenciá-las ou resolvê-las.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from saleor_configurator.diff.types import DiffOperation, DiffSummary, EntityType

DEFAULT_CHANNEL_SLUG = "default-channel"


@dataclass(frozen=True)
class CleanupSuggestion:
    type: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "message": self.message}


def analyze_deployment_cleanup(summary: DiffSummary) -> List[CleanupSuggestion]:
    suggestions: List[CleanupSuggestion] = []

    deletes = [r for r in summary.results if r.operation == DiffOperation.DELETE]

    default_channel = [
        r
        for r in deletes
        if r.entity_type == EntityType.CHANNELS
        and (
            getattr(r.current, "slug", None) == DEFAULT_CHANNEL_SLUG
            or r.entity_name == DEFAULT_CHANNEL_SLUG
        )
    ]
    if default_channel:
        suggestions.append(
            CleanupSuggestion(
                type="default-channel-delete",
                message=(
                    f"'{DEFAULT_CHANNEL_SLUG}' appears as a deletion; add a stub in config to "
                    f"silence (slug: {DEFAULT_CHANNEL_SLUG}, isActive: false)"
                ),
            )
        )

    others = [r for r in deletes if r not in default_channel]
    if others:
        by_type: Dict[str, List[str]] = {}
        for r in others:
            by_type.setdefault(r.entity_type.value, []).append(r.entity_name)
        for entity_type, names in by_type.items():
            suggestions.append(
                CleanupSuggestion(
                    type="remote-only-entities",
                    message=(
                        f"{entity_type}: {len(names)} entit{'y' if len(names) == 1 else 'ies'} "
                        f"exist only remotely ({', '.join(names)}); add them to the configuration "
                        f"or remove them manually"
                    ),
                )
            )

    destructive = sum(len(r.destructive_changes) for r in summary.results)
    if destructive:
        suggestions.append(
            CleanupSuggestion(
                type="destructive-changes",
                message=(
                    f"{destructive} removal(s) inside existing entities were not applied "
                    f"(attribute values, assignments or subcategories present only remotely)"
                ),
            )
        )

    return suggestions
