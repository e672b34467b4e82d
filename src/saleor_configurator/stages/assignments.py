# src/saleor_configurator/stages/assignments.py
"""Vínculo de atributos resolvidos a um owner (product type ou page type)."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from saleor_configurator.attributes.resolver import ResolvedAttribute
from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.remote.store import AssignmentRole, AttributeAssignment
from saleor_configurator.schema.model import AttributeInput


def assigned_names(items: Iterable[AttributeInput]) -> List[str]:
    return [item.name for item in items]


def assign(
    context: DeploymentContext,
    owner_id: str,
    resolved: Sequence[ResolvedAttribute],
    role: AssignmentRole,
) -> None:
    if not resolved:
        return
    context.store.assign_attributes(
        owner_id,
        [
            AttributeAssignment(
                attribute_id=r.remote_id,
                variant_selection=r.variant_selection if role == AssignmentRole.VARIANT else False,
            )
            for r in resolved
        ],
        role,
    )
