# src/saleor_configurator/stages/base.py
"""
Base comum dos estágios por tipo de entidade.

Um `EntityStage` aplica, para o seu `entity_type`, os resultados CREATE e
UPDATE do DiffSummary. Cada entidade é aplicada de forma independente via
fan-out (`core.engine.fanout`); qualquer falha resulta em
`StageAggregateError` com sucessos e falhas.

Resultados aplicáveis:
    - CREATE sempre
    - UPDATE com ao menos uma mudança não destrutiva
    - DELETE e mudanças destrutivas nunca são executados

Invariantes:
    - `skip` é um predicado puro sobre o DiffSummary
    - Toda entidade aplicada é registrada em `context.record_applied`
"""

from __future__ import annotations

from typing import ClassVar, Dict, List

from saleor_configurator.core.engine.fanout import raise_for_failures, run_batch
from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffChange, DiffOperation, DiffResult, EntityType


def is_applicable(result: DiffResult) -> bool:
    if result.operation == DiffOperation.CREATE:
        return True
    if result.operation == DiffOperation.UPDATE:
        return any(not c.destructive for c in result.changes)
    return False


def applicable_changes(result: DiffResult) -> List[DiffChange]:
    return [c for c in result.changes if not c.destructive]


class EntityStage:
    name: ClassVar[str]
    entity_type: ClassVar[EntityType]

    def applicable(self, context: DeploymentContext) -> List[DiffResult]:
        return [r for r in context.results_for(self.entity_type) if is_applicable(r)]

    def skip(self, context: DeploymentContext) -> bool:
        return not self.applicable(context)

    def planned_entities(self, context: DeploymentContext) -> Dict[str, str]:
        return {r.entity_name: r.operation.value.lower() for r in self.applicable(context)}

    def execute(self, context: DeploymentContext) -> None:
        outcome = run_batch(
            self.applicable(context),
            key=lambda r: r.entity_name,
            action=lambda r: self._apply(context, r),
            max_workers=context.max_workers,
        )
        raise_for_failures(self.name, outcome)

    def _apply(self, context: DeploymentContext, result: DiffResult) -> None:
        if result.operation == DiffOperation.CREATE:
            self.create(context, result)
        else:
            self.update(context, result)
        context.record_applied(
            stage=self.name,
            entity_type=self.entity_type.value,
            entity=result.entity_name,
            operation=result.operation.value.lower(),
        )
        context.log(
            stage=self.name,
            level="info",
            message=f"{self.entity_type.value} applied",
            entity=result.entity_name,
            operation=result.operation.value,
        )

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        raise NotImplementedError

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        raise NotImplementedError
