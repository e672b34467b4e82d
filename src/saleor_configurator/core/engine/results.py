# src/saleor_configurator/core/engine/results.py
"""
Consolidação de resultados de deployment.

Responsabilidades:
    - Construir `StageResult` a partir do desfecho de cada estágio
      (sucesso, falha simples, falha agregada ou skip)
    - Extrair o detalhamento por entidade de um `StageAggregateError`
    - Derivar o `OverallStatus` da run
    - Mapear o status consolidado para o exit code estável

Regras de status por estágio:
    - Exceção comum → FAILED, `failure_count` = entidades planejadas (ou 1)
    - StageAggregateError com sucessos → PARTIAL
    - StageAggregateError sem sucessos → FAILED
    - Nenhuma exceção → SUCCESS, contando as entidades registradas

Regras de status consolidado (estágios SKIPPED são ignorados):
    - nenhum estágio processado → SUCCESS
    - todos FAILED → FAILED
    - todos SUCCESS → SUCCESS
    - qualquer outra combinação → PARTIAL
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from saleor_configurator.core.errors import ErrorPayload, stage_execution_error
from saleor_configurator.core.exceptions import (
    ExitCode,
    StageAggregateError,
    UnexpectedError,
    to_deployment_error,
)
from saleor_configurator.core.pipeline.context import AppliedEntity
from saleor_configurator.core.pipeline.types import (
    DeploymentResult,
    EntityResult,
    OverallStatus,
    StageResult,
    StageStatus,
)

from .metrics import ms_between


# -----------------------------
# Sugestões por entidade
# -----------------------------
_NOT_FOUND_SUGGESTIONS: List[Tuple[Tuple[str, ...], Tuple[str, ...]]] = [
    (
        ("category",),
        (
            "Verify the category exists in your categories configuration",
            "Check category slug spelling and ensure it matches exactly",
        ),
    ),
    (
        ("product type", "producttype"),
        (
            "Verify the product type exists in your productTypes configuration",
            "Check product type name spelling and ensure it matches exactly",
        ),
    ),
    (
        ("page type", "pagetype"),
        (
            "Verify the page type exists in your pageTypes configuration",
            "Check page type name spelling and ensure it matches exactly",
        ),
    ),
    (
        ("channel",),
        (
            "Verify the channel exists in your channels configuration",
            "Check channel slug spelling and ensure it matches exactly",
        ),
    ),
    (
        ("attribute",),
        (
            "Declare the attribute in productAttributes or contentAttributes",
            "Check attribute name spelling and ensure it matches exactly",
        ),
    ),
]


def suggestions_for(message: str) -> Tuple[str, ...]:
    """Sugestões acionáveis para mensagens do tipo "<entidade> ... not found"."""
    lowered = (message or "").lower()
    if "not found" not in lowered and "could not be resolved" not in lowered:
        return ()

    suggestions: List[str] = []
    for markers, hints in _NOT_FOUND_SUGGESTIONS:
        if any(m in lowered for m in markers):
            suggestions.extend(hints)
    return tuple(suggestions)


def extract_entity_results(
    error: BaseException,
    operations: Optional[Mapping[str, str]] = None,
) -> Tuple[EntityResult, ...]:
    """
    Detalhamento por entidade de uma falha de estágio.

    Apenas `StageAggregateError` carrega essa informação; qualquer outra
    exceção resulta em tupla vazia.
    """
    if not isinstance(error, StageAggregateError):
        return ()

    ops = operations or {}
    results: List[EntityResult] = [
        EntityResult(name=name, success=True, operation=ops.get(name))
        for name in error.successes
    ]
    for failure in error.failures:
        results.append(
            EntityResult(
                name=failure.entity,
                success=False,
                error=failure.message,
                suggestions=suggestions_for(failure.message),
                operation=ops.get(failure.entity),
            )
        )
    return tuple(results)


def error_payload_for(exc: BaseException, *, stage: str) -> ErrorPayload:
    """Converte a exceção de um estágio em `ErrorPayload` (sem stack trace)."""
    classified = to_deployment_error(exc)
    if isinstance(classified, UnexpectedError):
        return stage_execution_error(
            stage=stage,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc) or None,
        )
    payload = classified.to_payload()
    details = dict(payload.details)
    details.setdefault("stage", stage)
    return ErrorPayload(
        type=payload.type,
        message=payload.message,
        details=details,
        hint=payload.hint,
        decision_required=payload.decision_required,
    )


# -----------------------------
# Status consolidado / exit code
# -----------------------------
def determine_overall_status(stages: Iterable[StageResult]) -> OverallStatus:
    processed = [s for s in stages if s.status != StageStatus.SKIPPED]
    if not processed:
        return OverallStatus.SUCCESS
    if all(s.status == StageStatus.FAILED for s in processed):
        return OverallStatus.FAILED
    if all(s.status == StageStatus.SUCCESS for s in processed):
        return OverallStatus.SUCCESS
    return OverallStatus.PARTIAL


_EXIT_CODES: Dict[OverallStatus, ExitCode] = {
    OverallStatus.SUCCESS: ExitCode.SUCCESS,
    OverallStatus.PARTIAL: ExitCode.PARTIAL_FAILURE,
    OverallStatus.FAILED: ExitCode.UNEXPECTED,
}


def get_exit_code(status: Any) -> ExitCode:
    """
    Exit code estável a partir do status consolidado.

    Aceita `OverallStatus`, seu valor textual ou um `DeploymentResult`.
    """
    if isinstance(status, DeploymentResult):
        status = status.overall_status
    return _EXIT_CODES[OverallStatus(status)]


# -----------------------------
# Coletor
# -----------------------------
class ResultCollector:
    """Acumula `StageResult` na ordem de execução e produz o `DeploymentResult`."""

    def __init__(self) -> None:
        self._stages: List[StageResult] = []

    @property
    def stages(self) -> Tuple[StageResult, ...]:
        return tuple(self._stages)

    def add(self, result: StageResult) -> StageResult:
        self._stages.append(result)
        return result

    def skipped(self, name: str) -> StageResult:
        return self.add(StageResult(name=name, status=StageStatus.SKIPPED))

    def succeeded(
        self, name: str, *, duration_ms: int, applied: Sequence[AppliedEntity] = ()
    ) -> StageResult:
        entities = tuple(
            EntityResult(name=a.entity, success=True, operation=a.operation) for a in applied
        )
        return self.add(
            StageResult(
                name=name,
                status=StageStatus.SUCCESS,
                duration_ms=duration_ms,
                success_count=len(entities),
                failure_count=0,
                total_count=len(entities),
                entities=entities,
            )
        )

    def failed(
        self,
        name: str,
        *,
        error: BaseException,
        duration_ms: int,
        planned: Sequence[str] = (),
        operations: Optional[Mapping[str, str]] = None,
    ) -> StageResult:
        payload = error_payload_for(error, stage=name)

        if isinstance(error, StageAggregateError):
            entities = extract_entity_results(error, operations)
            successes = len(error.successes)
            failures = len(error.failures)
            status = StageStatus.PARTIAL if successes > 0 else StageStatus.FAILED
            return self.add(
                StageResult(
                    name=name,
                    status=status,
                    duration_ms=duration_ms,
                    success_count=successes,
                    failure_count=failures,
                    total_count=successes + failures,
                    entities=entities,
                    error=payload,
                )
            )

        failures = len(planned) or 1
        return self.add(
            StageResult(
                name=name,
                status=StageStatus.FAILED,
                duration_ms=duration_ms,
                success_count=0,
                failure_count=failures,
                total_count=failures,
                error=payload,
            )
        )

    def build(
        self,
        *,
        started_at: datetime,
        ended_at: datetime,
        meta: Optional[Dict[str, Any]] = None,
    ) -> DeploymentResult:
        return DeploymentResult(
            overall_status=determine_overall_status(self._stages),
            stages=tuple(self._stages),
            started_at=started_at,
            ended_at=ended_at,
            total_duration_ms=ms_between(started_at, ended_at),
            meta=dict(meta or {}),
        )
