# src/saleor_configurator/core/engine/pipeline.py
"""
Executor do pipeline de deployment.

O `DeploymentPipeline` percorre os estágios na ordem do registry e
consolida o desfecho de cada um num `DeploymentResult`.

Princípios fundamentais:
    - Nunca aborta: a falha de um estágio não impede os seguintes
    - Exceções de estágio viram `ErrorPayload` (sem stack trace cru)
    - Duração e eventos de início/fim são registrados por estágio
    - O exit code é função pura do status consolidado

Limites explícitos:
    - Não executa o diff
    - Não aplica políticas de deleção (ver `core.configurator`)
    - Não persiste relatório
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from saleor_configurator.core.exceptions import ExitCode
from saleor_configurator.core.pipeline.context import AppliedEntity, DeploymentContext
from saleor_configurator.core.pipeline.registry import StageRegistry
from saleor_configurator.core.pipeline.stage import Stage
from saleor_configurator.core.pipeline.types import DeploymentResult

from .metrics import Clock, DeploymentMetrics, MetricsCollector
from .results import ResultCollector, get_exit_code

PIPELINE_SOURCE = "pipeline"


@dataclass(frozen=True)
class PipelineOutcome:
    """Resultado de `DeploymentPipeline.execute` (metrics, result, exit code)."""

    metrics: DeploymentMetrics
    result: DeploymentResult
    exit_code: ExitCode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metrics": self.metrics.to_dict(),
            "result": self.result.to_dict(),
            "exitCode": int(self.exit_code),
        }


class DeploymentPipeline:
    """Executor sequencial e resiliente de estágios."""

    def __init__(
        self,
        stages: Union[StageRegistry, Iterable[Stage]],
        *,
        clock: Optional[Clock] = None,
    ):
        self.registry: StageRegistry = (
            stages if isinstance(stages, StageRegistry) else StageRegistry.of(stages)
        )
        self._clock = clock

    @property
    def stages(self) -> List[Stage]:
        return self.registry.list()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _planned(self, stage: Stage, context: DeploymentContext) -> Dict[str, str]:
        planned_fn = getattr(stage, "planned_entities", None)
        if planned_fn is None:
            return {}
        try:
            return dict(planned_fn(context) or {})
        except Exception as e:
            context.add_warning(
                stage=stage.name,
                message=f"could not compute planned entities: {e.__class__.__name__}: {e}",
            )
            return {}

    @staticmethod
    def _count_applied(metrics: MetricsCollector, applied: List[AppliedEntity]) -> None:
        for entry in applied:
            metrics.record_entity(entry.entity_type, entry.operation)

    def _record_failure(
        self,
        *,
        stage: Stage,
        context: DeploymentContext,
        collector: ResultCollector,
        metrics: MetricsCollector,
        error: Exception,
        duration_ms: int,
    ) -> None:
        planned = self._planned(stage, context)
        self._count_applied(metrics, context.applied_for(stage.name))
        result = collector.failed(
            stage.name,
            error=error,
            duration_ms=duration_ms,
            planned=list(planned),
            operations=planned,
        )
        context.log(
            stage=stage.name,
            level="error",
            message="stage failed",
            status=result.status.value,
            duration_ms=duration_ms,
            error=result.error.to_dict() if result.error is not None else None,
        )

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def execute(self, context: DeploymentContext) -> PipelineOutcome:
        metrics = MetricsCollector(clock=self._clock)
        collector = ResultCollector()

        context.log(
            stage=PIPELINE_SOURCE,
            level="info",
            message="deployment started",
            stages=self.registry.names(),
            total_changes=context.summary.total_changes,
        )

        for stage in self.registry.list():
            name = stage.name

            try:
                should_skip = bool(stage.skip(context))
            except Exception as e:
                self._record_failure(
                    stage=stage,
                    context=context,
                    collector=collector,
                    metrics=metrics,
                    error=e,
                    duration_ms=0,
                )
                continue

            if should_skip:
                collector.skipped(name)
                context.log(stage=name, level="info", message="stage skipped")
                continue

            metrics.start_stage(name)
            context.log(stage=name, level="info", message="stage started")

            try:
                stage.execute(context)
            except Exception as e:
                self._record_failure(
                    stage=stage,
                    context=context,
                    collector=collector,
                    metrics=metrics,
                    error=e,
                    duration_ms=metrics.end_stage(name),
                )
                continue

            duration_ms = metrics.end_stage(name)
            applied = context.applied_for(name)
            self._count_applied(metrics, applied)
            collector.succeeded(name, duration_ms=duration_ms, applied=applied)
            context.log(
                stage=name,
                level="info",
                message="stage completed",
                duration_ms=duration_ms,
                applied=len(applied),
            )

        final_metrics = metrics.complete()
        result = collector.build(
            started_at=final_metrics.started_at,
            ended_at=final_metrics.ended_at,
            meta={"run_id": context.run_id},
        )
        exit_code = get_exit_code(result)

        context.log(
            stage=PIPELINE_SOURCE,
            level="info" if exit_code == ExitCode.SUCCESS else "warning",
            message="deployment finished",
            overall_status=result.overall_status.value,
            exit_code=int(exit_code),
            duration_ms=final_metrics.duration_ms,
        )

        return PipelineOutcome(metrics=final_metrics, result=result, exit_code=exit_code)
