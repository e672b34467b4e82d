# src/saleor_configurator/core/configurator.py
"""
Fachada de diff e deploy do Saleor Configurator.

O `Configurator` coordena uma invocação completa:

    preflight → snapshot remoto → diff → política de deleção
        → pipeline de estágios → relatório (best-effort)

Responsabilidades:
    - Rejeitar configurações inválidas antes de qualquer chamada remota
    - Criar um `AttributeCache` novo por invocação, compartilhado entre o
      diff e os estágios da mesma run
    - Classificar falhas do snapshot/diff em exit codes estáveis
    - Aplicar a política `fail_on_delete` antes do primeiro estágio
    - Persistir o relatório sem nunca falhar o deploy por causa dele

Decisões arquiteturais:
    - Deleções e mudanças destrutivas são reportadas em `unapplied` e
      nunca executadas
    - Nenhuma exceção atravessa `deploy`: todo desfecho vira um
      `DeploymentOutcome` com exit code
    - `diff` propaga erros ao chamador sem alteração

Limites explícitos:
    - Não implementa transporte remoto (ver `remote.store.RemoteStore`)
    - Não interage com o operador (aprovação é responsabilidade externa)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from saleor_configurator.attributes.cache import AttributeCache, AttributeCacheEntry
from saleor_configurator.attributes.resolver import AttributeResolver
from saleor_configurator.diff.service import DiffService
from saleor_configurator.diff.types import DiffSummary
from saleor_configurator.remote.store import RemoteStore
from saleor_configurator.schema.model import Configuration
from saleor_configurator.schema.preflight import ensure_valid

from . import errors as catalog
from .config.hashing import compute_config_hash
from .config.settings import Settings
from .engine.cleanup import CleanupSuggestion, analyze_deployment_cleanup
from .engine.metrics import Clock, DeploymentMetrics, utc_now
from .engine.pipeline import DeploymentPipeline
from .errors import ErrorPayload
from .exceptions import DeletionBlockedError, ExitCode, ValidationError, to_deployment_error
from .pipeline.context import DeploymentContext
from .pipeline.events import EventLog
from .pipeline.registry import StageRegistry
from .pipeline.stage import Stage
from .pipeline.types import DeploymentResult
from .traceability.report import JsonReportSink

_SOURCE = "configurator"


@dataclass(frozen=True)
class DeploymentOutcome:
    """Desfecho completo de uma invocação de deploy."""

    run_id: str
    exit_code: ExitCode
    summary: Optional[DiffSummary] = None
    metrics: Optional[DeploymentMetrics] = None
    result: Optional[DeploymentResult] = None
    unapplied: Tuple[Dict[str, Any], ...] = ()
    suggestions: Tuple[CleanupSuggestion, ...] = ()
    error: Optional[ErrorPayload] = None
    events: Tuple[Dict[str, Any], ...] = ()
    warnings: Dict[str, Any] = field(default_factory=dict)
    report_path: Optional[Path] = None

    @property
    def deployed(self) -> bool:
        return self.result is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runId": self.run_id,
            "exitCode": int(self.exit_code),
            "summary": self.summary.to_dict() if self.summary is not None else None,
            "metrics": self.metrics.to_dict() if self.metrics is not None else None,
            "result": self.result.to_dict() if self.result is not None else None,
            "unapplied": [dict(u) for u in self.unapplied],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "error": self.error.to_dict() if self.error is not None else None,
            "warnings": {k: list(v) for k, v in self.warnings.items()},
            "events": list(self.events),
        }


class Configurator:
    def __init__(
        self,
        store: RemoteStore,
        settings: Optional[Settings] = None,
        *,
        stages: Optional[Union[StageRegistry, Sequence[Stage]]] = None,
        report_sink: Optional[JsonReportSink] = None,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self._stages = stages
        self._clock: Clock = clock or utc_now
        self.report_sink = report_sink or JsonReportSink(self.settings.report_dir)

    # ------------------------------------------------------------------
    # Montagem
    # ------------------------------------------------------------------
    def _diff_service(self, cache: AttributeCache, events: Optional[EventLog]) -> DiffService:
        return DiffService(
            store=self.store,
            resolver=AttributeResolver(store=self.store, cache=cache, events=events),
            events=events,
            include_sections=self.settings.include_sections,
            exclude_sections=self.settings.exclude_sections,
        )

    def _pipeline(self) -> DeploymentPipeline:
        if self._stages is None:
            from saleor_configurator.stages import build_stage_registry

            return DeploymentPipeline(build_stage_registry(), clock=self._clock)
        return DeploymentPipeline(self._stages, clock=self._clock)

    @staticmethod
    def _seed_cache(cache: AttributeCache, remote: Configuration) -> None:
        for definition in remote.attributes or ():
            if definition.remote_id:
                cache.put(
                    AttributeCacheEntry(
                        name=definition.name,
                        kind=definition.kind,
                        remote_id=definition.remote_id,
                        input_type=definition.input_type,
                    )
                )

    # ------------------------------------------------------------------
    # Diff
    # ------------------------------------------------------------------
    def diff(self, configuration: Configuration, *, events: Optional[EventLog] = None) -> DiffSummary:
        """
        Valida a configuração local e a compara com o snapshot remoto.

        Raises:
            ValidationError: configuração local inválida.
            Exception: falhas do RemoteStore, propagadas sem alteração.
        """
        ensure_valid(configuration)
        return self._diff_service(AttributeCache(), events).compare(configuration)

    # ------------------------------------------------------------------
    # Deploy
    # ------------------------------------------------------------------
    def deploy(self, configuration: Configuration) -> DeploymentOutcome:
        run_id = uuid.uuid4().hex
        events = EventLog(run_id=run_id)

        def finish(**kwargs: Any) -> DeploymentOutcome:
            return DeploymentOutcome(
                run_id=run_id,
                events=tuple(events.events),
                warnings={k: list(v) for k, v in events.warnings.items()},
                **kwargs,
            )

        try:
            ensure_valid(configuration)
        except ValidationError as e:
            events.log(source=_SOURCE, level="error", message="preflight failed", error=e.to_payload().to_dict())
            return finish(exit_code=e.exit_code, error=e.to_payload())

        cache = AttributeCache()
        try:
            remote = self.store.fetch_snapshot()
            self._seed_cache(cache, remote)
            summary = self._diff_service(cache, events).compare_with(configuration, remote)
        except Exception as e:
            classified = to_deployment_error(e)
            payload = classified.to_payload()
            events.log(source=_SOURCE, level="error", message="diff failed", error=payload.to_dict())
            return finish(exit_code=classified.exit_code, error=payload)

        unapplied = tuple(summary.unapplied_changes())
        suggestions = tuple(analyze_deployment_cleanup(summary))

        if not summary.has_changes:
            events.log(source=_SOURCE, level="info", message="no changes to deploy")
            return finish(exit_code=ExitCode.SUCCESS, summary=summary)

        if self.settings.fail_on_delete and unapplied:
            payload = catalog.deletion_blocked(deletions=list(unapplied))
            blocked = DeletionBlockedError(
                message=payload.message,
                details=payload.details,
                hint=payload.hint,
                decision_required=True,
            )
            events.log(source=_SOURCE, level="error", message="deployment blocked by deletion policy",
                       deletions=len(unapplied))
            outcome = finish(
                exit_code=blocked.exit_code,
                summary=summary,
                unapplied=unapplied,
                suggestions=suggestions,
                error=blocked.to_payload(),
            )
            return self._save_report(outcome, configuration, events)

        context = DeploymentContext(
            store=self.store,
            summary=summary,
            configuration=configuration,
            started_at=self._clock(),
            attribute_cache=cache,
            run_id=run_id,
            max_workers=self.settings.max_workers,
            event_log=events,
        )
        pipeline_outcome = self._pipeline().execute(context)

        outcome = finish(
            exit_code=pipeline_outcome.exit_code,
            summary=summary,
            metrics=pipeline_outcome.metrics,
            result=pipeline_outcome.result,
            unapplied=unapplied,
            suggestions=suggestions,
        )
        return self._save_report(outcome, configuration, events)

    # ------------------------------------------------------------------
    # Relatório
    # ------------------------------------------------------------------
    def build_report(self, outcome: DeploymentOutcome, configuration: Configuration) -> Dict[str, Any]:
        report = outcome.to_dict()
        report["configHash"] = compute_config_hash(configuration.to_dict())
        report["settings"] = self.settings.to_dict()
        return report

    def _save_report(
        self, outcome: DeploymentOutcome, configuration: Configuration, events: EventLog
    ) -> DeploymentOutcome:
        if not self.settings.save_report:
            return outcome
        try:
            path = self.report_sink.write(self.build_report(outcome, configuration), now=self._clock())
        except Exception as e:
            events.add_warning(
                source="report",
                message=f"could not save deployment report: {e.__class__.__name__}: {e}",
            )
            return replace(outcome, warnings={k: list(v) for k, v in events.warnings.items()})
        events.log(source="report", level="info", message="deployment report saved", path=str(path))
        return replace(outcome, report_path=path)
