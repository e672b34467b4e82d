# src/saleor_configurator/core/pipeline/context.py
"""
Contexto de deployment compartilhado entre estágios.

Este módulo define o `DeploymentContext`, a estrutura canônica passada a
todos os estágios durante uma run de deployment.

O DeploymentContext atua como o único meio permitido de:
    - acesso à loja remota (`store`)
    - leitura do trabalho planejado (`summary`) e do estado desejado
    - reuso da identidade de atributos (`attribute_cache`, `resolver`)
    - registro de logs estruturados e warnings por estágio
    - registro das entidades efetivamente aplicadas

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto e cache)
    - Comunicação explícita e rastreável
    - Ausência de estado global compartilhado

Invariantes:
    - Logs sempre incluem `run_id` e o nome do estágio como `source`
    - Warnings são agrupados por estágio
    - Registros de entidades aplicadas são thread-safe

Limites explícitos:
    - Não executa estágios
    - Não decide políticas de execução
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from saleor_configurator.attributes.cache import AttributeCache
from saleor_configurator.attributes.resolver import AttributeResolver
from saleor_configurator.diff.types import DiffResult, DiffSummary, EntityType
from saleor_configurator.remote.store import RemoteStore
from saleor_configurator.schema.model import Configuration

from .events import EventLog


@dataclass(frozen=True)
class AppliedEntity:
    stage: str
    entity_type: str
    entity: str
    operation: str


@dataclass
class DeploymentContext:
    """
    Contexto de execução de uma run de deployment.

    O cache de atributos é normalmente o mesmo usado pelo diff da mesma
    invocação, para que ids já descobertos não sejam buscados de novo.
    """

    store: RemoteStore
    summary: DiffSummary
    configuration: Configuration
    started_at: datetime
    attribute_cache: AttributeCache = field(default_factory=AttributeCache)
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    max_workers: int = 4
    event_log: Optional[EventLog] = None

    _applied: List[AppliedEntity] = field(default_factory=list, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _resolver: Optional[AttributeResolver] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.event_log is None:
            self.event_log = EventLog(run_id=self.run_id)

    # -----------------------------
    # Trabalho planejado
    # -----------------------------
    def results_for(self, entity_type: EntityType) -> List[DiffResult]:
        return self.summary.for_entity_type(entity_type)

    @property
    def resolver(self) -> AttributeResolver:
        with self._lock:
            if self._resolver is None:
                self._resolver = AttributeResolver(
                    store=self.store, cache=self.attribute_cache, events=self.event_log
                )
            return self._resolver

    # -----------------------------
    # Entidades aplicadas
    # -----------------------------
    def record_applied(
        self, *, stage: str, entity_type: str, entity: str, operation: str
    ) -> None:
        with self._lock:
            self._applied.append(
                AppliedEntity(
                    stage=stage, entity_type=entity_type, entity=entity, operation=operation
                )
            )

    def applied(self) -> List[AppliedEntity]:
        with self._lock:
            return list(self._applied)

    def applied_for(self, stage: str) -> List[AppliedEntity]:
        with self._lock:
            return [a for a in self._applied if a.stage == stage]

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    @property
    def events(self) -> List[Dict[str, Any]]:
        return self.event_log.events

    @property
    def warnings(self) -> Dict[str, List[str]]:
        return self.event_log.warnings

    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        self.event_log.log(source=stage, level=level, message=message, **extra)

    def add_warning(self, *, stage: str, message: str) -> None:
        self.event_log.add_warning(source=stage, message=message)
