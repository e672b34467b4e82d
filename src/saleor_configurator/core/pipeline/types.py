# src/saleor_configurator/core/pipeline/types.py
"""
Tipos canônicos do pipeline de deployment.

Este módulo define as estruturas e enums que padronizam a comunicação
entre estágios, pipeline, formatter e relatório.

Componentes principais:
    - StageStatus      → estados finais de um estágio
    - OverallStatus    → estado consolidado da run
    - EntityResult     → resultado por entidade dentro de um estágio
    - StageResult      → resultado imutável de um estágio
    - DeploymentResult → resultado imutável da run

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Contagens agregadas são derivadas, nunca armazenadas em duplicidade
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos
    - `DeploymentResult.total_operations` é a soma de `total_count` dos estágios
    - `successful_operations + failed_operations <= total_operations`

Limites explícitos:
    - Não executa estágios
    - Não decide o status consolidado (ver `core.engine.results`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from saleor_configurator.core.errors import ErrorPayload


class StageStatus(str, Enum):
    """
    Estados finais possíveis de um estágio.

    Estados definidos:
        - SUCCESS: todas as entidades do estágio foram aplicadas
        - PARTIAL: parte das entidades falhou (StageAggregateError com sucessos)
        - FAILED: o estágio falhou por completo
        - SKIPPED: o estágio não tinha trabalho no DiffSummary

    Invariantes:
        - O status final de um estágio é exatamente um dos valores definidos
    """
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"


class OverallStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class EntityResult:
    name: str
    success: bool
    error: Optional[str] = None
    suggestions: Tuple[str, ...] = ()
    operation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "operation": self.operation,
            "success": self.success,
            "error": self.error,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class StageResult:
    """
    Resultado imutável da execução de um estágio.

    Campos:
        - name: nome estável do estágio
        - status: estado final
        - duration_ms: duração medida pelo pipeline
        - success_count / failure_count / total_count: contagem por entidade
        - entities: detalhamento por entidade (quando conhecido)
        - error: payload canônico da falha (FAILED/PARTIAL)
    """

    name: str
    status: StageStatus
    duration_ms: int = 0
    success_count: int = 0
    failure_count: int = 0
    total_count: int = 0
    entities: Tuple[EntityResult, ...] = ()
    error: Optional[ErrorPayload] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "durationMs": self.duration_ms,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "totalCount": self.total_count,
            "entities": [e.to_dict() for e in self.entities],
            "error": self.error.to_dict() if self.error is not None else None,
        }


@dataclass(frozen=True)
class DeploymentResult:
    overall_status: OverallStatus
    stages: Tuple[StageResult, ...]
    started_at: datetime
    ended_at: datetime
    total_duration_ms: int
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_operations(self) -> int:
        return sum(s.total_count for s in self.stages)

    @property
    def successful_operations(self) -> int:
        return sum(s.success_count for s in self.stages)

    @property
    def failed_operations(self) -> int:
        return sum(s.failure_count for s in self.stages)

    def stage(self, name: str) -> StageResult:
        for s in self.stages:
            if s.name == name:
                return s
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallStatus": self.overall_status.value,
            "startedAt": self.started_at.isoformat(),
            "endedAt": self.ended_at.isoformat(),
            "totalDurationMs": self.total_duration_ms,
            "totalOperations": self.total_operations,
            "successfulOperations": self.successful_operations,
            "failedOperations": self.failed_operations,
            "stages": [s.to_dict() for s in self.stages],
            "meta": dict(self.meta),
        }
