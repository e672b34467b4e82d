"""
Saleor Configurator: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Saleor Configurator.
Erros são considerados artefatos operacionais e fazem parte do contrato
do deployment, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma falha é convertida em sucesso silencioso.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do Saleor Configurator.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica que o deployment está bloqueado aguardando
      decisão humana (ex.: política de deleção)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Configuração local
CONFIGURATION_VALIDATION_ERROR = "CONFIGURATION_VALIDATION_ERROR"
DUPLICATE_ENTITY_IDENTIFIER = "DUPLICATE_ENTITY_IDENTIFIER"

# Atributos
ATTRIBUTE_RESOLUTION_ERROR = "ATTRIBUTE_RESOLUTION_ERROR"

# Remoto
NETWORK_ERROR = "NETWORK_ERROR"
AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"

# Pipeline / Execução
STAGE_AGGREGATE_ERROR = "STAGE_AGGREGATE_ERROR"
STAGE_EXECUTION_ERROR = "STAGE_EXECUTION_ERROR"
DELETION_BLOCKED = "DELETION_BLOCKED"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def duplicate_entity_identifier(
    *,
    section: str,
    identifiers: List[str],
    hint: str = "Cada entidade deve ter um identificador único dentro da sua seção. Renomeie ou remova as duplicatas.",
) -> ErrorPayload:
    return ErrorPayload(
        type=DUPLICATE_ENTITY_IDENTIFIER,
        message=f"Duplicate identifiers in section '{section}'",
        details={
            "section": section,
            "identifiers": list(identifiers),
        },
        hint=hint,
        decision_required=False,
    )


def attribute_resolution_error(
    *,
    names: List[str],
    owner: Optional[str] = None,
    kind: Optional[str] = None,
    hint: str = "Declare o atributo em productAttributes/contentAttributes ou corrija o nome referenciado.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ATTRIBUTE_RESOLUTION_ERROR,
        message="Referenced attributes could not be resolved",
        details={
            "names": list(names),
            "owner": owner,
            "kind": kind,
        },
        hint=hint,
        decision_required=False,
    )


def deletion_blocked(
    *,
    deletions: List[Dict[str, Any]],
    hint: str = "Remova a política fail_on_delete ou ajuste a configuração local para incluir as entidades remotas.",
) -> ErrorPayload:
    return ErrorPayload(
        type=DELETION_BLOCKED,
        message=f"Deployment blocked: {len(deletions)} destructive change(s) detected",
        details={"deletions": list(deletions)},
        hint=hint,
        decision_required=True,
    )


def stage_execution_error(
    *,
    stage: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o relatório do deployment e o estado remoto. Nenhum retry é aplicado automaticamente.",
) -> ErrorPayload:
    return ErrorPayload(
        type=STAGE_EXECUTION_ERROR,
        message=exc_message or "Falha inesperada durante a execução do estágio",
        details={
            "stage": stage,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
        decision_required=False,
    )
