"""
Saleor Configurator: Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Saleor Configurator.

Objetivo:
- Permitir que estágios, comparadores e resolvedores levantem exceções
  semânticas tipadas
- Formar uma variante fechada de erros de deployment, cada uma com
  `ErrorKind` e exit code estáveis
- Mapear deterministicamente exceções para ErrorPayload
- Classificar exceções estrangeiras (transporte, parser, etc.)

Regras:
- Exceções carregam apenas dados estruturados em `details`.
- A classificação por mensagem é um fallback; tipos explícitos têm prioridade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple

import yaml  # PyYAML

from . import errors as catalog
from .config.errors import ConfigError
from .errors import ErrorPayload


class ErrorKind(str, Enum):
    """Classificação fechada dos erros de deployment."""
    VALIDATION = "validation"
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    ATTRIBUTE_RESOLUTION = "attribute_resolution"
    STAGE_AGGREGATE = "stage_aggregate"
    DELETION_BLOCKED = "deletion_blocked"
    UNEXPECTED = "unexpected"


class ExitCode(int, Enum):
    """
    Exit codes estáveis do processo de deployment.

    Os valores são parte do contrato com pipelines de CI e nunca
    devem ser renumerados.
    """
    SUCCESS = 0
    UNEXPECTED = 1
    AUTHENTICATION = 2
    NETWORK = 3
    VALIDATION = 4
    PARTIAL_FAILURE = 5
    DELETION_BLOCKED = 6


@dataclass(frozen=True, eq=False)
class ConfiguratorException(Exception):
    """Base class para exceções internas do Saleor Configurator.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED
    error_type: ClassVar[str] = catalog.UNEXPECTED_ERROR
    exit_code: ClassVar[ExitCode] = ExitCode.UNEXPECTED

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    decision_required: bool = False

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details or {}),
            hint=self.hint,
            decision_required=bool(self.decision_required),
        )


# ---------------------------------------------------------------------------
# Configuração local
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ValidationError(ConfiguratorException):
    """Configuração local inválida (schema, identificadores, atributos)."""

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION
    error_type: ClassVar[str] = catalog.CONFIGURATION_VALIDATION_ERROR
    exit_code: ClassVar[ExitCode] = ExitCode.VALIDATION


@dataclass(frozen=True, eq=False)
class DuplicateIdentifierError(ValidationError):
    """Duas entidades de uma mesma seção compartilham o identificador natural."""

    error_type: ClassVar[str] = catalog.DUPLICATE_ENTITY_IDENTIFIER


# ---------------------------------------------------------------------------
# Atributos
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class AttributeResolutionError(ConfiguratorException):
    """Referência de atributo não resolvida ou definição de atributo ilegal."""

    kind: ClassVar[ErrorKind] = ErrorKind.ATTRIBUTE_RESOLUTION
    error_type: ClassVar[str] = catalog.ATTRIBUTE_RESOLUTION_ERROR
    exit_code: ClassVar[ExitCode] = ExitCode.VALIDATION


# ---------------------------------------------------------------------------
# Remoto
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class NetworkError(ConfiguratorException):
    """Loja remota inacessível (DNS, timeout, conexão recusada)."""

    kind: ClassVar[ErrorKind] = ErrorKind.NETWORK
    error_type: ClassVar[str] = catalog.NETWORK_ERROR
    exit_code: ClassVar[ExitCode] = ExitCode.NETWORK


@dataclass(frozen=True, eq=False)
class AuthenticationError(ConfiguratorException):
    """Credenciais inválidas ou permissões insuficientes na loja remota."""

    kind: ClassVar[ErrorKind] = ErrorKind.AUTHENTICATION
    error_type: ClassVar[str] = catalog.AUTHENTICATION_ERROR
    exit_code: ClassVar[ExitCode] = ExitCode.AUTHENTICATION


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EntityFailure:
    """Falha individual de uma entidade dentro de um estágio."""

    entity: str
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error) or self.error.__class__.__name__


@dataclass(frozen=True, eq=False)
class StageAggregateError(ConfiguratorException):
    """
    Falha agregada de um estágio multi-entidade.

    Carrega a lista de entidades que falharam (com a causa) e a lista de
    entidades aplicadas com sucesso no mesmo estágio. O pipeline usa
    essa informação para classificar o estágio como `partial` ou `failed`.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.STAGE_AGGREGATE
    error_type: ClassVar[str] = catalog.STAGE_AGGREGATE_ERROR
    exit_code: ClassVar[ExitCode] = ExitCode.PARTIAL_FAILURE

    stage_name: str = ""
    failures: Tuple[EntityFailure, ...] = ()
    successes: Tuple[str, ...] = ()

    @classmethod
    def for_stage(
        cls,
        stage_name: str,
        failures: Sequence[EntityFailure],
        successes: Sequence[str] = (),
    ) -> "StageAggregateError":
        total = len(failures) + len(successes)
        return cls(
            message=f"{stage_name} failed for {len(failures)} of {total} entities",
            details={
                "stage": stage_name,
                "failed": [f.entity for f in failures],
                "succeeded": list(successes),
            },
            stage_name=stage_name,
            failures=tuple(failures),
            successes=tuple(successes),
        )

    @property
    def total(self) -> int:
        return len(self.failures) + len(self.successes)


@dataclass(frozen=True, eq=False)
class DeletionBlockedError(ConfiguratorException):
    """Mudanças destrutivas detectadas com a política fail_on_delete ativa."""

    kind: ClassVar[ErrorKind] = ErrorKind.DELETION_BLOCKED
    error_type: ClassVar[str] = catalog.DELETION_BLOCKED
    exit_code: ClassVar[ExitCode] = ExitCode.DELETION_BLOCKED


@dataclass(frozen=True, eq=False)
class UnexpectedError(ConfiguratorException):
    """Erro inesperado encapsulado (fallback da classificação)."""


# ---------------------------------------------------------------------------
# Classificação de exceções estrangeiras
# ---------------------------------------------------------------------------

_NETWORK_MARKERS: List[str] = [
    "fetch failed",
    "econnrefused",
    "connection refused",
    "etimedout",
    "timed out",
    "enotfound",
    "network",
]

_AUTH_MARKERS: List[str] = [
    "unauthorized",
    "authentication",
    "permission",
    "forbidden",
    "invalid token",
]

_VALIDATION_MARKERS: List[str] = [
    "validation",
    "invalid",
    "required",
]


def to_deployment_error(exc: BaseException) -> ConfiguratorException:
    """
    Converte qualquer exceção para a variante tipada de erros de deployment.

    Regras (em ordem de prioridade):
        1. ConfiguratorException → retornada sem alteração
        2. Erros de transporte da stdlib (ConnectionError, TimeoutError)
           → NetworkError; PermissionError → AuthenticationError
        3. ConfigError e erros de parsing YAML → ValidationError
        4. Heurística por palavras-chave na mensagem (rede, auth, validação)
        5. Fallback → UnexpectedError

    Args:
        exc (BaseException): Exceção original.

    Returns:
        ConfiguratorException: Exceção classificada.
    """
    if isinstance(exc, ConfiguratorException):
        return exc

    message = str(exc) or exc.__class__.__name__
    details = {"exception_class": exc.__class__.__name__}

    if isinstance(exc, (ConnectionError, TimeoutError)):
        return NetworkError(
            message=message,
            details=details,
            hint="Verifique a URL da loja e a conectividade de rede.",
        )
    if isinstance(exc, PermissionError):
        return AuthenticationError(
            message=message,
            details=details,
            hint="Verifique o token de acesso e suas permissões.",
        )
    if isinstance(exc, (ConfigError, yaml.YAMLError)):
        return ValidationError(
            message=message,
            details=details,
            hint="Corrija o arquivo de configuração e execute novamente.",
        )

    lowered = message.lower()
    if any(marker in lowered for marker in _NETWORK_MARKERS):
        return NetworkError(
            message=message,
            details=details,
            hint="Verifique a URL da loja e a conectividade de rede.",
        )
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return AuthenticationError(
            message=message,
            details=details,
            hint="Verifique o token de acesso e suas permissões.",
        )
    if any(marker in lowered for marker in _VALIDATION_MARKERS):
        return ValidationError(message=message, details=details)

    return UnexpectedError(message=message, details=details)


def exit_code_for(exc: BaseException) -> ExitCode:
    """Exit code estável de uma exceção (após classificação)."""
    return to_deployment_error(exc).exit_code
