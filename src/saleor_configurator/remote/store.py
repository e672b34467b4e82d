# src/saleor_configurator/remote/store.py
"""
Capacidade abstrata de acesso à loja remota.

Este módulo define o protocolo `RemoteStore`, que isola o diff e o
deployment do protocolo de transporte real (GraphQL, HTTP, fake em
memória). Toda leitura e mutação remota passa por esta interface.

Operações:
    - fetch_snapshot()                       → estado remoto atual (Configuration)
    - create_entity(section, payload)        → RemoteEntity criada
    - update_entity(section, id, patch)      → RemoteEntity atualizada
    - find_attributes_by_name(names, kind)   → atributos existentes (lookup em lote)
    - assign_attributes(owner_id, refs, role) → vincula atributos a um product/page type

Decisões arquiteturais:
    - Conformidade por duck typing (@runtime_checkable), sem herança
    - Implementações podem levantar `NetworkError` / `AuthenticationError`
      explicitamente; exceções estrangeiras são classificadas pelo pipeline
    - Não há operação de deleção: deleções são reportadas, nunca executadas

Limites explícitos:
    - Não define retry, paginação ou rate limiting
    - Não mantém cache (ver `attributes.cache`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from saleor_configurator.schema.model import (
    AttributeDefinition,
    AttributeKind,
    Configuration,
    ConfigurationSection,
    InputType,
    ReferenceEntityType,
)


class AssignmentRole(str, Enum):
    """Papel de um atributo vinculado a um owner."""
    PRODUCT = "PRODUCT"
    VARIANT = "VARIANT"
    CONTENT = "CONTENT"


@dataclass(frozen=True)
class RemoteEntity:
    id: str
    section: ConfigurationSection
    name: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RemoteAttribute:
    """Atributo existente na loja remota."""

    id: str
    name: str
    kind: AttributeKind
    input_type: InputType
    values: Tuple[str, ...] = ()
    entity_type: Optional[ReferenceEntityType] = None

    def to_definition(self) -> AttributeDefinition:
        return AttributeDefinition(
            name=self.name,
            input_type=self.input_type,
            kind=self.kind,
            values=self.values,
            entity_type=self.entity_type,
            remote_id=self.id,
        )


@dataclass(frozen=True)
class AttributeAssignment:
    attribute_id: str
    variant_selection: bool = False


@runtime_checkable
class RemoteStore(Protocol):
    def fetch_snapshot(self) -> Configuration:
        """Retorna o estado remoto atual, com `remote_id` preenchido."""
        ...

    def create_entity(self, section: ConfigurationSection, payload: Dict[str, Any]) -> RemoteEntity:
        ...

    def update_entity(
        self, section: ConfigurationSection, remote_id: str, patch: Dict[str, Any]
    ) -> RemoteEntity:
        ...

    def find_attributes_by_name(
        self, names: Sequence[str], kind: AttributeKind
    ) -> List[RemoteAttribute]:
        """Lookup em lote; nomes inexistentes são simplesmente omitidos."""
        ...

    def assign_attributes(
        self,
        owner_id: str,
        assignments: Sequence[AttributeAssignment],
        role: AssignmentRole,
    ) -> None:
        ...
