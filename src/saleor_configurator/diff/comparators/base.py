# src/saleor_configurator/diff/comparators/base.py
"""
Contrato base dos comparadores de entidade.

Um comparador recebe a seção local e a seção remota de um mesmo tipo
de entidade e produz a lista ordenada de `DiffResult`.

Política de pareamento (seções de lista):
    - entidades são pareadas pelo identificador natural (`key_of`)
    - só local → CREATE; só remoto → DELETE; ambos → UPDATE se houver
      ao menos uma diferença, caso contrário nada é emitido
    - seção local `None` → seção não configurada, nada é emitido
    - duplicatas locais → `DuplicateIdentifierError` (configuração inválida)
    - duplicatas remotas → a primeira ocorrência vence, com warning

Invariantes:
    - A ordem dos resultados segue a ordem local, seguida dos DELETEs
      na ordem remota
    - Comparar uma seção consigo mesma nunca produz resultados
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from typing import ClassVar, Dict, Generic, List, Optional, Sequence, TypeVar

from saleor_configurator.core import errors as catalog
from saleor_configurator.core.exceptions import DuplicateIdentifierError
from saleor_configurator.core.pipeline.events import EventLog

from ..types import DiffChange, DiffOperation, DiffResult, EntityType


E = TypeVar("E")


class EntityComparator(ABC, Generic[E]):
    entity_type: ClassVar[EntityType]

    def __init__(self, *, events: Optional[EventLog] = None):
        self.events = events

    @property
    def source(self) -> str:
        return f"diff.{self.entity_type.section.value}"

    def warn(self, message: str) -> None:
        if self.events is not None:
            self.events.add_warning(source=self.source, message=message)

    @abstractmethod
    def key_of(self, entity: E) -> str:
        ...

    def label_of(self, entity: E) -> str:
        return self.key_of(entity)

    @abstractmethod
    def compare_entity(self, local: E, remote: E) -> List[DiffChange]:
        ...

    # -----------------------------
    # Pareamento
    # -----------------------------
    def _index_local(self, entities: Sequence[E]) -> Dict[str, E]:
        counts = Counter(self.key_of(e) for e in entities)
        duplicated = sorted(k for k, n in counts.items() if n > 1)
        if duplicated:
            payload = catalog.duplicate_entity_identifier(
                section=self.entity_type.section.value, identifiers=duplicated
            )
            raise DuplicateIdentifierError(message=payload.message, details=payload.details, hint=payload.hint)
        return {self.key_of(e): e for e in entities}

    def _index_remote(self, entities: Sequence[E]) -> Dict[str, E]:
        index: Dict[str, E] = {}
        for e in entities:
            key = self.key_of(e)
            if key in index:
                self.warn(f"Duplicate remote {self.entity_type.value} '{key}'; keeping the first occurrence")
                continue
            index[key] = e
        return index

    def compare(self, local: Optional[Sequence[E]], remote: Optional[Sequence[E]]) -> List[DiffResult]:
        if local is None:
            return []
        remote_items = list(remote or ())
        if not local and not remote_items:
            return []

        local_index = self._index_local(local)
        remote_index = self._index_remote(remote_items)

        results: List[DiffResult] = []
        for key, desired in local_index.items():
            current = remote_index.get(key)
            if current is None:
                results.append(DiffResult(
                    operation=DiffOperation.CREATE,
                    entity_type=self.entity_type,
                    entity_name=self.label_of(desired),
                    desired=desired,
                ))
                continue
            changes = self.compare_entity(desired, current)
            if changes:
                results.append(DiffResult(
                    operation=DiffOperation.UPDATE,
                    entity_type=self.entity_type,
                    entity_name=self.label_of(desired),
                    changes=tuple(changes),
                    desired=desired,
                    current=current,
                ))

        for key, current in remote_index.items():
            if key not in local_index:
                results.append(DiffResult(
                    operation=DiffOperation.DELETE,
                    entity_type=self.entity_type,
                    entity_name=self.label_of(current),
                    current=current,
                ))
        return results


def field_changes(pairs: Sequence[tuple]) -> List[DiffChange]:
    """Gera DiffChange para cada `(field, current, desired)` divergente."""
    return [DiffChange.of(name, current, desired) for name, current, desired in pairs if current != desired]
