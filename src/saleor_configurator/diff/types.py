# src/saleor_configurator/diff/types.py
"""
Tipos canônicos do diff.

Componentes principais:
    - DiffOperation → CREATE, UPDATE, DELETE
    - EntityType    → rótulo estável de cada seção comparada
    - DiffChange    → diferença de um campo (atual → desejado)
    - DiffResult    → resultado da comparação de uma entidade
    - DiffSummary   → conjunto ordenado de resultados e contagens

Invariantes:
    - Um DiffResult UPDATE sempre possui ao menos um DiffChange
    - `DiffSummary.total_changes == creates + updates + deletes == len(results)`,
      garantido por construção (contagens derivadas dos resultados)
    - Todos os tipos são imutáveis e serializáveis (`to_dict`)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from saleor_configurator.schema.model import ConfigurationSection, Entity


class DiffOperation(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class EntityType(str, Enum):
    SHOP = "Shop Settings"
    CHANNELS = "Channels"
    PRODUCT_TYPES = "Product Types"
    PAGE_TYPES = "Page Types"
    CATEGORIES = "Categories"
    ATTRIBUTES = "Attributes"
    WAREHOUSES = "Warehouses"
    TAX_CLASSES = "Tax Classes"

    @property
    def section(self) -> ConfigurationSection:
        return _SECTION_BY_ENTITY_TYPE[self]


_SECTION_BY_ENTITY_TYPE = {
    EntityType.SHOP: ConfigurationSection.SHOP,
    EntityType.CHANNELS: ConfigurationSection.CHANNELS,
    EntityType.PRODUCT_TYPES: ConfigurationSection.PRODUCT_TYPES,
    EntityType.PAGE_TYPES: ConfigurationSection.PAGE_TYPES,
    EntityType.CATEGORIES: ConfigurationSection.CATEGORIES,
    EntityType.ATTRIBUTES: ConfigurationSection.ATTRIBUTES,
    EntityType.WAREHOUSES: ConfigurationSection.WAREHOUSES,
    EntityType.TAX_CLASSES: ConfigurationSection.TAX_CLASSES,
}


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def describe_change(field: str, current: Any, desired: Any) -> str:
    """Descrição humana padrão: `field: "atual" → "desejado"`."""
    return f'{field}: "{_render(current)}" → "{_render(desired)}"'


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class DiffChange:
    """
    Diferença de um campo entre o estado remoto (`current`) e o local (`desired`).

    `destructive=True` marca diferenças que descrevem algo presente apenas
    no remoto (valores ou vínculos removidos localmente). Elas são
    reportadas e nunca executadas.
    """

    field: str
    current: Any
    desired: Any
    description: str
    destructive: bool = False

    @classmethod
    def of(cls, field: str, current: Any, desired: Any) -> "DiffChange":
        return cls(field=field, current=current, desired=desired,
                   description=describe_change(field, current, desired))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "current": _plain(self.current),
            "desired": _plain(self.desired),
            "description": self.description,
            "destructive": self.destructive,
        }


@dataclass(frozen=True)
class DiffResult:
    operation: DiffOperation
    entity_type: EntityType
    entity_name: str
    changes: Tuple[DiffChange, ...] = ()
    desired: Optional[Entity] = None
    current: Optional[Entity] = None

    def __post_init__(self) -> None:
        if self.operation == DiffOperation.UPDATE and not self.changes:
            raise ValueError(f"UPDATE result for '{self.entity_name}' must carry at least one change")

    @property
    def destructive_changes(self) -> Tuple[DiffChange, ...]:
        return tuple(c for c in self.changes if c.destructive)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation.value,
            "entityType": self.entity_type.value,
            "entityName": self.entity_name,
            "changes": [c.to_dict() for c in self.changes],
        }


@dataclass(frozen=True)
class DiffSummary:
    results: Tuple[DiffResult, ...] = ()

    @property
    def creates(self) -> int:
        return sum(1 for r in self.results if r.operation == DiffOperation.CREATE)

    @property
    def updates(self) -> int:
        return sum(1 for r in self.results if r.operation == DiffOperation.UPDATE)

    @property
    def deletes(self) -> int:
        return sum(1 for r in self.results if r.operation == DiffOperation.DELETE)

    @property
    def total_changes(self) -> int:
        return len(self.results)

    @property
    def has_changes(self) -> bool:
        return bool(self.results)

    def for_entity_type(self, entity_type: EntityType) -> List[DiffResult]:
        return [r for r in self.results if r.entity_type == entity_type]

    def has_entity_type(self, entity_type: EntityType) -> bool:
        return any(r.entity_type == entity_type for r in self.results)

    def unapplied_changes(self) -> List[Dict[str, Any]]:
        """DELETEs e mudanças destrutivas: reportadas, nunca executadas."""
        out: List[Dict[str, Any]] = []
        for r in self.results:
            if r.operation == DiffOperation.DELETE:
                out.append({"entityType": r.entity_type.value, "entityName": r.entity_name,
                            "operation": r.operation.value, "description": f"{r.entity_name} exists only remotely"})
                continue
            for c in r.destructive_changes:
                out.append({"entityType": r.entity_type.value, "entityName": r.entity_name,
                            "operation": r.operation.value, "description": c.description})
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalChanges": self.total_changes,
            "creates": self.creates,
            "updates": self.updates,
            "deletes": self.deletes,
            "results": [r.to_dict() for r in self.results],
        }
