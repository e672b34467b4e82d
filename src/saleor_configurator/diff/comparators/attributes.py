# src/saleor_configurator/diff/comparators/attributes.py
"""
Comparação de atributos.

Este módulo contém:
    - `AttributeComparator` → seções globais de atributos, pareadas por
      `(kind, name)`
    - `compare_values`      → diff de valores de escolha (DROPDOWN, etc.)
    - `compare_attribute_lists` → diff dos atributos vinculados a um
      product type ou page type, reutilizado pelos comparadores dessas seções

Política de valores:
    - valor só local → mudança aplicável (será acrescentado)
    - valor só remoto → mudança destrutiva, reportada e nunca removida

Política de vínculos:
    - atributo só local → mudança aplicável (será vinculado)
    - atributo só remoto → mudança destrutiva (nunca desvinculado)
    - `variantSelection` divergente → mudança aplicável
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from saleor_configurator.schema.model import (
    REFERENCE_INPUT_TYPES,
    AttributeDefinition,
    AttributeInput,
    AttributeKind,
    Configuration,
)

from ..types import DiffChange, DiffResult, EntityType
from .base import EntityComparator, field_changes


def _quoted(values: Sequence[str]) -> str:
    return ", ".join(f'"{v}"' for v in values)


def compare_values(field: str, local: Sequence[str], remote: Sequence[str]) -> List[DiffChange]:
    added = [v for v in local if v not in remote]
    removed = [v for v in remote if v not in local]
    changes: List[DiffChange] = []
    if added:
        changes.append(DiffChange(
            field=field,
            current=list(remote),
            desired=list(local),
            description=f"{field}: added {_quoted(added)}",
        ))
    if removed:
        changes.append(DiffChange(
            field=field,
            current=list(remote),
            desired=list(local),
            description=f"{field}: {_quoted(removed)} exist(s) only remotely (not removed)",
            destructive=True,
        ))
    return changes


def _index(
    items: Sequence[AttributeInput], on_duplicate: Optional[Callable[[str], None]] = None
) -> Dict[str, AttributeInput]:
    out: Dict[str, AttributeInput] = {}
    for item in items:
        if item.name in out:
            if on_duplicate is not None:
                on_duplicate(item.name)
            continue
        out[item.name] = item
    return out


def compare_attribute_lists(
    role: str,
    local: Sequence[AttributeInput],
    remote: Sequence[AttributeInput],
    *,
    compare_variant_selection: bool = False,
    on_remote_duplicate: Optional[Callable[[str], None]] = None,
) -> List[DiffChange]:
    """
    Diff dos atributos vinculados a um owner, pareados por nome.

    As entradas devem chegar já normalizadas pelo serviço de diff:
    referências resolvidas viram `AttributeDefinition` com os valores
    atuais do atributo remoto, de modo que uma referência nunca gera
    diferença fantasma de valores.
    """
    local_index = _index(local)
    remote_index = _index(remote, on_remote_duplicate)
    changes: List[DiffChange] = []

    for name, item in local_index.items():
        current = remote_index.get(name)
        if current is None:
            changes.append(DiffChange(
                field=role,
                current=None,
                desired=name,
                description=f'{role}: attribute "{name}" added',
            ))
            continue

        if compare_variant_selection and item.variant_selection != current.variant_selection:
            changes.append(DiffChange.of(
                f"{role}.{name}.variantSelection", current.variant_selection, item.variant_selection
            ))

        if (
            isinstance(item, AttributeDefinition)
            and isinstance(current, AttributeDefinition)
            and item.is_choice
        ):
            changes += compare_values(f"{role}.{name}.values", item.values, current.values)

    for name in remote_index:
        if name not in local_index:
            changes.append(DiffChange(
                field=role,
                current=name,
                desired=None,
                description=f'{role}: attribute "{name}" exists only remotely (not unassigned)',
                destructive=True,
            ))
    return changes


class AttributeComparator(EntityComparator[AttributeDefinition]):
    """
    Atributos globais, pareados por `(kind, name)`.

    Um atributo PRODUCT e um CONTENT de mesmo nome são entidades
    distintas. `compare_configurations` compara cada kind apenas quando a
    seção local correspondente foi declarada.
    """

    entity_type = EntityType.ATTRIBUTES

    def key_of(self, entity: AttributeDefinition) -> str:
        return f"{entity.kind.value}:{entity.name}"

    def label_of(self, entity: AttributeDefinition) -> str:
        return entity.name

    def compare_configurations(self, local: Configuration, remote: Configuration) -> List[DiffResult]:
        results: List[DiffResult] = []
        for kind in AttributeKind:
            results += self.compare(local.attribute_section(kind), remote.attributes_of_kind(kind))
        return results

    def compare_entity(self, local: AttributeDefinition, remote: AttributeDefinition) -> List[DiffChange]:
        pairs = [("inputType", remote.input_type.value, local.input_type.value)]
        if local.input_type in REFERENCE_INPUT_TYPES:
            pairs.append((
                "entityType",
                remote.entity_type.value if remote.entity_type else None,
                local.entity_type.value if local.entity_type else None,
            ))
        changes = field_changes(pairs)
        if local.is_choice:
            changes += compare_values("values", local.values, remote.values)
        return changes
