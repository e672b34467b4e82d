# src/saleor_configurator/diff/comparators/warehouses.py
"""
Comparador de warehouses: pareados por slug, rotulados pelo nome.

Normalização do endereço:
    - campos ausentes equivalem a string vazia
    - `city` é comparada sem diferenciar maiúsculas (a loja armazena a
      cidade em caixa alta)
    - `email` vazio equivale a ausente
"""

from __future__ import annotations

from typing import Dict, List

from saleor_configurator.schema.model import WAREHOUSE_ADDRESS_FIELDS, Warehouse

from ..types import DiffChange, EntityType
from .base import EntityComparator, field_changes


def normalize_address(address: Dict[str, str]) -> Dict[str, str]:
    return {name: (address.get(name) or "") for name in WAREHOUSE_ADDRESS_FIELDS}


class WarehouseComparator(EntityComparator[Warehouse]):
    entity_type = EntityType.WAREHOUSES

    def key_of(self, entity: Warehouse) -> str:
        return entity.slug

    def label_of(self, entity: Warehouse) -> str:
        return entity.name

    def compare_entity(self, local: Warehouse, remote: Warehouse) -> List[DiffChange]:
        pairs = [
            ("name", remote.name, local.name),
            ("email", remote.email or None, local.email or None),
            ("isPrivate", remote.is_private, local.is_private),
            ("clickAndCollectOption", remote.click_and_collect_option, local.click_and_collect_option),
        ]
        changes = field_changes(pairs)

        desired = normalize_address(local.address)
        current = normalize_address(remote.address)
        for name in WAREHOUSE_ADDRESS_FIELDS:
            if name == "city":
                differs = desired[name].lower() != current[name].lower()
            else:
                differs = desired[name] != current[name]
            if differs:
                changes.append(DiffChange.of(f"address.{name}", current[name], desired[name]))
        return changes
