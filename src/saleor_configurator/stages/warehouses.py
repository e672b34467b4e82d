# src/saleor_configurator/stages/warehouses.py
"""
Estágio de warehouses.

Atualizações enviam apenas os campos divergentes; mudanças de endereço
são agrupadas em um único `address` com o endereço local completo.
"""

from __future__ import annotations

from typing import Any, Dict

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.schema.model import ConfigurationSection, Warehouse

from .base import EntityStage, applicable_changes

_ADDRESS_PREFIX = "address."


def warehouse_patch(result: DiffResult) -> Dict[str, Any]:
    desired: Warehouse = result.desired
    patch: Dict[str, Any] = {}
    for change in applicable_changes(result):
        if change.field.startswith(_ADDRESS_PREFIX):
            patch["address"] = dict(desired.address)
        else:
            patch[change.field] = change.desired
    return patch


class WarehouseStage(EntityStage):
    name = "Managing warehouses"
    entity_type = EntityType.WAREHOUSES

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        context.store.create_entity(ConfigurationSection.WAREHOUSES, result.desired.to_dict())

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        context.store.update_entity(
            ConfigurationSection.WAREHOUSES, result.current.remote_id, warehouse_patch(result)
        )
