# src/saleor_configurator/stages/shop.py
"""Estágio de settings da loja (singleton)."""

from __future__ import annotations

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.schema.model import ConfigurationSection

from .base import EntityStage, applicable_changes


class ShopSettingsStage(EntityStage):
    name = "Updating shop settings"
    entity_type = EntityType.SHOP

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        context.store.create_entity(ConfigurationSection.SHOP, result.desired.to_dict())

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        patch = {c.field: c.desired for c in applicable_changes(result)}
        context.store.update_entity(ConfigurationSection.SHOP, result.current.remote_id, patch)
