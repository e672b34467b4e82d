# src/saleor_configurator/stages/tax_classes.py
"""
Estágio de tax classes.

Alíquotas novas ou alteradas são enviadas em `updateCountryRates`;
alíquotas presentes apenas no remoto nunca são removidas.
"""

from __future__ import annotations

from typing import Any, Dict, List

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.schema.model import ConfigurationSection

from .base import EntityStage, applicable_changes

_RATES_PREFIX = "countryRates."


def country_rate_updates(result: DiffResult) -> List[Dict[str, Any]]:
    return [
        {"countryCode": change.field[len(_RATES_PREFIX):], "rate": change.desired}
        for change in applicable_changes(result)
        if change.field.startswith(_RATES_PREFIX)
    ]


class TaxClassStage(EntityStage):
    name = "Managing tax classes"
    entity_type = EntityType.TAX_CLASSES

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        context.store.create_entity(ConfigurationSection.TAX_CLASSES, result.desired.to_dict())

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        context.store.update_entity(
            ConfigurationSection.TAX_CLASSES,
            result.current.remote_id,
            {"updateCountryRates": country_rate_updates(result)},
        )
