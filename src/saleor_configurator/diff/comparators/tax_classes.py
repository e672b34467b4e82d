# src/saleor_configurator/diff/comparators/tax_classes.py
"""
Comparador de tax classes, pareadas por nome.

Alíquotas por país:
    - país só local ou alíquota divergente → mudança aplicável
    - país só remoto → mudança destrutiva, reportada e nunca removida
"""

from __future__ import annotations

from typing import List

from saleor_configurator.schema.model import TaxClass

from ..types import DiffChange, EntityType
from .base import EntityComparator


def _percent(code: str, rate: float) -> str:
    return f"{code}: {rate:g}%"


class TaxClassComparator(EntityComparator[TaxClass]):
    entity_type = EntityType.TAX_CLASSES

    def key_of(self, entity: TaxClass) -> str:
        return entity.name

    def compare_entity(self, local: TaxClass, remote: TaxClass) -> List[DiffChange]:
        desired = {r.country_code: r.rate for r in local.country_rates}
        current = {r.country_code: r.rate for r in remote.country_rates}
        changes: List[DiffChange] = []

        for code, rate in desired.items():
            if code not in current:
                changes.append(DiffChange(
                    field=f"countryRates.{code}",
                    current=None,
                    desired=rate,
                    description=f"Tax rate for {code} added: {rate:g}%",
                ))
            elif current[code] != rate:
                changes.append(DiffChange(
                    field=f"countryRates.{code}",
                    current=current[code],
                    desired=rate,
                    description=f"Tax rate for {code}: {current[code]:g}% → {rate:g}%",
                ))

        for code, rate in current.items():
            if code not in desired:
                changes.append(DiffChange(
                    field=f"countryRates.{code}",
                    current=rate,
                    desired=None,
                    description=f"{_percent(code, rate)} exists only remotely (not removed)",
                    destructive=True,
                ))
        return changes
