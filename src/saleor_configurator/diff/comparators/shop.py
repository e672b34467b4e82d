# src/saleor_configurator/diff/comparators/shop.py
"""Comparador das settings globais da loja (entidade singleton)."""

from __future__ import annotations

from typing import List, Optional

from saleor_configurator.core.pipeline.events import EventLog
from saleor_configurator.schema.model import SHOP_FIELDS, ShopSettings

from ..types import DiffChange, DiffOperation, DiffResult, EntityType
from .base import field_changes


SHOP_ENTITY_NAME = "Shop Settings"


class ShopSettingsComparator:
    entity_type = EntityType.SHOP

    def __init__(self, *, events: Optional[EventLog] = None):
        self.events = events

    def compare_entity(self, local: ShopSettings, remote: ShopSettings) -> List[DiffChange]:
        # apenas os campos declarados localmente participam da comparação
        return field_changes([
            (name, remote.values.get(name), local.values[name])
            for name in SHOP_FIELDS
            if name in local.values
        ])

    def compare(self, local: Optional[ShopSettings], remote: Optional[ShopSettings]) -> List[DiffResult]:
        if local is None or not local.values:
            return []
        if remote is None:
            return [DiffResult(
                operation=DiffOperation.CREATE,
                entity_type=self.entity_type,
                entity_name=SHOP_ENTITY_NAME,
                desired=local,
            )]
        changes = self.compare_entity(local, remote)
        if not changes:
            return []
        return [DiffResult(
            operation=DiffOperation.UPDATE,
            entity_type=self.entity_type,
            entity_name=SHOP_ENTITY_NAME,
            changes=tuple(changes),
            desired=local,
            current=remote,
        )]
