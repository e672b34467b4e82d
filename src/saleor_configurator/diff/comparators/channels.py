# src/saleor_configurator/diff/comparators/channels.py
"""Comparador de canais: pareados por slug, rotulados pelo nome."""

from __future__ import annotations

from typing import List

from saleor_configurator.schema.model import CHANNEL_SETTINGS_FIELDS, Channel

from ..types import DiffChange, EntityType
from .base import EntityComparator, field_changes


class ChannelComparator(EntityComparator[Channel]):
    entity_type = EntityType.CHANNELS

    def key_of(self, entity: Channel) -> str:
        return entity.slug

    def label_of(self, entity: Channel) -> str:
        return entity.name

    def compare_entity(self, local: Channel, remote: Channel) -> List[DiffChange]:
        pairs = [
            ("name", remote.name, local.name),
            ("currencyCode", remote.currency_code, local.currency_code),
            ("defaultCountry", remote.default_country, local.default_country),
        ]
        if local.is_active is not None:
            pairs.append(("isActive", remote.is_active, local.is_active))
        for name in CHANNEL_SETTINGS_FIELDS:
            if name in local.settings:
                pairs.append((f"settings.{name}", remote.settings.get(name), local.settings[name]))
        return field_changes(pairs)
