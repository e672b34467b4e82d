# src/saleor_configurator/diff/comparators/page_types.py
"""Comparador de page types (tipos de conteúdo), pareados por nome."""

from __future__ import annotations

from typing import List

from saleor_configurator.schema.model import EntityMode, PageType

from ..types import DiffChange, EntityType
from .attributes import compare_attribute_lists
from .base import EntityComparator


class PageTypeComparator(EntityComparator[PageType]):
    entity_type = EntityType.PAGE_TYPES

    def key_of(self, entity: PageType) -> str:
        return entity.name

    def compare_entity(self, local: PageType, remote: PageType) -> List[DiffChange]:
        # page type declarado sem `attributes` só garante existência
        if local.mode == EntityMode.CREATE:
            return []
        return compare_attribute_lists(
            "attributes",
            local.attributes,
            remote.attributes,
            on_remote_duplicate=lambda a: self.warn(
                f"Page type '{local.name}' has attribute '{a}' assigned twice remotely"
            ),
        )
