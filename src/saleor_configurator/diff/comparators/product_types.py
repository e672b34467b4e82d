# src/saleor_configurator/diff/comparators/product_types.py
"""Comparador de product types (pareados por nome)."""

from __future__ import annotations

from typing import List

from saleor_configurator.schema.model import ProductType

from ..types import DiffChange, EntityType
from .attributes import compare_attribute_lists
from .base import EntityComparator, field_changes


class ProductTypeComparator(EntityComparator[ProductType]):
    entity_type = EntityType.PRODUCT_TYPES

    def key_of(self, entity: ProductType) -> str:
        return entity.name

    def compare_entity(self, local: ProductType, remote: ProductType) -> List[DiffChange]:
        changes: List[DiffChange] = []
        if local.is_shipping_required is not None:
            changes += field_changes([
                ("isShippingRequired", remote.is_shipping_required, local.is_shipping_required),
            ])

        def on_duplicate(attribute: str) -> None:
            self.warn(f"Product type '{local.name}' has attribute '{attribute}' assigned twice remotely")

        changes += compare_attribute_lists(
            "productAttributes",
            local.product_attributes,
            remote.product_attributes,
            on_remote_duplicate=on_duplicate,
        )
        changes += compare_attribute_lists(
            "variantAttributes",
            local.variant_attributes,
            remote.variant_attributes,
            compare_variant_selection=True,
            on_remote_duplicate=on_duplicate,
        )
        return changes
