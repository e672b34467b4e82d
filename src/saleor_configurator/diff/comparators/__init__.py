"""Comparadores por tipo de entidade."""

from .attributes import AttributeComparator
from .base import EntityComparator
from .categories import CategoryComparator
from .channels import ChannelComparator
from .page_types import PageTypeComparator
from .product_types import ProductTypeComparator
from .shop import ShopSettingsComparator
from .tax_classes import TaxClassComparator
from .warehouses import WarehouseComparator

__all__ = [
    "AttributeComparator",
    "CategoryComparator",
    "ChannelComparator",
    "EntityComparator",
    "PageTypeComparator",
    "ProductTypeComparator",
    "ShopSettingsComparator",
    "TaxClassComparator",
    "WarehouseComparator",
]
