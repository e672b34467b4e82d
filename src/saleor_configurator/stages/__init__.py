"""
Estágios concretos de deployment.

A ordem de `default_stages()` é a ordem de execução e é um contrato
testado: atributos globais existem antes dos product types e page types
que os vinculam. Warehouses e tax classes não dependem das seções
anteriores e rodam por último.
"""

from __future__ import annotations

from typing import List

from saleor_configurator.core.pipeline.registry import StageRegistry
from saleor_configurator.core.pipeline.stage import Stage

from .attributes import AttributeStage
from .categories import CategoryStage
from .channels import ChannelStage
from .page_types import PageTypeStage
from .product_types import ProductTypeStage
from .shop import ShopSettingsStage
from .tax_classes import TaxClassStage
from .validation import ValidationStage
from .warehouses import WarehouseStage


def default_stages() -> List[Stage]:
    return [
        ValidationStage(),
        ShopSettingsStage(),
        ChannelStage(),
        AttributeStage(),
        ProductTypeStage(),
        PageTypeStage(),
        CategoryStage(),
        WarehouseStage(),
        TaxClassStage(),
    ]


def build_stage_registry() -> StageRegistry:
    return StageRegistry.of(default_stages())


__all__ = [
    "AttributeStage",
    "CategoryStage",
    "ChannelStage",
    "PageTypeStage",
    "ProductTypeStage",
    "ShopSettingsStage",
    "TaxClassStage",
    "ValidationStage",
    "WarehouseStage",
    "build_stage_registry",
    "default_stages",
]
