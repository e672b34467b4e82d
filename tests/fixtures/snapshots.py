# tests/fixtures/snapshots.py
"""Construção de snapshots remotos (com `remote_id`) a partir de documentos YAML-like."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict

from saleor_configurator.schema.model import Category, Configuration
from saleor_configurator.schema.parser import parse_configuration


def _category(node: Category) -> Category:
    return replace(
        node,
        remote_id=f"category-{node.slug}",
        subcategories=tuple(_category(c) for c in node.subcategories),
    )


def as_remote(configuration: Configuration) -> Configuration:
    def each(items, make):
        return None if items is None else tuple(make(i) for i in items)

    return Configuration(
        shop=replace(configuration.shop, remote_id="shop") if configuration.shop else None,
        channels=each(configuration.channels, lambda c: replace(c, remote_id=f"channel-{c.slug}")),
        product_attributes=each(
            configuration.product_attributes, lambda a: replace(a, remote_id=f"attribute-{a.name}")
        ),
        content_attributes=each(
            configuration.content_attributes, lambda a: replace(a, remote_id=f"content-attribute-{a.name}")
        ),
        product_types=each(
            configuration.product_types, lambda p: replace(p, remote_id=f"product-type-{p.name}")
        ),
        page_types=each(configuration.page_types, lambda p: replace(p, remote_id=f"page-type-{p.name}")),
        categories=each(configuration.categories, _category),
        warehouses=each(configuration.warehouses, lambda w: replace(w, remote_id=f"warehouse-{w.slug}")),
        tax_classes=each(configuration.tax_classes, lambda t: replace(t, remote_id=f"tax-class-{t.name}")),
    )


def remote_snapshot(data: Dict[str, Any]) -> Configuration:
    return as_remote(parse_configuration(data))
