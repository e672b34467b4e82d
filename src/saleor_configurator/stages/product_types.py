# src/saleor_configurator/stages/product_types.py
"""
Estágio de product types.

Fluxo por product type:
    1. Resolver atributos de produto e de variante (validação antes de
       qualquer mutação do owner; referências já vinculadas são ignoradas)
    2. Criar o product type, ou atualizar `isShippingRequired`
    3. Vincular os atributos resolvidos em cada papel
    4. Sincronizar `variantSelection` de atributos de variante já vinculados
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.remote.store import AssignmentRole
from saleor_configurator.schema.model import (
    AttributeKind,
    AttributeReference,
    ConfigurationSection,
    ProductType,
)

from .assignments import assign, assigned_names
from .base import EntityStage, applicable_changes

_VARIANT_SELECTION_SUFFIX = ".variantSelection"


class ProductTypeStage(EntityStage):
    name = "Managing product types"
    entity_type = EntityType.PRODUCT_TYPES

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        product_type: ProductType = result.desired
        resolver = context.resolver

        product_attrs = resolver.resolve_entries(
            product_type.product_attributes, AttributeKind.PRODUCT, owner=product_type.name
        )
        variant_attrs = resolver.resolve_entries(
            product_type.variant_attributes,
            AttributeKind.PRODUCT,
            owner=product_type.name,
            as_variant=True,
        )

        payload: Dict[str, Any] = {"name": product_type.name}
        if product_type.is_shipping_required is not None:
            payload["isShippingRequired"] = product_type.is_shipping_required
        created = context.store.create_entity(ConfigurationSection.PRODUCT_TYPES, payload)

        assign(context, created.id, product_attrs, AssignmentRole.PRODUCT)
        assign(context, created.id, variant_attrs, AssignmentRole.VARIANT)

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        product_type: ProductType = result.desired
        current: ProductType = result.current
        resolver = context.resolver

        product_attrs = resolver.resolve_entries(
            product_type.product_attributes,
            AttributeKind.PRODUCT,
            assigned_names(current.product_attributes),
            owner=product_type.name,
        )
        variant_attrs = resolver.resolve_entries(
            product_type.variant_attributes,
            AttributeKind.PRODUCT,
            assigned_names(current.variant_attributes),
            owner=product_type.name,
            as_variant=True,
        )

        changes = applicable_changes(result)
        patch: Dict[str, Any] = {}
        for change in changes:
            if change.field == "isShippingRequired":
                patch["isShippingRequired"] = change.desired
        if patch:
            context.store.update_entity(ConfigurationSection.PRODUCT_TYPES, current.remote_id, patch)

        assign(context, current.remote_id, product_attrs, AssignmentRole.PRODUCT)
        assign(context, current.remote_id, variant_attrs, AssignmentRole.VARIANT)

        toggled = self._variant_selection_changes(changes)
        if toggled:
            entries = resolver.resolve_entries(
                [AttributeReference(attribute=n, variant_selection=v) for n, v in toggled],
                AttributeKind.PRODUCT,
                owner=product_type.name,
                as_variant=True,
            )
            context.store.update_entity(
                ConfigurationSection.PRODUCT_TYPES,
                current.remote_id,
                {
                    "variantSelection": [
                        {"id": e.remote_id, "variantSelection": e.variant_selection}
                        for e in entries
                    ]
                },
            )

    @staticmethod
    def _variant_selection_changes(changes) -> List[Tuple[str, bool]]:
        prefix = "variantAttributes."
        out = []
        for change in changes:
            if change.field.startswith(prefix) and change.field.endswith(_VARIANT_SELECTION_SUFFIX):
                name = change.field[len(prefix):-len(_VARIANT_SELECTION_SUFFIX)]
                out.append((name, bool(change.desired)))
        return out
