# src/saleor_configurator/stages/page_types.py
"""Estágio de page types (atributos de conteúdo)."""

from __future__ import annotations

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.remote.store import AssignmentRole
from saleor_configurator.schema.model import AttributeKind, ConfigurationSection, PageType

from .assignments import assign, assigned_names
from .base import EntityStage


class PageTypeStage(EntityStage):
    name = "Managing page types"
    entity_type = EntityType.PAGE_TYPES

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        page_type: PageType = result.desired
        attrs = context.resolver.resolve_entries(
            page_type.attributes, AttributeKind.CONTENT, owner=page_type.name
        )
        created = context.store.create_entity(
            ConfigurationSection.PAGE_TYPES, {"name": page_type.name}
        )
        assign(context, created.id, attrs, AssignmentRole.CONTENT)

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        page_type: PageType = result.desired
        current: PageType = result.current
        attrs = context.resolver.resolve_entries(
            page_type.attributes,
            AttributeKind.CONTENT,
            assigned_names(current.attributes),
            owner=page_type.name,
        )
        assign(context, current.remote_id, attrs, AssignmentRole.CONTENT)
