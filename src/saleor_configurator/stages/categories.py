# src/saleor_configurator/stages/categories.py
"""
Estágio de categorias (árvore recursiva por slug).

Criação percorre a árvore em pré-ordem, passando o id do pai recém-criado
para cada filho. Atualização pareia os nós pelo slug: renomeia nós
existentes e cria subárvores que existem apenas localmente sob o nó
remoto correspondente. Filhos presentes apenas no remoto nunca são
removidos.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.diff.types import DiffResult, EntityType
from saleor_configurator.schema.model import Category, ConfigurationSection, EntityMode

from .base import EntityStage


def create_tree(context: DeploymentContext, node: Category, parent_id: Optional[str] = None) -> str:
    payload: Dict[str, Any] = {"name": node.name, "slug": node.slug}
    if parent_id is not None:
        payload["parent"] = parent_id
    created = context.store.create_entity(ConfigurationSection.CATEGORIES, payload)
    for child in node.subcategories:
        create_tree(context, child, created.id)
    return created.id


def sync_tree(context: DeploymentContext, local: Category, remote: Category) -> None:
    if local.name != remote.name:
        context.store.update_entity(
            ConfigurationSection.CATEGORIES, remote.remote_id, {"name": local.name}
        )

    if local.mode == EntityMode.CREATE:
        return

    remote_children = {}
    for child in remote.subcategories:
        remote_children.setdefault(child.slug, child)

    for child in local.subcategories:
        match = remote_children.get(child.slug)
        if match is None:
            create_tree(context, child, remote.remote_id)
        else:
            sync_tree(context, child, match)


class CategoryStage(EntityStage):
    name = "Managing categories"
    entity_type = EntityType.CATEGORIES

    def create(self, context: DeploymentContext, result: DiffResult) -> None:
        create_tree(context, result.desired)

    def update(self, context: DeploymentContext, result: DiffResult) -> None:
        sync_tree(context, result.desired, result.current)
