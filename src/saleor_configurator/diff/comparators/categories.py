# src/saleor_configurator/diff/comparators/categories.py
"""
Comparador de categorias (árvore recursiva, pareada por slug).

Uma subárvore presente apenas localmente gera UMA mudança descrevendo a
criação da subárvore inteira, não uma por folha. Subcategorias presentes
apenas no remoto geram mudança destrutiva (nunca removidas).
"""

from __future__ import annotations

from typing import Dict, List

from saleor_configurator.schema.model import Category, EntityMode

from ..types import DiffChange, EntityType
from .base import EntityComparator


def _by_slug(nodes) -> Dict[str, Category]:
    out: Dict[str, Category] = {}
    for node in nodes:
        out.setdefault(node.slug, node)
    return out


class CategoryComparator(EntityComparator[Category]):
    entity_type = EntityType.CATEGORIES

    def key_of(self, entity: Category) -> str:
        return entity.slug

    def label_of(self, entity: Category) -> str:
        return entity.name

    def compare_entity(self, local: Category, remote: Category) -> List[DiffChange]:
        return self._compare_node(local, remote, prefix="")

    def _compare_node(self, local: Category, remote: Category, *, prefix: str) -> List[DiffChange]:
        changes: List[DiffChange] = []
        if local.name != remote.name:
            changes.append(DiffChange.of(f"{prefix}name", remote.name, local.name))

        # categoria declarada sem `subcategories` não gerencia os filhos
        if local.mode == EntityMode.CREATE:
            return changes

        local_children = _by_slug(local.subcategories)
        remote_children = _by_slug(remote.subcategories)
        field = f"{prefix}subcategories"

        for slug, child in local_children.items():
            current = remote_children.get(slug)
            if current is None:
                descendants = child.size - 1
                suffix = f" (with {descendants} descendant(s))" if descendants else ""
                changes.append(DiffChange(
                    field=field,
                    current=None,
                    desired=child,
                    description=f'{field}: "{child.name}" added{suffix}',
                ))
                continue
            changes += self._compare_node(child, current, prefix=f"{field}.{slug}.")

        for slug, child in remote_children.items():
            if slug not in local_children:
                changes.append(DiffChange(
                    field=field,
                    current=child,
                    desired=None,
                    description=f'{field}: "{child.name}" exists only remotely (not removed)',
                    destructive=True,
                ))
        return changes
