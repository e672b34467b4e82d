# src/saleor_configurator/diff/service.py
"""
Serviço de reconciliação (diff) entre estado desejado e estado remoto.

Este módulo define o `DiffService`, responsável por obter o snapshot
remoto, preparar ambos os lados para comparação e executar os
comparadores de cada seção em ordem fixa.

Ordem das seções (estável e testada):
    shop → channels → productTypes → pageTypes → categories → attributes
    → warehouses → taxClasses

Responsabilidades:
    - Obter o snapshot remoto via `RemoteStore.fetch_snapshot`
    - Resolver referências de atributo dos product/page types antes da
      comparação: primeiro pelos atributos globais do snapshot, depois
      por UM lookup em lote via `AttributeResolver` (que alimenta o cache
      da run) e, por fim, pelos atributos globais locais
    - Aplicar o filtro de seções (include/exclude)
    - Consolidar o `DiffSummary`

Decisões arquiteturais:
    - Referências resolvidas são comparadas com os valores ATUAIS do
      atributo remoto; diferenças de valores aparecem apenas na seção
      `attributes`, nunca como fantasma no owner
    - Referências não resolvidas são comparadas apenas por nome, com warning
    - Erros remotos e de validação propagam sem captura

Limites explícitos:
    - Não muta a loja remota
    - Não decide política de deleção
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from saleor_configurator.attributes.cache import AttributeCache
from saleor_configurator.attributes.resolver import AttributeResolver
from saleor_configurator.core.pipeline.events import EventLog
from saleor_configurator.remote.store import RemoteStore
from saleor_configurator.schema.model import (
    AttributeDefinition,
    AttributeInput,
    AttributeKind,
    AttributeReference,
    Configuration,
    ConfigurationSection,
    PageType,
    ProductType,
)

from .comparators import (
    AttributeComparator,
    CategoryComparator,
    ChannelComparator,
    PageTypeComparator,
    ProductTypeComparator,
    ShopSettingsComparator,
    TaxClassComparator,
    WarehouseComparator,
)
from .types import DiffResult, DiffSummary


SECTION_ORDER: Tuple[ConfigurationSection, ...] = (
    ConfigurationSection.SHOP,
    ConfigurationSection.CHANNELS,
    ConfigurationSection.PRODUCT_TYPES,
    ConfigurationSection.PAGE_TYPES,
    ConfigurationSection.CATEGORIES,
    ConfigurationSection.ATTRIBUTES,
    ConfigurationSection.WAREHOUSES,
    ConfigurationSection.TAX_CLASSES,
)

_SOURCE = "diff"

AttributeIndex = Dict[Tuple[str, AttributeKind], AttributeDefinition]


def _references(configuration: Configuration) -> Iterable[Tuple[str, AttributeKind]]:
    for pt in configuration.product_types or ():
        for item in pt.product_attributes + pt.variant_attributes:
            if isinstance(item, AttributeReference):
                yield item.name, AttributeKind.PRODUCT
    for page_type in configuration.page_types or ():
        for item in page_type.attributes:
            if isinstance(item, AttributeReference):
                yield item.name, AttributeKind.CONTENT


def _normalize_items(
    items: Sequence[AttributeInput], kind: AttributeKind, index: AttributeIndex
) -> Tuple[AttributeInput, ...]:
    out: List[AttributeInput] = []
    for item in items:
        if isinstance(item, AttributeReference) and (item.name, kind) in index:
            out.append(replace(index[(item.name, kind)], variant_selection=item.variant_selection))
        else:
            out.append(item)
    return tuple(out)


def _normalize(configuration: Configuration, index: AttributeIndex) -> Configuration:
    product_types = None
    if configuration.product_types is not None:
        product_types = tuple(
            ProductType(
                name=pt.name,
                is_shipping_required=pt.is_shipping_required,
                product_attributes=_normalize_items(pt.product_attributes, AttributeKind.PRODUCT, index),
                variant_attributes=_normalize_items(pt.variant_attributes, AttributeKind.PRODUCT, index),
                remote_id=pt.remote_id,
            )
            for pt in configuration.product_types
        )
    page_types = None
    if configuration.page_types is not None:
        page_types = tuple(
            PageType(
                name=p.name,
                attributes=_normalize_items(p.attributes, AttributeKind.CONTENT, index),
                mode=p.mode,
                remote_id=p.remote_id,
            )
            for p in configuration.page_types
        )
    return replace(configuration, product_types=product_types, page_types=page_types)


class DiffService:
    def __init__(
        self,
        *,
        store: RemoteStore,
        resolver: Optional[AttributeResolver] = None,
        events: Optional[EventLog] = None,
        include_sections: Sequence[ConfigurationSection] = (),
        exclude_sections: Sequence[ConfigurationSection] = (),
    ):
        self.store = store
        self.events = events
        self.resolver = resolver or AttributeResolver(store=store, cache=AttributeCache(), events=events)
        self.include_sections = tuple(include_sections)
        self.exclude_sections = tuple(exclude_sections)

    def selected_sections(self) -> List[ConfigurationSection]:
        return [
            s for s in SECTION_ORDER
            if (not self.include_sections or s in self.include_sections)
            and s not in self.exclude_sections
        ]

    def _log(self, level: str, message: str, **extra) -> None:
        if self.events is not None:
            self.events.log(source=_SOURCE, level=level, message=message, **extra)

    def _warn(self, message: str) -> None:
        if self.events is not None:
            self.events.add_warning(source=_SOURCE, message=message)

    def build_attribute_index(self, local: Configuration, remote: Configuration) -> AttributeIndex:
        index: AttributeIndex = {(a.name, a.kind): a for a in remote.attributes or ()}

        wanted = [key for key in list(_references(local)) + list(_references(remote)) if key not in index]
        for kind in AttributeKind:
            names = [name for name, k in wanted if k == kind]
            if names:
                for name, remote_attr in self.resolver.lookup(names, kind).items():
                    index[(name, kind)] = remote_attr.to_definition()

        for definition in local.attributes or ():
            index.setdefault((definition.name, definition.kind), definition)

        for name, kind in _references(local):
            if (name, kind) not in index:
                self._warn(f"Attribute reference '{name}' ({kind.value}) could not be resolved; comparing by name only")
        return index

    @staticmethod
    def _restore_desired(results: List[DiffResult], originals) -> List[DiffResult]:
        # os estágios recebem a entidade local original, com referências intactas
        by_name = {e.name: e for e in originals or ()}
        return [
            replace(r, desired=by_name[r.entity_name]) if r.desired is not None and r.entity_name in by_name else r
            for r in results
        ]

    def compare(self, configuration: Configuration) -> DiffSummary:
        """Compara a configuração local com o snapshot remoto atual."""
        remote = self.store.fetch_snapshot()
        return self.compare_with(configuration, remote)

    def compare_with(self, configuration: Configuration, remote: Configuration) -> DiffSummary:
        sections = self.selected_sections()
        local = configuration

        if ConfigurationSection.PRODUCT_TYPES in sections or ConfigurationSection.PAGE_TYPES in sections:
            index = self.build_attribute_index(configuration, remote)
            local = _normalize(configuration, index)
            remote = _normalize(remote, index)

        comparators = {
            ConfigurationSection.SHOP: ShopSettingsComparator(events=self.events),
            ConfigurationSection.CHANNELS: ChannelComparator(events=self.events),
            ConfigurationSection.PRODUCT_TYPES: ProductTypeComparator(events=self.events),
            ConfigurationSection.PAGE_TYPES: PageTypeComparator(events=self.events),
            ConfigurationSection.CATEGORIES: CategoryComparator(events=self.events),
            ConfigurationSection.ATTRIBUTES: AttributeComparator(events=self.events),
            ConfigurationSection.WAREHOUSES: WarehouseComparator(events=self.events),
            ConfigurationSection.TAX_CLASSES: TaxClassComparator(events=self.events),
        }

        results: List[DiffResult] = []
        for section in sections:
            comparator = comparators[section]
            if isinstance(comparator, AttributeComparator):
                section_results = comparator.compare_configurations(local, remote)
            else:
                section_results = comparator.compare(local.section(section), remote.section(section))
            if local is not configuration and section in (
                ConfigurationSection.PRODUCT_TYPES,
                ConfigurationSection.PAGE_TYPES,
            ):
                section_results = self._restore_desired(section_results, configuration.section(section))
            self._log("info", "section compared", section=section.value, results=len(section_results))
            results.extend(section_results)

        summary = DiffSummary(results=tuple(results))
        self._log(
            "info",
            "diff completed",
            total=summary.total_changes,
            creates=summary.creates,
            updates=summary.updates,
            deletes=summary.deletes,
        )
        return summary
