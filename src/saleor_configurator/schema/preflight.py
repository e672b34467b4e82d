# src/saleor_configurator/schema/preflight.py
"""
Preflight do estado desejado.

Este módulo executa as validações semânticas que precisam enxergar o
documento inteiro antes de qualquer chamada remota:

    - identificadores naturais duplicados dentro de uma seção
      (slug de canais, categorias e warehouses, name das demais entidades;
      `productAttributes` e `contentAttributes` são seções distintas)
    - legalidade de definições de atributo (entityType obrigatório em
      REFERENCE, values apenas em tipos de escolha, variantSelection
      apenas em tipos suportados e apenas em variantAttributes)
    - conflitos entre definições inline e globais de mesmo nome

Decisões arquiteturais:
    - Todos os problemas são acumulados e reportados de uma vez
    - Duplicatas têm precedência e geram `DuplicateIdentifierError`
    - Demais problemas geram `ValidationError` (exit code 4)
    - As regras de atributo são reutilizadas pelo resolvedor, que as
      reaplica imediatamente antes de qualquer mutação remota

Invariantes:
    - `scan_for_duplicate_identifiers` nunca levanta exceção
    - `ensure_valid` nunca acessa a loja remota

Limites explícitos:
    - Não valida referências a atributos inexistentes localmente
      (podem existir na loja remota; o resolvedor decide)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from saleor_configurator.core import errors as catalog
from saleor_configurator.core.exceptions import DuplicateIdentifierError, ValidationError

from .model import (
    CHOICE_INPUT_TYPES,
    REFERENCE_INPUT_TYPES,
    VARIANT_SELECTION_INPUT_TYPES,
    AttributeDefinition,
    AttributeInput,
    AttributeKind,
    Configuration,
    ConfigurationSection,
    InputType,
)

_ATTRIBUTE_SECTIONS = (
    (AttributeKind.PRODUCT, "productAttributes"),
    (AttributeKind.CONTENT, "contentAttributes"),
)


@dataclass(frozen=True)
class PreflightIssue:
    section: str
    message: str
    entity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"section": self.section, "entity": self.entity, "message": self.message}


@dataclass(frozen=True)
class DuplicateIssue:
    section: str
    identifier: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"section": self.section, "identifier": self.identifier, "count": self.count}


def _duplicates(section: str, keys: Iterable[str]) -> List[DuplicateIssue]:
    counts = Counter(keys)
    return [
        DuplicateIssue(section=section, identifier=key, count=n)
        for key, n in counts.items()
        if n > 1
    ]


def scan_for_duplicate_identifiers(configuration: Configuration) -> List[DuplicateIssue]:
    """Lista identificadores naturais repetidos em cada seção de lista."""
    issues: List[DuplicateIssue] = []
    if configuration.channels:
        issues += _duplicates(ConfigurationSection.CHANNELS.value, (c.slug for c in configuration.channels))
    for kind, key in _ATTRIBUTE_SECTIONS:
        attributes = configuration.attribute_section(kind)
        if attributes:
            issues += _duplicates(key, (a.name for a in attributes))
    if configuration.product_types:
        issues += _duplicates(ConfigurationSection.PRODUCT_TYPES.value, (p.name for p in configuration.product_types))
    if configuration.page_types:
        issues += _duplicates(ConfigurationSection.PAGE_TYPES.value, (p.name for p in configuration.page_types))
    if configuration.categories:
        issues += _duplicates(
            ConfigurationSection.CATEGORIES.value,
            (node.slug for root in configuration.categories for node in root.walk()),
        )
    if configuration.warehouses:
        issues += _duplicates(ConfigurationSection.WAREHOUSES.value, (w.slug for w in configuration.warehouses))
    if configuration.tax_classes:
        issues += _duplicates(ConfigurationSection.TAX_CLASSES.value, (t.name for t in configuration.tax_classes))
    return issues


# -----------------------------
# Regras de atributo
# -----------------------------
def attribute_input_issues(
    item: AttributeInput,
    *,
    as_variant: bool,
    resolved_input_type: Optional[InputType] = None,
) -> List[str]:
    """
    Problemas de legalidade de uma entrada de atributo.

    Para referências, `resolved_input_type` permite validar
    `variantSelection` quando o tipo já é conhecido (cache ou remoto).
    """
    problems: List[str] = []
    input_type = item.input_type if isinstance(item, AttributeDefinition) else resolved_input_type

    if isinstance(item, AttributeDefinition):
        if item.input_type in REFERENCE_INPUT_TYPES and item.entity_type is None:
            problems.append(f"attribute '{item.name}' of type {item.input_type.value} requires entityType")
        if item.input_type not in REFERENCE_INPUT_TYPES and item.entity_type is not None:
            problems.append(f"attribute '{item.name}' declares entityType but is {item.input_type.value}")
        if item.values and item.input_type not in CHOICE_INPUT_TYPES:
            problems.append(f"attribute '{item.name}' declares values but is {item.input_type.value}")

    if item.variant_selection:
        if not as_variant:
            problems.append(f"attribute '{item.name}' uses variantSelection outside variantAttributes")
        elif input_type is not None and input_type not in VARIANT_SELECTION_INPUT_TYPES:
            problems.append(
                f"attribute '{item.name}' of type {input_type.value} does not support variantSelection"
            )
    return problems


def _owner_attribute_issues(
    section: ConfigurationSection,
    owner: str,
    groups: List[tuple],
    globals_by_name: Dict[str, AttributeDefinition],
) -> List[PreflightIssue]:
    issues: List[PreflightIssue] = []
    names: List[str] = []
    for items, as_variant in groups:
        for item in items:
            names.append(item.name)
            resolved = None
            if not isinstance(item, AttributeDefinition) and item.name in globals_by_name:
                resolved = globals_by_name[item.name].input_type
            for msg in attribute_input_issues(item, as_variant=as_variant, resolved_input_type=resolved):
                issues.append(PreflightIssue(section=section.value, entity=owner, message=msg))
            if isinstance(item, AttributeDefinition) and item.name in globals_by_name:
                declared = globals_by_name[item.name]
                if declared.input_type != item.input_type:
                    issues.append(PreflightIssue(
                        section=section.value,
                        entity=owner,
                        message=(
                            f"inline attribute '{item.name}' is {item.input_type.value} "
                            f"but the global definition is {declared.input_type.value}"
                        ),
                    ))
    for dup in _duplicates(section.value, names):
        issues.append(PreflightIssue(
            section=section.value,
            entity=owner,
            message=f"attribute '{dup.identifier}' assigned {dup.count} times",
        ))
    return issues


def validate_configuration(configuration: Configuration) -> List[PreflightIssue]:
    """Acumula todos os problemas semânticos que não são duplicatas de seção."""
    issues: List[PreflightIssue] = []
    # atributos globais só se relacionam com owners do mesmo kind
    globals_by_kind = {
        kind: {a.name: a for a in configuration.attributes_of_kind(kind)} for kind in AttributeKind
    }

    for kind, key in _ATTRIBUTE_SECTIONS:
        for attr in configuration.attributes_of_kind(kind):
            for msg in attribute_input_issues(attr, as_variant=True):
                issues.append(PreflightIssue(section=key, entity=attr.name, message=msg))

    for pt in configuration.product_types or ():
        issues += _owner_attribute_issues(
            ConfigurationSection.PRODUCT_TYPES,
            pt.name,
            [(pt.product_attributes, False), (pt.variant_attributes, True)],
            globals_by_kind[AttributeKind.PRODUCT],
        )

    for page_type in configuration.page_types or ():
        issues += _owner_attribute_issues(
            ConfigurationSection.PAGE_TYPES,
            page_type.name,
            [(page_type.attributes, False)],
            globals_by_kind[AttributeKind.CONTENT],
        )

    return issues


def ensure_valid(configuration: Configuration) -> None:
    """
    Executa o preflight completo e levanta em caso de problemas.

    Raises:
        DuplicateIdentifierError: Se houver identificadores duplicados.
        ValidationError: Se houver qualquer outro problema semântico.
    """
    duplicates = scan_for_duplicate_identifiers(configuration)
    if duplicates:
        payload = catalog.duplicate_entity_identifier(
            section=", ".join(sorted({d.section for d in duplicates})),
            identifiers=[d.identifier for d in duplicates],
        )
        raise DuplicateIdentifierError(
            message=payload.message,
            details={"duplicates": [d.to_dict() for d in duplicates]},
            hint=payload.hint,
        )

    issues = validate_configuration(configuration)
    if issues:
        raise ValidationError(
            message=f"Configuration has {len(issues)} validation issue(s)",
            details={"issues": [i.to_dict() for i in issues]},
            hint="Corrija os itens listados em details.issues e execute novamente.",
        )
