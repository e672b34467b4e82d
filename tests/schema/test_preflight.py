# tests/schema/test_preflight.py
"""
Testes do preflight: validações executadas antes de qualquer chamada remota.

Duplicatas de identificador natural têm erro próprio; as demais regras
(atributos de referência, variantSelection, conflitos inline) são
acumuladas e reportadas em conjunto.
"""

import pytest

from saleor_configurator.core.exceptions import DuplicateIdentifierError, ExitCode, ValidationError
from saleor_configurator.schema.model import AttributeDefinition, AttributeKind, InputType
from saleor_configurator.schema.parser import parse_configuration
from saleor_configurator.schema.preflight import (
    attribute_input_issues,
    ensure_valid,
    scan_for_duplicate_identifiers,
    validate_configuration,
)


def test_valid_document_passes(catalog_document):
    ensure_valid(parse_configuration(catalog_document))


def test_duplicate_channel_slugs_are_rejected(germany_channel):
    config = parse_configuration({"channels": [germany_channel, dict(germany_channel, name="Deutschland")]})

    with pytest.raises(DuplicateIdentifierError) as exc:
        ensure_valid(config)

    assert exc.value.exit_code == ExitCode.VALIDATION
    assert exc.value.details["duplicates"] == [{"section": "channels", "identifier": "germany", "count": 2}]


def test_category_slugs_are_unique_across_the_tree():
    config = parse_configuration({
        "categories": [
            {"name": "Apparel", "slug": "apparel", "subcategories": [{"name": "Sale", "slug": "sale"}]},
            {"name": "Books", "slug": "books", "subcategories": [{"name": "Sale", "slug": "sale"}]},
        ],
    })
    issues = scan_for_duplicate_identifiers(config)
    assert [(i.section, i.identifier) for i in issues] == [("categories", "sale")]


def test_variant_selection_rules():
    text = AttributeDefinition(
        name="Notes", input_type=InputType.PLAIN_TEXT, kind=AttributeKind.PRODUCT, variant_selection=True
    )
    dropdown = AttributeDefinition(
        name="Size", input_type=InputType.DROPDOWN, kind=AttributeKind.PRODUCT, variant_selection=True
    )

    assert attribute_input_issues(dropdown, as_variant=True) == []
    assert attribute_input_issues(dropdown, as_variant=False)
    assert attribute_input_issues(text, as_variant=True)


def test_reference_attribute_without_entity_type():
    config = parse_configuration({
        "productTypes": [
            {"name": "Book", "productAttributes": [{"name": "Author", "inputType": "REFERENCE"}]},
        ],
    })
    issues = validate_configuration(config)
    assert len(issues) == 1
    assert "requires entityType" in issues[0].message

    with pytest.raises(ValidationError) as exc:
        ensure_valid(config)
    assert not isinstance(exc.value, DuplicateIdentifierError)
    assert exc.value.details["issues"][0]["entity"] == "Book"


def test_reference_variant_selection_checked_against_global_type():
    config = parse_configuration({
        "productAttributes": [{"name": "Notes", "inputType": "PLAIN_TEXT"}],
        "productTypes": [
            {"name": "Shirt", "variantAttributes": [{"attribute": "Notes", "variantSelection": True}]},
        ],
    })
    messages = [i.message for i in validate_configuration(config)]
    assert any("does not support variantSelection" in m for m in messages)


def test_inline_conflicting_with_global_and_double_assignment():
    config = parse_configuration({
        "productAttributes": [{"name": "Size", "inputType": "DROPDOWN", "values": ["S"]}],
        "productTypes": [
            {
                "name": "Shirt",
                "productAttributes": [
                    {"name": "Size", "inputType": "PLAIN_TEXT"},
                    {"attribute": "Size"},
                ],
            },
        ],
    })
    messages = [i.message for i in validate_configuration(config)]
    assert any("global definition is DROPDOWN" in m for m in messages)
    assert any("assigned 2 times" in m for m in messages)


def test_same_name_in_product_and_content_sections_is_not_a_duplicate():
    config = parse_configuration({
        "productAttributes": [{"name": "Author", "inputType": "PLAIN_TEXT"}],
        "contentAttributes": [{"name": "Author", "inputType": "PLAIN_TEXT"}],
    })

    assert scan_for_duplicate_identifiers(config) == []
    ensure_valid(config)


def test_duplicate_within_one_attribute_section_names_that_section():
    config = parse_configuration({
        "contentAttributes": [
            {"name": "Author", "inputType": "PLAIN_TEXT"},
            {"name": "Author", "inputType": "RICH_TEXT"},
        ],
    })

    issues = scan_for_duplicate_identifiers(config)
    assert [(i.section, i.identifier) for i in issues] == [("contentAttributes", "Author")]


def test_inline_conflict_only_checked_against_globals_of_the_same_kind():
    config = parse_configuration({
        "contentAttributes": [{"name": "Size", "inputType": "PLAIN_TEXT"}],
        "productTypes": [
            {"name": "Shirt", "productAttributes": [{"name": "Size", "inputType": "DROPDOWN", "values": ["S"]}]},
        ],
    })

    assert validate_configuration(config) == []


def test_duplicate_warehouse_slugs_and_tax_class_names():
    address = {"streetAddress1": "Main 1", "city": "Berlin", "postalCode": "10115", "country": "DE"}
    config = parse_configuration({
        "warehouses": [
            {"name": "Berlin", "slug": "berlin", "address": address},
            {"name": "Berlin 2", "slug": "berlin", "address": address},
        ],
        "taxClasses": [{"name": "Books"}, {"name": "Books"}],
    })

    issues = scan_for_duplicate_identifiers(config)
    assert [(i.section, i.identifier) for i in issues] == [("warehouses", "berlin"), ("taxClasses", "Books")]
