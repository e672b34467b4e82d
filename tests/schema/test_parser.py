# tests/schema/test_parser.py
"""
Testes do parser do documento de estado desejado.

Cobrem a semântica de seção ausente vs. vazia, a união create/update
resolvida pelo parser e a rejeição de documentos malformados.
"""

import pytest

from saleor_configurator.schema.errors import ConfigurationSchemaError
from saleor_configurator.schema.model import (
    AttributeDefinition,
    AttributeKind,
    AttributeReference,
    ConfigurationSection,
    EntityMode,
    InputType,
    ReferenceEntityType,
)
from saleor_configurator.schema.parser import parse_configuration


def test_full_document_is_parsed(catalog_document):
    config = parse_configuration(catalog_document)

    assert config.shop.values["defaultMailSenderName"] == "Store"
    assert [c.slug for c in config.channels] == ["germany"]
    assert [(a.name, a.kind) for a in config.attributes] == [
        ("Color", AttributeKind.PRODUCT),
        ("Summary", AttributeKind.CONTENT),
    ]
    assert config.attributes[0].values == ("Red", "Blue")

    clothing = config.product_types[0]
    assert clothing.is_shipping_required is True
    assert clothing.product_attributes == (AttributeReference(attribute="Color"),)
    size = clothing.variant_attributes[0]
    assert isinstance(size, AttributeDefinition)
    assert size.input_type == InputType.DROPDOWN
    assert size.values == ("S", "M", "L")
    assert size.variant_selection is True

    apparel = config.categories[0]
    assert apparel.mode == EntityMode.UPDATE
    assert apparel.subcategories[0].mode == EntityMode.CREATE
    assert apparel.size == 2


def test_missing_section_is_none_and_empty_section_is_empty():
    config = parse_configuration({"channels": []})

    assert config.channels == ()
    assert config.product_types is None
    assert config.section(ConfigurationSection.CATEGORIES) is None


def test_entity_mode_follows_update_only_fields(germany_channel):
    config = parse_configuration({
        "channels": [
            germany_channel,
            dict(germany_channel, slug="germany-b2b", settings={"allowUnpaidOrders": True}),
        ],
        "pageTypes": [{"name": "Landing"}, {"name": "Article", "attributes": []}],
    })

    assert [c.mode for c in config.channels] == [EntityMode.CREATE, EntityMode.UPDATE]
    assert [p.mode for p in config.page_types] == [EntityMode.CREATE, EntityMode.UPDATE]


def test_reference_attribute_requires_known_entity_type():
    config = parse_configuration({
        "productAttributes": [{"name": "Author", "inputType": "REFERENCE", "entityType": "PAGE"}],
    })
    assert config.attributes[0].entity_type == ReferenceEntityType.PAGE

    with pytest.raises(ConfigurationSchemaError):
        parse_configuration({
            "productAttributes": [{"name": "Author", "inputType": "REFERENCE", "entityType": "BLOG"}],
        })


@pytest.mark.parametrize(
    "document",
    [
        {"menus": []},
        {"warehouses": [{"name": "Berlin", "slug": "berlin"}]},
        {"taxClasses": [{"name": "Books", "countryRates": [{"countryCode": "DE", "rate": 120}]}]},
        {"channels": {"name": "Germany"}},
        {"channels": [{"name": "Germany", "slug": "germany"}]},
        {"productAttributes": [{"name": "Size", "inputType": "TEXTAREA"}]},
        {"shop": {"unknownField": 1}},
        {"channels": [{"name": "G", "slug": "g", "currencyCode": "EUR", "defaultCountry": "DE", "isActive": "yes"}]},
        {"categories": [{"name": "Apparel"}]},
    ],
)
def test_malformed_documents_are_rejected(document):
    with pytest.raises(ConfigurationSchemaError) as exc:
        parse_configuration(document)
    assert exc.value.exit_code == 4


def test_configuration_to_dict_splits_attribute_kinds(catalog_document):
    data = parse_configuration(catalog_document).to_dict()
    assert [a["name"] for a in data["productAttributes"]] == ["Color"]
    assert [a["name"] for a in data["contentAttributes"]] == ["Summary"]


def test_attribute_sections_are_configured_independently():
    config = parse_configuration({"productAttributes": [{"name": "Color", "inputType": "PLAIN_TEXT"}]})

    assert [a.name for a in config.product_attributes] == ["Color"]
    assert config.content_attributes is None
    assert "contentAttributes" not in config.to_dict()

    empty_content = parse_configuration({"contentAttributes": []})
    assert empty_content.product_attributes is None
    assert empty_content.content_attributes == ()
    assert empty_content.attributes == ()


def test_warehouses_and_tax_classes_are_parsed():
    config = parse_configuration({
        "warehouses": [
            {
                "name": "Berlin",
                "slug": "berlin",
                "email": "ops@example.com",
                "address": {"streetAddress1": "Main 1", "city": "Berlin", "postalCode": "10115", "country": "DE"},
            },
        ],
        "taxClasses": [{"name": "Books", "countryRates": [{"countryCode": "de", "rate": 7}]}],
    })

    (warehouse,) = config.warehouses
    assert warehouse.slug == "berlin"
    assert warehouse.is_private is False
    assert warehouse.click_and_collect_option == "DISABLED"
    assert warehouse.address["city"] == "Berlin"

    (books,) = config.tax_classes
    assert [(r.country_code, r.rate) for r in books.country_rates] == [("DE", 7.0)]
