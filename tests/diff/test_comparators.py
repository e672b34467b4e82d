# tests/diff/test_comparators.py
"""
Testes dos comparadores por seção.

Cada comparador é exercitado isoladamente, sem RemoteStore: entradas
locais e remotas são construídas diretamente.
"""

import pytest

from saleor_configurator.core.exceptions import DuplicateIdentifierError
from saleor_configurator.diff.comparators import (
    AttributeComparator,
    CategoryComparator,
    ChannelComparator,
    PageTypeComparator,
    ProductTypeComparator,
    ShopSettingsComparator,
    TaxClassComparator,
    WarehouseComparator,
)
from saleor_configurator.diff.types import DiffOperation, EntityType
from saleor_configurator.schema.model import (
    AttributeDefinition,
    AttributeKind,
    AttributeReference,
    Category,
    Channel,
    EntityMode,
    InputType,
    PageType,
    ProductType,
    ShopSettings,
    TaxClass,
    TaxRate,
    Warehouse,
)


def _channel(currency="EUR", **kw):
    return Channel(name=kw.pop("name", "Germany"), slug="germany", currency_code=currency,
                   default_country="DE", **kw)


def _size(*values, variant_selection=True):
    return AttributeDefinition(
        name="Size",
        input_type=InputType.DROPDOWN,
        kind=AttributeKind.PRODUCT,
        values=tuple(values),
        variant_selection=variant_selection,
    )


# -----------------------------
# Channels
# -----------------------------
def test_channel_only_local_is_created():
    results = ChannelComparator().compare([_channel()], [])

    assert len(results) == 1
    assert results[0].operation == DiffOperation.CREATE
    assert results[0].entity_type == EntityType.CHANNELS
    assert results[0].entity_name == "Germany"
    assert results[0].changes == ()


def test_channel_currency_update_describes_the_change():
    results = ChannelComparator().compare([_channel("EUR")], [_channel("USD")])

    assert [r.operation for r in results] == [DiffOperation.UPDATE]
    change = results[0].changes[0]
    assert (change.field, change.current, change.desired) == ("currencyCode", "USD", "EUR")
    assert change.description == 'currencyCode: "USD" → "EUR"'


def test_channel_only_remote_is_delete():
    results = ChannelComparator().compare([], [_channel()])
    assert [r.operation for r in results] == [DiffOperation.DELETE]
    assert results[0].desired is None


def test_identical_channels_produce_nothing():
    assert ChannelComparator().compare([_channel()], [_channel()]) == []


def test_absent_section_is_not_compared():
    assert ChannelComparator().compare(None, [_channel()]) == []


def test_channel_settings_only_when_declared():
    local = _channel(settings={"allowUnpaidOrders": True}, mode=EntityMode.UPDATE)
    remote = _channel(settings={"allowUnpaidOrders": False, "expireOrdersAfter": 10})

    changes = ChannelComparator().compare([local], [remote])[0].changes

    assert [c.field for c in changes] == ["settings.allowUnpaidOrders"]


def test_local_duplicates_are_rejected():
    with pytest.raises(DuplicateIdentifierError) as exc:
        ChannelComparator().compare([_channel(), _channel(name="Deutschland")], [])
    assert exc.value.details["identifiers"] == ["germany"]


def test_remote_duplicates_keep_first_with_warning(events):
    comparator = ChannelComparator(events=events)

    results = comparator.compare([_channel("EUR")], [_channel("EUR"), _channel("USD")])

    assert results == []
    assert events.warnings_for("diff.channels")


# -----------------------------
# Shop
# -----------------------------
def test_shop_compares_declared_fields_only():
    local = ShopSettings(values={"defaultMailSenderName": "Store"})
    remote = ShopSettings(values={"defaultMailSenderName": "Old", "trackInventoryByDefault": False})

    results = ShopSettingsComparator().compare(local, remote)

    assert len(results) == 1
    assert [c.field for c in results[0].changes] == ["defaultMailSenderName"]


def test_shop_without_local_values_is_ignored():
    remote = ShopSettings(values={"defaultMailSenderName": "Old"})
    assert ShopSettingsComparator().compare(None, remote) == []
    assert ShopSettingsComparator().compare(ShopSettings(), remote) == []


def test_shop_missing_remotely_is_created():
    results = ShopSettingsComparator().compare(ShopSettings(values={"displayGrossPrices": True}), None)
    assert [r.operation for r in results] == [DiffOperation.CREATE]


# -----------------------------
# Product / page types
# -----------------------------
def test_product_type_variant_values_added():
    local = ProductType(name="Clothing", variant_attributes=(_size("S", "M", "L", "XL"),))
    remote = ProductType(name="Clothing", variant_attributes=(_size("S", "M", "L"),))

    results = ProductTypeComparator().compare([local], [remote])

    assert len(results) == 1
    change = results[0].changes[0]
    assert change.field == "variantAttributes.Size.values"
    assert 'added "XL"' in change.description
    assert change.destructive is False


def test_product_type_remote_only_attribute_is_destructive():
    local = ProductType(name="Clothing")
    remote = ProductType(name="Clothing", product_attributes=(AttributeReference("Color"),))

    change = ProductTypeComparator().compare([local], [remote])[0].changes[0]

    assert change.destructive is True
    assert "not unassigned" in change.description


def test_product_type_variant_selection_toggle():
    local = ProductType(name="Clothing", variant_attributes=(_size("S", variant_selection=True),))
    remote = ProductType(name="Clothing", variant_attributes=(_size("S", variant_selection=False),))

    changes = ProductTypeComparator().compare([local], [remote])[0].changes

    assert [c.field for c in changes] == ["variantAttributes.Size.variantSelection"]


def test_product_type_shipping_flag_not_declared_is_ignored():
    local = ProductType(name="Clothing")
    remote = ProductType(name="Clothing", is_shipping_required=True)
    assert ProductTypeComparator().compare([local], [remote]) == []


def test_page_type_without_attributes_key_only_ensures_existence():
    local = PageType(name="Article", mode=EntityMode.CREATE)
    remote = PageType(name="Article", attributes=(AttributeReference("Summary"),))
    assert PageTypeComparator().compare([local], [remote]) == []


def test_page_type_attribute_added():
    local = PageType(name="Article", attributes=(AttributeReference("Summary"),), mode=EntityMode.UPDATE)
    remote = PageType(name="Article")

    change = PageTypeComparator().compare([local], [remote])[0].changes[0]

    assert change.field == "attributes"
    assert change.desired == "Summary"


# -----------------------------
# Attributes
# -----------------------------
def test_attribute_remote_only_values_are_destructive():
    local = AttributeDefinition(name="Color", input_type=InputType.DROPDOWN, kind=AttributeKind.PRODUCT,
                                values=("Red",))
    remote = AttributeDefinition(name="Color", input_type=InputType.DROPDOWN, kind=AttributeKind.PRODUCT,
                                 values=("Red", "Blue"))

    changes = AttributeComparator().compare([local], [remote])[0].changes

    assert len(changes) == 1
    assert changes[0].destructive is True


def test_attribute_input_type_change():
    local = AttributeDefinition(name="Notes", input_type=InputType.RICH_TEXT, kind=AttributeKind.CONTENT)
    remote = AttributeDefinition(name="Notes", input_type=InputType.PLAIN_TEXT, kind=AttributeKind.CONTENT)

    changes = AttributeComparator().compare([local], [remote])[0].changes

    assert [(c.field, c.current, c.desired) for c in changes] == [("inputType", "PLAIN_TEXT", "RICH_TEXT")]


# -----------------------------
# Categories
# -----------------------------
def _tree(*children, name="Apparel", mode=EntityMode.UPDATE):
    return Category(name=name, slug="apparel", subcategories=tuple(children), mode=mode)


def test_missing_subtree_is_one_change():
    polo = Category(name="Polo", slug="polo")
    shirts = Category(name="Shirts", slug="shirts", subcategories=(polo,), mode=EntityMode.UPDATE)

    changes = CategoryComparator().compare([_tree(shirts)], [_tree()])[0].changes

    assert len(changes) == 1
    assert changes[0].description == 'subcategories: "Shirts" added (with 1 descendant(s))'


def test_nested_rename_is_prefixed():
    local = _tree(Category(name="T-Shirts", slug="shirts"))
    remote = _tree(Category(name="Shirts", slug="shirts"))

    changes = CategoryComparator().compare([local], [remote])[0].changes

    assert [c.field for c in changes] == ["subcategories.shirts.name"]


def test_remote_only_subcategory_is_destructive():
    local = _tree()
    remote = _tree(Category(name="Shoes", slug="shoes"))

    changes = CategoryComparator().compare([local], [remote])[0].changes

    assert [c.destructive for c in changes] == [True]


def test_category_without_subcategories_key_does_not_manage_children():
    local = _tree(mode=EntityMode.CREATE)
    remote = _tree(Category(name="Shoes", slug="shoes"))
    assert CategoryComparator().compare([local], [remote]) == []


# -----------------------------
# Warehouses
# -----------------------------
def _warehouse(city="Berlin", **kw):
    address = {"streetAddress1": "Main 1", "city": city, "postalCode": "10115", "country": "DE"}
    return Warehouse(name=kw.pop("name", "Berlin"), slug="berlin", address=address, **kw)


def test_warehouse_city_is_compared_case_insensitively():
    assert WarehouseComparator().compare([_warehouse("Berlin")], [_warehouse("BERLIN")]) == []


def test_warehouse_address_and_flags_changes():
    local = _warehouse("Hamburg", is_private=True)
    remote = _warehouse("BERLIN", email="")

    (result,) = WarehouseComparator().compare([local], [remote])

    assert result.operation == DiffOperation.UPDATE
    assert result.entity_type == EntityType.WAREHOUSES
    assert [(c.field, c.current, c.desired) for c in result.changes] == [
        ("isPrivate", False, True),
        ("address.city", "BERLIN", "Hamburg"),
    ]


def test_warehouse_rename_keeps_slug_pairing():
    (result,) = WarehouseComparator().compare([_warehouse(name="Berlin Mitte")], [_warehouse()])

    assert result.entity_name == "Berlin Mitte"
    assert [c.field for c in result.changes] == ["name"]


# -----------------------------
# Tax classes
# -----------------------------
def _books(**rates):
    return TaxClass(name="Books", country_rates=tuple(TaxRate(code, rate) for code, rate in rates.items()))


def test_tax_rates_added_changed_and_remote_only():
    local = _books(DE=19.0, FR=5.5)
    remote = _books(DE=7.0, PL=5.0)

    (result,) = TaxClassComparator().compare([local], [remote])

    assert [(c.field, c.description, c.destructive) for c in result.changes] == [
        ("countryRates.DE", "Tax rate for DE: 7% → 19%", False),
        ("countryRates.FR", "Tax rate for FR added: 5.5%", False),
        ("countryRates.PL", "PL: 5% exists only remotely (not removed)", True),
    ]


def test_identical_tax_classes_produce_nothing():
    assert TaxClassComparator().compare([_books(DE=7.0)], [_books(DE=7.0)]) == []
