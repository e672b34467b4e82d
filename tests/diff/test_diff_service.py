# tests/diff/test_diff_service.py
"""
Testes do serviço de diff contra um RemoteStore em memória.

Garantias verificadas:
- ordem fixa das seções
- idempotência (snapshot igual ao local → zero mudanças)
- completude (remoto vazio → um CREATE por entidade local)
- contagens do DiffSummary consistentes com os resultados
- referências de atributo resolvidas com no máximo um lookup em lote
"""

from saleor_configurator.diff.service import DiffService
from saleor_configurator.diff.types import DiffOperation, EntityType
from saleor_configurator.remote.store import RemoteAttribute
from saleor_configurator.schema.model import (
    AttributeKind,
    AttributeReference,
    Configuration,
    ConfigurationSection,
    InputType,
)
from saleor_configurator.schema.parser import parse_configuration

from tests.fixtures.remote_store import FakeRemoteStore
from tests.fixtures.snapshots import remote_snapshot


def _service(store, **kw):
    return DiffService(store=store, **kw)


def _assert_consistent(summary):
    assert summary.total_changes == summary.creates + summary.updates + summary.deletes
    assert summary.total_changes == len(summary.results)


def test_empty_against_empty_has_no_changes():
    summary = _service(FakeRemoteStore()).compare(Configuration())

    assert summary.total_changes == 0
    assert summary.has_changes is False
    assert summary.results == ()


def test_new_channel_is_created(germany_channel):
    local = parse_configuration({"channels": [germany_channel]})

    summary = _service(FakeRemoteStore()).compare(local)

    assert summary.creates == 1
    result = summary.results[0]
    assert (result.operation, result.entity_type, result.entity_name) == (
        DiffOperation.CREATE, EntityType.CHANNELS, "Germany"
    )
    _assert_consistent(summary)


def test_channel_currency_update(germany_channel):
    remote = remote_snapshot({"channels": [dict(germany_channel, currencyCode="USD")]})
    local = parse_configuration({"channels": [germany_channel]})

    summary = _service(FakeRemoteStore(remote)).compare(local)

    assert summary.updates == 1
    assert [c.description for c in summary.results[0].changes] == ['currencyCode: "USD" → "EUR"']
    assert summary.results[0].current.remote_id == "channel-germany"


def test_inline_variant_values_added():
    def doc(values):
        return {"productTypes": [{
            "name": "Clothing",
            "variantAttributes": [
                {"name": "Size", "inputType": "DROPDOWN", "values": values, "variantSelection": True},
            ],
        }]}

    remote = remote_snapshot(doc(["S", "M", "L"]))
    local = parse_configuration(doc(["S", "M", "L", "XL"]))

    summary = _service(FakeRemoteStore(remote)).compare(local)

    assert summary.updates == 1
    (change,) = summary.results[0].changes
    assert change.field == "variantAttributes.Size.values"
    assert 'added "XL"' in change.description


def test_comparing_snapshot_with_itself_is_idempotent(catalog_document):
    store = FakeRemoteStore(remote_snapshot(catalog_document))

    summary = _service(store).compare(parse_configuration(catalog_document))

    assert summary.total_changes == 0
    assert store.calls_of("find_attributes_by_name") == []


def test_empty_remote_yields_one_create_per_entity_in_section_order(catalog_document):
    summary = _service(FakeRemoteStore()).compare(parse_configuration(catalog_document))

    assert [r.operation for r in summary.results] == [DiffOperation.CREATE] * 7
    assert [(r.entity_type, r.entity_name) for r in summary.results] == [
        (EntityType.SHOP, "Shop Settings"),
        (EntityType.CHANNELS, "Germany"),
        (EntityType.PRODUCT_TYPES, "Clothing"),
        (EntityType.PAGE_TYPES, "Article"),
        (EntityType.CATEGORIES, "Apparel"),
        (EntityType.ATTRIBUTES, "Color"),
        (EntityType.ATTRIBUTES, "Summary"),
    ]
    _assert_consistent(summary)


def test_desired_entity_keeps_original_references(catalog_document):
    summary = _service(FakeRemoteStore()).compare(parse_configuration(catalog_document))

    (clothing,) = summary.for_entity_type(EntityType.PRODUCT_TYPES)
    assert clothing.desired.product_attributes == (AttributeReference("Color"),)


def test_remote_only_entities_are_deletes(germany_channel):
    remote = remote_snapshot({"channels": [germany_channel, dict(germany_channel, name="France", slug="france")]})
    local = parse_configuration({"channels": [germany_channel]})

    summary = _service(FakeRemoteStore(remote)).compare(local)

    assert [(r.operation, r.entity_name) for r in summary.results] == [(DiffOperation.DELETE, "France")]
    assert summary.unapplied_changes()[0]["entityName"] == "France"
    _assert_consistent(summary)


def test_absent_section_differs_from_empty_section(germany_channel):
    remote = remote_snapshot({"channels": [germany_channel]})

    absent = _service(FakeRemoteStore(remote)).compare(parse_configuration({}))
    empty = _service(FakeRemoteStore(remote)).compare(parse_configuration({"channels": []}))

    assert absent.total_changes == 0
    assert empty.deletes == 1


def test_section_filter(catalog_document):
    store = FakeRemoteStore()
    service = _service(store, include_sections=[ConfigurationSection.CHANNELS, ConfigurationSection.CATEGORIES],
                       exclude_sections=[ConfigurationSection.CATEGORIES])

    summary = service.compare(parse_configuration(catalog_document))

    assert service.selected_sections() == [ConfigurationSection.CHANNELS]
    assert {r.entity_type for r in summary.results} == {EntityType.CHANNELS}
    assert store.calls_of("find_attributes_by_name") == []


def test_shared_reference_is_looked_up_once():
    author = RemoteAttribute(id="a-1", name="Author", kind=AttributeKind.PRODUCT, input_type=InputType.PLAIN_TEXT)
    store = FakeRemoteStore(remote_attributes=[author])
    local = parse_configuration({"productTypes": [
        {"name": "Book", "productAttributes": [{"attribute": "Author"}]},
        {"name": "Magazine", "productAttributes": [{"attribute": "Author"}]},
    ]})

    summary = _service(store).compare(local)

    assert summary.creates == 2
    assert store.calls_of("find_attributes_by_name") == [
        ("find_attributes_by_name", ("Author",), AttributeKind.PRODUCT)
    ]


def test_reference_values_do_not_leak_into_owner():
    remote = remote_snapshot({
        "productAttributes": [{"name": "Color", "inputType": "DROPDOWN", "values": ["Red"]}],
        "productTypes": [{"name": "Shirt", "productAttributes": [{"attribute": "Color"}]}],
    })
    local = parse_configuration({
        "productAttributes": [{"name": "Color", "inputType": "DROPDOWN", "values": ["Red", "Blue"]}],
        "productTypes": [{"name": "Shirt", "productAttributes": [{"attribute": "Color"}]}],
    })

    summary = _service(FakeRemoteStore(remote)).compare(local)

    assert [(r.entity_type, r.operation) for r in summary.results] == [
        (EntityType.ATTRIBUTES, DiffOperation.UPDATE)
    ]


def test_unresolved_reference_warns(events):
    local = parse_configuration({"productTypes": [{"name": "Shirt", "productAttributes": [{"attribute": "Ghost"}]}]})

    summary = _service(FakeRemoteStore(), events=events).compare(local)

    assert summary.creates == 1
    assert any("Ghost" in w for w in events.warnings_for("diff"))


def test_undeclared_attribute_section_is_not_compared():
    remote = remote_snapshot({
        "productAttributes": [{"name": "Color", "inputType": "DROPDOWN", "values": ["Red"]}],
        "contentAttributes": [{"name": "Author", "inputType": "PLAIN_TEXT"}],
    })
    local = parse_configuration({
        "productAttributes": [{"name": "Color", "inputType": "DROPDOWN", "values": ["Red"]}],
    })

    summary = _service(FakeRemoteStore(remote)).compare(local)

    assert summary.deletes == 0
    assert summary.results == ()


def test_same_name_in_both_attribute_kinds_is_compared_per_kind():
    remote = remote_snapshot({
        "productAttributes": [{"name": "Author", "inputType": "PLAIN_TEXT"}],
        "contentAttributes": [{"name": "Author", "inputType": "PLAIN_TEXT"}],
    })
    local = parse_configuration({
        "productAttributes": [{"name": "Author", "inputType": "PLAIN_TEXT"}],
        "contentAttributes": [],
    })

    summary = _service(FakeRemoteStore(remote)).compare(local)

    (deleted,) = summary.results
    assert (deleted.operation, deleted.entity_type, deleted.entity_name) == (
        DiffOperation.DELETE, EntityType.ATTRIBUTES, "Author"
    )
    assert deleted.current.kind == AttributeKind.CONTENT
    _assert_consistent(summary)


def test_warehouses_and_tax_classes_follow_attributes():
    local = parse_configuration({
        "taxClasses": [{"name": "Books", "countryRates": [{"countryCode": "DE", "rate": 7}]}],
        "warehouses": [{
            "name": "Berlin", "slug": "berlin",
            "address": {"streetAddress1": "Main 1", "city": "Berlin", "postalCode": "10115", "country": "DE"},
        }],
        "contentAttributes": [{"name": "Summary", "inputType": "RICH_TEXT"}],
    })

    summary = _service(FakeRemoteStore()).compare(local)

    assert [(r.entity_type, r.entity_name) for r in summary.results] == [
        (EntityType.ATTRIBUTES, "Summary"),
        (EntityType.WAREHOUSES, "Berlin"),
        (EntityType.TAX_CLASSES, "Books"),
    ]
