# src/saleor_configurator/schema/parser.py
"""
Parser estrutural do estado desejado.

Valida a forma do documento (tipos, campos obrigatórios, enums) e o
materializa em uma `Configuration` imutável. Regras que dependem de
várias entidades ao mesmo tempo (identificadores duplicados, legalidade
de `variantSelection`, `entityType` obrigatório) ficam no preflight,
que acumula todos os problemas em vez de parar no primeiro.

A implementação evita dependências externas de schema (ex.: Pydantic)
e segue o padrão `_expect(cond, msg)`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .errors import ConfigurationSchemaError
from .model import (
    CHANNEL_SETTINGS_FIELDS,
    CLICK_AND_COLLECT_OPTIONS,
    SHOP_FIELDS,
    WAREHOUSE_ADDRESS_FIELDS,
    AttributeDefinition,
    AttributeInput,
    AttributeKind,
    AttributeReference,
    Category,
    Channel,
    Configuration,
    EntityMode,
    InputType,
    PageType,
    ProductType,
    ReferenceEntityType,
    ShopSettings,
    TaxClass,
    TaxRate,
    Warehouse,
)


_TOP_LEVEL_KEYS = {
    "shop",
    "channels",
    "productAttributes",
    "contentAttributes",
    "productTypes",
    "pageTypes",
    "categories",
    "warehouses",
    "taxClasses",
}


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigurationSchemaError(message=msg, details={"issue": msg})


def _optional_bool(raw: Dict[str, Any], key: str, path: str) -> Optional[bool]:
    value = raw.get(key)
    _expect(value is None or isinstance(value, bool), f"{path}.{key} must be boolean")
    return value


def _list_of(raw: Any, path: str) -> List[Any]:
    _expect(isinstance(raw, list), f"{path} must be a list")
    return raw


# -----------------------------
# Atributos
# -----------------------------
def _parse_values(raw: Any, path: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    out: List[str] = []
    for i, item in enumerate(_list_of(raw, path)):
        if isinstance(item, dict):
            item = item.get("name")
        _expect(_is_non_empty_str(item), f"{path}[{i}] must be a name or {{name: ...}}")
        out.append(str(item).strip())
    return tuple(out)


def parse_attribute_definition(raw: Any, path: str, kind: AttributeKind) -> AttributeDefinition:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    name = raw.get("name")
    _expect(_is_non_empty_str(name), f"{path}.name is required")

    input_type = raw.get("inputType")
    _expect(
        input_type in InputType.__members__,
        f"{path}.inputType must be one of {sorted(InputType.__members__)}",
    )

    entity_type = raw.get("entityType")
    _expect(
        entity_type is None or entity_type in ReferenceEntityType.__members__,
        f"{path}.entityType must be one of {sorted(ReferenceEntityType.__members__)}",
    )

    declared_kind = raw.get("type")
    _expect(
        declared_kind is None or declared_kind == kind.value,
        f"{path}.type must be {kind.value} in this section",
    )

    return AttributeDefinition(
        name=name.strip(),
        input_type=InputType[input_type],
        kind=kind,
        values=_parse_values(raw.get("values"), f"{path}.values"),
        entity_type=ReferenceEntityType[entity_type] if entity_type else None,
        variant_selection=bool(_optional_bool(raw, "variantSelection", path)),
    )


def parse_attribute_input(raw: Any, path: str, kind: AttributeKind) -> AttributeInput:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    if "attribute" in raw:
        ref = raw.get("attribute")
        _expect(_is_non_empty_str(ref), f"{path}.attribute must be a non-empty name")
        return AttributeReference(
            attribute=ref.strip(),
            variant_selection=bool(_optional_bool(raw, "variantSelection", path)),
        )
    return parse_attribute_definition(raw, path, kind)


def _attribute_inputs(raw: Any, path: str, kind: AttributeKind) -> Tuple[AttributeInput, ...]:
    if raw is None:
        return ()
    return tuple(
        parse_attribute_input(item, f"{path}[{i}]", kind)
        for i, item in enumerate(_list_of(raw, path))
    )


# -----------------------------
# Entidades
# -----------------------------
def _parse_shop(raw: Any) -> ShopSettings:
    _expect(isinstance(raw, dict), "shop must be a mapping")
    unknown = sorted(set(raw) - set(SHOP_FIELDS))
    _expect(not unknown, f"shop has unknown fields: {unknown}")
    return ShopSettings(values={k: v for k, v in raw.items() if v is not None})


def _parse_channel(raw: Any, path: str) -> Channel:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    for key in ("name", "slug", "currencyCode", "defaultCountry"):
        _expect(_is_non_empty_str(raw.get(key)), f"{path}.{key} is required")

    settings = raw.get("settings")
    if settings is not None:
        _expect(isinstance(settings, dict), f"{path}.settings must be a mapping")
        unknown = sorted(set(settings) - set(CHANNEL_SETTINGS_FIELDS))
        _expect(not unknown, f"{path}.settings has unknown fields: {unknown}")

    return Channel(
        name=raw["name"].strip(),
        slug=raw["slug"].strip(),
        currency_code=raw["currencyCode"].strip(),
        default_country=raw["defaultCountry"].strip(),
        is_active=_optional_bool(raw, "isActive", path),
        settings={k: v for k, v in (settings or {}).items() if v is not None},
        mode=EntityMode.UPDATE if "settings" in raw else EntityMode.CREATE,
    )


def _parse_product_type(raw: Any, path: str) -> ProductType:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    _expect(_is_non_empty_str(raw.get("name")), f"{path}.name is required")
    return ProductType(
        name=raw["name"].strip(),
        is_shipping_required=_optional_bool(raw, "isShippingRequired", path),
        product_attributes=_attribute_inputs(
            raw.get("productAttributes"), f"{path}.productAttributes", AttributeKind.PRODUCT
        ),
        variant_attributes=_attribute_inputs(
            raw.get("variantAttributes"), f"{path}.variantAttributes", AttributeKind.PRODUCT
        ),
    )


def _parse_page_type(raw: Any, path: str) -> PageType:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    _expect(_is_non_empty_str(raw.get("name")), f"{path}.name is required")
    return PageType(
        name=raw["name"].strip(),
        attributes=_attribute_inputs(raw.get("attributes"), f"{path}.attributes", AttributeKind.CONTENT),
        mode=EntityMode.UPDATE if "attributes" in raw else EntityMode.CREATE,
    )


def _parse_category(raw: Any, path: str) -> Category:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    _expect(_is_non_empty_str(raw.get("name")), f"{path}.name is required")
    _expect(_is_non_empty_str(raw.get("slug")), f"{path}.slug is required")
    children = raw.get("subcategories")
    return Category(
        name=raw["name"].strip(),
        slug=raw["slug"].strip(),
        subcategories=tuple(
            _parse_category(c, f"{path}.subcategories[{i}]")
            for i, c in enumerate(_list_of(children, f"{path}.subcategories") if children is not None else [])
        ),
        mode=EntityMode.UPDATE if "subcategories" in raw else EntityMode.CREATE,
    )


def _parse_warehouse(raw: Any, path: str) -> Warehouse:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    for key in ("name", "slug"):
        _expect(_is_non_empty_str(raw.get(key)), f"{path}.{key} is required")

    address = raw.get("address")
    _expect(isinstance(address, dict), f"{path}.address must be a mapping")
    unknown = sorted(set(address) - set(WAREHOUSE_ADDRESS_FIELDS))
    _expect(not unknown, f"{path}.address has unknown fields: {unknown}")
    for key in ("streetAddress1", "city", "postalCode", "country"):
        _expect(_is_non_empty_str(address.get(key)), f"{path}.address.{key} is required")

    email = raw.get("email")
    _expect(email is None or isinstance(email, str), f"{path}.email must be a string")
    click_and_collect = raw.get("clickAndCollectOption", "DISABLED")
    _expect(
        click_and_collect in CLICK_AND_COLLECT_OPTIONS,
        f"{path}.clickAndCollectOption must be one of {list(CLICK_AND_COLLECT_OPTIONS)}",
    )

    return Warehouse(
        name=raw["name"].strip(),
        slug=raw["slug"].strip(),
        address={k: str(v).strip() for k, v in address.items() if v is not None},
        email=email.strip() if email else None,
        is_private=bool(_optional_bool(raw, "isPrivate", path)),
        click_and_collect_option=click_and_collect,
    )


def _parse_tax_class(raw: Any, path: str) -> TaxClass:
    _expect(isinstance(raw, dict), f"{path} must be a mapping")
    _expect(_is_non_empty_str(raw.get("name")), f"{path}.name is required")

    rates: List[TaxRate] = []
    raw_rates = raw.get("countryRates")
    for i, item in enumerate(_list_of(raw_rates, f"{path}.countryRates") if raw_rates is not None else []):
        item_path = f"{path}.countryRates[{i}]"
        _expect(isinstance(item, dict), f"{item_path} must be a mapping")
        _expect(_is_non_empty_str(item.get("countryCode")), f"{item_path}.countryCode is required")
        rate = item.get("rate")
        _expect(
            isinstance(rate, (int, float)) and not isinstance(rate, bool) and 0 <= rate <= 100,
            f"{item_path}.rate must be a number between 0 and 100",
        )
        rates.append(TaxRate(country_code=item["countryCode"].strip().upper(), rate=float(rate)))

    codes = [r.country_code for r in rates]
    repeated = sorted({c for c in codes if codes.count(c) > 1})
    _expect(not repeated, f"{path}.countryRates repeats countries: {repeated}")

    return TaxClass(name=raw["name"].strip(), country_rates=tuple(rates))


def _section(data: Dict[str, Any], key: str, parse) -> Optional[Tuple[Any, ...]]:
    raw = data.get(key)
    if raw is None:
        return None
    return tuple(parse(item, f"{key}[{i}]") for i, item in enumerate(_list_of(raw, key)))


def _attribute_section(
    data: Dict[str, Any], key: str, kind: AttributeKind
) -> Optional[Tuple[AttributeDefinition, ...]]:
    return _section(data, key, lambda item, path: parse_attribute_definition(item, path, kind))


def parse_configuration(data: Any) -> Configuration:
    """Valida e materializa o documento de estado desejado."""
    _expect(isinstance(data, dict), "configuration root must be a mapping")

    unknown = sorted(set(data) - _TOP_LEVEL_KEYS)
    _expect(not unknown, f"unknown configuration sections: {unknown}")

    return Configuration(
        shop=_parse_shop(data["shop"]) if data.get("shop") is not None else None,
        channels=_section(data, "channels", _parse_channel),
        product_attributes=_attribute_section(data, "productAttributes", AttributeKind.PRODUCT),
        content_attributes=_attribute_section(data, "contentAttributes", AttributeKind.CONTENT),
        product_types=_section(data, "productTypes", _parse_product_type),
        page_types=_section(data, "pageTypes", _parse_page_type),
        categories=_section(data, "categories", _parse_category),
        warehouses=_section(data, "warehouses", _parse_warehouse),
        tax_classes=_section(data, "taxClasses", _parse_tax_class),
    )
