# src/saleor_configurator/schema/model.py
"""
Modelo tipado do estado desejado (e do snapshot remoto) de uma loja.

Este módulo define as estruturas imutáveis que representam uma
`Configuration`: o documento declarativo carregado do YAML local e,
com o mesmo formato, o snapshot obtido da loja remota.

Componentes principais:
    - ConfigurationSection → seções do documento e sua identidade estável
    - AttributeDefinition / AttributeReference → entrada de atributo
      (definição inline ou referência por nome a um atributo global)
    - ShopSettings, Channel, ProductType, PageType, Category,
      Warehouse, TaxClass → entidades
    - Configuration → documento completo

Decisões arquiteturais:
    - Entidades são frozen dataclasses; nenhuma mutação após o parse
    - `remote_id` só é preenchido do lado remoto (snapshot)
    - Seções `None` significam "não configurada" e são ignoradas pelo diff;
      uma tupla vazia significa "configurada e vazia"
    - `productAttributes` e `contentAttributes` são seções independentes:
      declarar só uma delas não torna a outra "configurada e vazia"
    - O modo create/update de canais, page types e categorias é resolvido
      uma única vez pelo parser (`EntityMode`)

Invariantes:
    - Cada entidade de lista possui um identificador natural
      (slug para canais, categorias e warehouses; (kind, name) para
      atributos globais; name para as demais)
    - `to_dict()` produz a forma camelCase equivalente ao YAML de entrada

Limites explícitos:
    - Não valida a estrutura (ver `schema.parser` e `schema.preflight`)
    - Não conhece o protocolo remoto
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple, Union


class ConfigurationSection(str, Enum):
    """Seções do documento de configuração, na grafia do YAML."""
    SHOP = "shop"
    CHANNELS = "channels"
    PRODUCT_TYPES = "productTypes"
    PAGE_TYPES = "pageTypes"
    CATEGORIES = "categories"
    ATTRIBUTES = "attributes"
    WAREHOUSES = "warehouses"
    TAX_CLASSES = "taxClasses"


class AttributeKind(str, Enum):
    """Escopo de um atributo: product types ou page (content) types."""
    PRODUCT = "PRODUCT_TYPE"
    CONTENT = "PAGE_TYPE"


class InputType(str, Enum):
    DROPDOWN = "DROPDOWN"
    MULTISELECT = "MULTISELECT"
    SWATCH = "SWATCH"
    PLAIN_TEXT = "PLAIN_TEXT"
    RICH_TEXT = "RICH_TEXT"
    NUMERIC = "NUMERIC"
    DATE = "DATE"
    DATE_TIME = "DATE_TIME"
    BOOLEAN = "BOOLEAN"
    FILE = "FILE"
    REFERENCE = "REFERENCE"
    SINGLE_REFERENCE = "SINGLE_REFERENCE"


class ReferenceEntityType(str, Enum):
    PAGE = "PAGE"
    PRODUCT = "PRODUCT"
    PRODUCT_VARIANT = "PRODUCT_VARIANT"


class EntityMode(str, Enum):
    """Variante create/update de uma entidade, resolvida no parse."""
    CREATE = "create"
    UPDATE = "update"


CHOICE_INPUT_TYPES: FrozenSet[InputType] = frozenset(
    {InputType.DROPDOWN, InputType.MULTISELECT, InputType.SWATCH}
)
REFERENCE_INPUT_TYPES: FrozenSet[InputType] = frozenset(
    {InputType.REFERENCE, InputType.SINGLE_REFERENCE}
)
VARIANT_SELECTION_INPUT_TYPES: FrozenSet[InputType] = frozenset(
    {InputType.DROPDOWN, InputType.BOOLEAN, InputType.SWATCH, InputType.NUMERIC}
)

SHOP_FIELDS: Tuple[str, ...] = (
    "defaultMailSenderName",
    "defaultMailSenderAddress",
    "displayGrossPrices",
    "enableAccountConfirmationByEmail",
    "limitQuantityPerCheckout",
    "trackInventoryByDefault",
    "reserveStockDurationAnonymousUser",
    "reserveStockDurationAuthenticatedUser",
    "defaultDigitalMaxDownloads",
    "defaultDigitalUrlValidDays",
    "defaultWeightUnit",
    "allowLoginWithoutConfirmation",
    "fulfillmentAutoApprove",
    "fulfillmentAllowUnpaid",
)

CHANNEL_SETTINGS_FIELDS: Tuple[str, ...] = (
    "allocationStrategy",
    "automaticallyConfirmAllNewOrders",
    "automaticallyFulfillNonShippableGiftCard",
    "expireOrdersAfter",
    "deleteExpiredOrdersAfter",
    "markAsPaidStrategy",
    "allowUnpaidOrders",
    "includeDraftOrderInVoucherUsage",
    "defaultTransactionFlowStrategy",
    "automaticallyCompleteFullyPaidCheckouts",
)


# -----------------------------
# Atributos
# -----------------------------
@dataclass(frozen=True)
class AttributeDefinition:
    """Definição completa de um atributo (global ou inline)."""

    name: str
    input_type: InputType
    kind: AttributeKind
    values: Tuple[str, ...] = ()
    entity_type: Optional[ReferenceEntityType] = None
    variant_selection: bool = False
    remote_id: Optional[str] = None

    @property
    def is_choice(self) -> bool:
        return self.input_type in CHOICE_INPUT_TYPES

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "inputType": self.input_type.value}
        if self.values:
            out["values"] = [{"name": v} for v in self.values]
        if self.entity_type is not None:
            out["entityType"] = self.entity_type.value
        if self.variant_selection:
            out["variantSelection"] = True
        return out


@dataclass(frozen=True)
class AttributeReference:
    """Referência por nome a um atributo global (`{attribute: "Size"}`)."""

    attribute: str
    variant_selection: bool = False

    @property
    def name(self) -> str:
        return self.attribute

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"attribute": self.attribute}
        if self.variant_selection:
            out["variantSelection"] = True
        return out


AttributeInput = Union[AttributeDefinition, AttributeReference]


def attribute_name(item: AttributeInput) -> str:
    return item.name


# -----------------------------
# Entidades
# -----------------------------
@dataclass(frozen=True)
class ShopSettings:
    """Settings globais da loja (singleton); chaves na grafia camelCase."""

    values: Dict[str, Any] = field(default_factory=dict)
    remote_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.values)


@dataclass(frozen=True)
class Channel:
    name: str
    slug: str
    currency_code: str
    default_country: str
    is_active: Optional[bool] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    mode: EntityMode = EntityMode.CREATE
    remote_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "slug": self.slug,
            "currencyCode": self.currency_code,
            "defaultCountry": self.default_country,
        }
        if self.is_active is not None:
            out["isActive"] = self.is_active
        if self.settings:
            out["settings"] = dict(self.settings)
        return out


@dataclass(frozen=True)
class ProductType:
    name: str
    is_shipping_required: Optional[bool] = None
    product_attributes: Tuple[AttributeInput, ...] = ()
    variant_attributes: Tuple[AttributeInput, ...] = ()
    remote_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.is_shipping_required is not None:
            out["isShippingRequired"] = self.is_shipping_required
        if self.product_attributes:
            out["productAttributes"] = [a.to_dict() for a in self.product_attributes]
        if self.variant_attributes:
            out["variantAttributes"] = [a.to_dict() for a in self.variant_attributes]
        return out


@dataclass(frozen=True)
class PageType:
    name: str
    attributes: Tuple[AttributeInput, ...] = ()
    mode: EntityMode = EntityMode.CREATE
    remote_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.attributes:
            out["attributes"] = [a.to_dict() for a in self.attributes]
        return out


@dataclass(frozen=True)
class Category:
    name: str
    slug: str
    subcategories: Tuple["Category", ...] = ()
    mode: EntityMode = EntityMode.CREATE
    remote_id: Optional[str] = None

    def walk(self) -> Iterator["Category"]:
        """Percorre a árvore em pré-ordem (inclui o próprio nó)."""
        yield self
        for child in self.subcategories:
            yield from child.walk()

    @property
    def size(self) -> int:
        return sum(1 for _ in self.walk())

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "slug": self.slug}
        if self.subcategories:
            out["subcategories"] = [c.to_dict() for c in self.subcategories]
        return out


CLICK_AND_COLLECT_OPTIONS: Tuple[str, ...] = ("DISABLED", "LOCAL", "ALL")

WAREHOUSE_ADDRESS_FIELDS: Tuple[str, ...] = (
    "streetAddress1",
    "streetAddress2",
    "city",
    "cityArea",
    "postalCode",
    "country",
    "countryArea",
    "companyName",
    "phone",
)


@dataclass(frozen=True)
class Warehouse:
    name: str
    slug: str
    address: Dict[str, str] = field(default_factory=dict)
    email: Optional[str] = None
    is_private: bool = False
    click_and_collect_option: str = "DISABLED"
    remote_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "slug": self.slug,
            "address": dict(self.address),
            "isPrivate": self.is_private,
            "clickAndCollectOption": self.click_and_collect_option,
        }
        if self.email:
            out["email"] = self.email
        return out


@dataclass(frozen=True)
class TaxRate:
    country_code: str
    rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {"countryCode": self.country_code, "rate": self.rate}


@dataclass(frozen=True)
class TaxClass:
    name: str
    country_rates: Tuple[TaxRate, ...] = ()
    remote_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.country_rates:
            out["countryRates"] = [r.to_dict() for r in self.country_rates]
        return out


Entity = Union[
    ShopSettings, Channel, AttributeDefinition, ProductType, PageType, Category, Warehouse, TaxClass
]

_ATTRIBUTE_SECTION_KEYS = {
    AttributeKind.PRODUCT: "productAttributes",
    AttributeKind.CONTENT: "contentAttributes",
}


@dataclass(frozen=True)
class Configuration:
    """Documento completo de estado desejado (ou snapshot remoto)."""

    shop: Optional[ShopSettings] = None
    channels: Optional[Tuple[Channel, ...]] = None
    product_attributes: Optional[Tuple[AttributeDefinition, ...]] = None
    content_attributes: Optional[Tuple[AttributeDefinition, ...]] = None
    product_types: Optional[Tuple[ProductType, ...]] = None
    page_types: Optional[Tuple[PageType, ...]] = None
    categories: Optional[Tuple[Category, ...]] = None
    warehouses: Optional[Tuple[Warehouse, ...]] = None
    tax_classes: Optional[Tuple[TaxClass, ...]] = None

    @property
    def attributes(self) -> Optional[Tuple[AttributeDefinition, ...]]:
        """Atributos globais de ambos os tipos; `None` se nenhuma seção foi declarada."""
        if self.product_attributes is None and self.content_attributes is None:
            return None
        return (self.product_attributes or ()) + (self.content_attributes or ())

    def attribute_section(self, kind: AttributeKind) -> Optional[Tuple[AttributeDefinition, ...]]:
        if kind == AttributeKind.PRODUCT:
            return self.product_attributes
        return self.content_attributes

    def section(self, section: ConfigurationSection) -> Any:
        return {
            ConfigurationSection.SHOP: self.shop,
            ConfigurationSection.CHANNELS: self.channels,
            ConfigurationSection.ATTRIBUTES: self.attributes,
            ConfigurationSection.PRODUCT_TYPES: self.product_types,
            ConfigurationSection.PAGE_TYPES: self.page_types,
            ConfigurationSection.CATEGORIES: self.categories,
            ConfigurationSection.WAREHOUSES: self.warehouses,
            ConfigurationSection.TAX_CLASSES: self.tax_classes,
        }[section]

    def attributes_of_kind(self, kind: AttributeKind) -> Tuple[AttributeDefinition, ...]:
        return self.attribute_section(kind) or ()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.shop is not None:
            out["shop"] = self.shop.to_dict()
        if self.channels is not None:
            out["channels"] = [c.to_dict() for c in self.channels]
        for kind, key in _ATTRIBUTE_SECTION_KEYS.items():
            attributes = self.attribute_section(kind)
            if attributes is not None:
                out[key] = [a.to_dict() for a in attributes]
        if self.product_types is not None:
            out["productTypes"] = [p.to_dict() for p in self.product_types]
        if self.page_types is not None:
            out["pageTypes"] = [p.to_dict() for p in self.page_types]
        if self.categories is not None:
            out["categories"] = [c.to_dict() for c in self.categories]
        if self.warehouses is not None:
            out["warehouses"] = [w.to_dict() for w in self.warehouses]
        if self.tax_classes is not None:
            out["taxClasses"] = [t.to_dict() for t in self.tax_classes]
        return out
