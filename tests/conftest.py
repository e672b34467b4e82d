# tests/conftest.py
"""
Fixtures compartilhados para testes do Saleor Configurator.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de configuração mínimos e determinísticos
- um RemoteStore em memória (`FakeRemoteStore`)
- Event Log e relógio controlados
- fábrica de `DeploymentContext`

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Nenhuma fixture realiza I/O de rede
    - O relógio é determinístico (avança 100ms por leitura)

Limites explícitos:
    - Não substituir testes de integração com uma loja real
    - Não conter lógica de domínio
"""

from datetime import datetime, timedelta, timezone

import pytest

from saleor_configurator.core.pipeline.context import DeploymentContext
from saleor_configurator.core.pipeline.events import EventLog
from saleor_configurator.diff.types import DiffSummary
from saleor_configurator.schema.model import Configuration
from saleor_configurator.schema.parser import parse_configuration

from tests.fixtures.remote_store import FakeRemoteStore


class StepClock:
    """Relógio determinístico: cada leitura avança `step`."""

    def __init__(self, start: datetime, step: timedelta):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock() -> StepClock:
    return StepClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc), timedelta(milliseconds=100))


@pytest.fixture
def events() -> EventLog:
    return EventLog(run_id="test-run")


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def germany_channel() -> dict:
    return {
        "name": "Germany",
        "slug": "germany",
        "currencyCode": "EUR",
        "defaultCountry": "DE",
    }


@pytest.fixture
def catalog_document() -> dict:
    """
    Documento de estado desejado cobrindo todas as seções.

    Usado por testes de parser, diff e deploy ponta a ponta.
    """
    return {
        "shop": {"defaultMailSenderName": "Store", "trackInventoryByDefault": True},
        "channels": [
            {"name": "Germany", "slug": "germany", "currencyCode": "EUR", "defaultCountry": "DE"},
        ],
        "productAttributes": [
            {"name": "Color", "inputType": "DROPDOWN", "values": [{"name": "Red"}, {"name": "Blue"}]},
        ],
        "contentAttributes": [
            {"name": "Summary", "inputType": "RICH_TEXT"},
        ],
        "productTypes": [
            {
                "name": "Clothing",
                "isShippingRequired": True,
                "productAttributes": [{"attribute": "Color"}],
                "variantAttributes": [
                    {"name": "Size", "inputType": "DROPDOWN", "values": ["S", "M", "L"], "variantSelection": True},
                ],
            },
        ],
        "pageTypes": [
            {"name": "Article", "attributes": [{"attribute": "Summary"}]},
        ],
        "categories": [
            {"name": "Apparel", "slug": "apparel", "subcategories": [{"name": "Shirts", "slug": "shirts"}]},
        ],
    }


@pytest.fixture
def make_context(clock):
    """Fábrica de DeploymentContext sequencial (max_workers=1) por padrão."""

    def _make(store=None, summary=None, configuration=None, **kwargs) -> DeploymentContext:
        return DeploymentContext(
            store=store if store is not None else FakeRemoteStore(),
            summary=summary if summary is not None else DiffSummary(),
            configuration=configuration if configuration is not None else Configuration(),
            started_at=clock(),
            run_id=kwargs.pop("run_id", "test-run"),
            max_workers=kwargs.pop("max_workers", 1),
            **kwargs,
        )

    return _make


@pytest.fixture
def parse():
    return parse_configuration
