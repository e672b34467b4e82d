# tests/stages/test_stage_order.py
"""
Contrato de ordem dos estágios padrão.

A ordem é a ordem de execução: atributos globais precisam existir antes
dos product types e page types que os vinculam.
"""

from saleor_configurator.core.pipeline.stage import Stage
from saleor_configurator.stages import build_stage_registry, default_stages

EXPECTED_ORDER = [
    "Validating configuration",
    "Updating shop settings",
    "Managing channels",
    "Managing attributes",
    "Managing product types",
    "Managing page types",
    "Managing categories",
    "Managing warehouses",
    "Managing tax classes",
]


def test_default_stage_order():
    assert [s.name for s in default_stages()] == EXPECTED_ORDER


def test_registry_preserves_order():
    assert build_stage_registry().names() == EXPECTED_ORDER


def test_default_stages_satisfy_protocol():
    assert all(isinstance(s, Stage) for s in default_stages())


def test_attributes_precede_their_owners():
    names = [s.name for s in default_stages()]
    assert names.index("Managing attributes") < names.index("Managing product types")
    assert names.index("Managing attributes") < names.index("Managing page types")
