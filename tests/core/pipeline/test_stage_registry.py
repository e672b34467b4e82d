# tests/core/pipeline/test_stage_registry.py
"""
Testes de unicidade e ordem no StageRegistry.

Os testes asseguram que:
- estágios com `name` distintos são aceitos na ordem de registro
- nomes duplicados são rejeitados explicitamente
- a tentativa de duplicidade não corrompe o estado interno
"""
import pytest

try:
    from saleor_configurator.core.pipeline.registry import DuplicateStageNameError, StageRegistry
except Exception as e:  # noqa: BLE001
    StageRegistry = None
    DuplicateStageNameError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None

from tests.fixtures.stages import ScriptedStage


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"StageRegistry indisponível: {_IMPORT_ERR}")


def test_registration_order_is_preserved():
    _require_imports()
    registry = StageRegistry.of([ScriptedStage("b"), ScriptedStage("a"), ScriptedStage("c")])

    assert registry.names() == ["b", "a", "c"]
    assert [s.name for s in registry.list()] == ["b", "a", "c"]
    assert len(registry) == 3
    assert registry.get("a").name == "a"


def test_duplicate_name_is_rejected_without_corrupting_state():
    _require_imports()
    registry = StageRegistry.of([ScriptedStage("a")])

    with pytest.raises(DuplicateStageNameError):
        registry.add(ScriptedStage("a"))

    assert registry.names() == ["a"]


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_is_rejected(name):
    _require_imports()
    stage = ScriptedStage("x")
    stage.name = name
    with pytest.raises(ValueError):
        StageRegistry().add(stage)
