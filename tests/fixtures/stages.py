# tests/fixtures/stages.py
"""
Estágios mínimos para testes do pipeline.

Implementam o protocolo `Stage` via duck typing, sem tocar a loja remota:
cada estágio registra no contexto as entidades "aplicadas" e, se
configurado, levanta a exceção fornecida.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple


class ScriptedStage:
    def __init__(
        self,
        name: str,
        *,
        applied: Sequence[Tuple[str, str]] = (),
        entity_type: str = "Channels",
        error: Optional[BaseException] = None,
        skip: bool = False,
        skip_error: Optional[BaseException] = None,
        planned: Optional[Dict[str, str]] = None,
        calls: Optional[List[str]] = None,
    ):
        self.name = name
        self._applied = list(applied)
        self._entity_type = entity_type
        self._error = error
        self._skip = skip
        self._skip_error = skip_error
        self._planned = planned
        self.calls = calls if calls is not None else []

    def skip(self, context) -> bool:
        if self._skip_error is not None:
            raise self._skip_error
        return self._skip

    def planned_entities(self, context) -> Dict[str, str]:
        return dict(self._planned or {})

    def execute(self, context) -> None:
        self.calls.append(self.name)
        for entity, operation in self._applied:
            context.record_applied(
                stage=self.name, entity_type=self._entity_type, entity=entity, operation=operation
            )
        if self._error is not None:
            raise self._error
