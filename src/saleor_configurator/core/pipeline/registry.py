# src/saleor_configurator/core/pipeline/registry.py
"""
Registro ordenado de estágios de deployment.

A ordem de registro É a ordem de execução: dependências entre entidades
remotas (ex.: atributos antes dos product types que os vinculam) são
expressas pela posição no registry, que é um contrato explícito e testado.

Invariantes:
    - Cada estágio registrado possui `name` não vazio e único
    - `list()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não executa estágios
    - Não resolve dependências implícitas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .stage import Stage


class DuplicateStageNameError(ValueError):
    """
    Exceção levantada quando dois estágios compartilham o mesmo `name`.

    A duplicidade é tratada como erro fatal de montagem do pipeline e
    ocorre no momento do registro, antes de qualquer execução.
    """


@dataclass
class StageRegistry:
    _stages: Dict[str, Stage] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, stages: Iterable[Stage]) -> "StageRegistry":
        registry = cls()
        for stage in stages:
            registry.add(stage)
        return registry

    def add(self, stage: Stage) -> None:
        name = getattr(stage, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("stage.name must be a non-empty string")

        if name in self._stages:
            raise DuplicateStageNameError(f"Duplicate stage name: {name}")

        self._stages[name] = stage
        self._order.append(name)

    def get(self, name: str) -> Stage:
        return self._stages[name]

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[Stage]:
        return [self._stages[n] for n in self._order]

    def __len__(self) -> int:
        return len(self._order)
