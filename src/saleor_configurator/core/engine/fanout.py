# src/saleor_configurator/core/engine/fanout.py
"""
Fan-out concorrente por entidade dentro de um estágio.

Estágios multi-entidade aplicam cada entidade de forma independente: a
falha de uma entidade não impede as demais. Este módulo executa a ação
por entidade num pool limitado de threads e devolve sucessos e falhas
na ordem de entrada, para que o estágio decida se levanta
`StageAggregateError`.

Invariantes:
    - A ordem de `successes` e `failures` segue a ordem de `items`
    - Apenas `Exception` é capturada; interrupções do processo propagam
    - `max_workers <= 1` executa sequencialmente na thread chamadora
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, TypeVar

from saleor_configurator.core.exceptions import EntityFailure, StageAggregateError

T = TypeVar("T")


@dataclass(frozen=True)
class BatchOutcome:
    successes: Tuple[str, ...] = ()
    failures: Tuple[EntityFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def run_batch(
    items: Sequence[T],
    *,
    key: Callable[[T], str],
    action: Callable[[T], Any],
    max_workers: int = 1,
) -> BatchOutcome:
    """
    Executa `action` para cada item, coletando sucessos e falhas.

    Args:
        items: entidades a aplicar.
        key: extrai o nome exibido da entidade.
        action: aplica uma entidade; falhas são sinalizadas por exceção.
        max_workers: limite de concorrência.

    Returns:
        BatchOutcome: nomes aplicados e falhas com a causa original.
    """
    items = list(items)
    successes: List[str] = []
    failures: List[EntityFailure] = []

    if max_workers <= 1 or len(items) <= 1:
        for item in items:
            try:
                action(item)
            except Exception as e:
                failures.append(EntityFailure(entity=key(item), error=e))
            else:
                successes.append(key(item))
        return BatchOutcome(successes=tuple(successes), failures=tuple(failures))

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        submitted = [(item, executor.submit(action, item)) for item in items]
        for item, future in submitted:
            try:
                future.result()
            except Exception as e:
                failures.append(EntityFailure(entity=key(item), error=e))
            else:
                successes.append(key(item))

    return BatchOutcome(successes=tuple(successes), failures=tuple(failures))


def raise_for_failures(stage_name: str, outcome: BatchOutcome) -> None:
    """Levanta `StageAggregateError` quando ao menos uma entidade falhou."""
    if outcome.failures:
        raise StageAggregateError.for_stage(stage_name, outcome.failures, outcome.successes)
