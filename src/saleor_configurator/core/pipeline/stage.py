# src/saleor_configurator/core/pipeline/stage.py
"""
Contrato canônico de estágio de deployment.

Um estágio é a menor unidade executável do deployment e aplica, na loja
remota, o trabalho de um tipo de entidade descrito no DiffSummary.

Responsabilidades de um estágio:
    - decidir se há trabalho (`skip`)
    - aplicar suas mudanças interagindo exclusivamente via DeploymentContext
    - registrar as entidades aplicadas (`context.record_applied`)
    - sinalizar falhas parciais via `StageAggregateError`

Princípios fundamentais:
    - Estágios não conhecem o pipeline nem outros estágios
    - Estágios não controlam ordem de execução (ver registry)
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não medem a própria duração
    - Não convertem exceções em resultado (responsabilidade do pipeline)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import DeploymentContext


@runtime_checkable
class Stage(Protocol):
    """
    Contrato mínimo de um estágio.

    Atributos obrigatórios:
        - name: nome estável e único, exibido no relatório

    Opcional:
        - planned_entities(context) → mapeamento nome → operação
          (create/update) das entidades que o estágio pretende aplicar;
          usado para contabilizar falhas totais
    """
    name: str

    def skip(self, context: DeploymentContext) -> bool:
        """Retorna True quando o estágio não possui trabalho nesta run."""
        ...

    def execute(self, context: DeploymentContext) -> None:
        """Aplica as mudanças do estágio; falhas são sinalizadas por exceção."""
        ...
