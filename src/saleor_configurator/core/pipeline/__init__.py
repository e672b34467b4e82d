# src/saleor_configurator/core/pipeline/__init__.py
"""
# Pipeline Core do Saleor Configurator

Este pacote define os **contratos canônicos** e as **estruturas
fundamentais** do pipeline de deployment.

O deployment é modelado como uma **sequência explícita de estágios**, onde:
- cada estágio aplica o trabalho de um tipo de entidade
- a execução é coordenada exclusivamente pelo `DeploymentPipeline`
- o estado compartilhado é mediado pelo `DeploymentContext`

## Componentes

- **types**: `StageStatus`, `OverallStatus`, `EntityResult`, `StageResult`, `DeploymentResult`
- **stage**: `Stage` (Protocol)
- **context**: `DeploymentContext`
- **events**: `EventLog`, logging estruturado da run
- **registry**: `StageRegistry`, ordem explícita e unicidade de `stage.name`

## Princípios Fundamentais

- Estágios **não conhecem** o pipeline nem uns aos outros
- A ordem de execução é **explícita e testada**
- Nenhuma falha de estágio aborta a run

Este pacote existe para garantir **clareza contratual,
resiliência e testabilidade** no deployment.
"""
