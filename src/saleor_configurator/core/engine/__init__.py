# src/saleor_configurator/core/engine/__init__.py
"""
Engine de deployment do Saleor Configurator.

Componentes:
    - pipeline: `DeploymentPipeline`, executor sequencial e resiliente
    - fanout: execução concorrente por entidade dentro de um estágio
    - metrics: `MetricsCollector` e `DeploymentMetrics`
    - results: consolidação de `StageResult` e exit codes
    - formatter: renderização textual e serializável dos resultados
    - cleanup: sugestões para entidades que existem apenas remotamente
"""
