# src/saleor_configurator/core/__init__.py
"""
Core do Saleor Configurator.

Este pacote reúne as responsabilidades transversais da ferramenta,
independentes de qualquer entidade de loja específica.

Componentes principais:
    - config       → configuração da própria ferramenta (merge, hashing)
    - pipeline     → protocolo de Stage, contexto de deployment e registry
    - engine       → execução do pipeline, métricas, resultados e formatação
    - traceability → relatório de deployment persistido
    - errors       → payload canônico de erro e catálogo de tipos
    - exceptions   → exceções tipadas, classificação e exit codes

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Erros são artefatos serializáveis, não stack traces
    - Estado e efeitos colaterais são sempre rastreáveis

Limites explícitos:
    - Não conhece o formato de transporte remoto
    - Não depende de CLI ou terminal

Este pacote existe como a fonte de verdade operacional do Saleor Configurator.
"""
