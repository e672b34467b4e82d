# src/saleor_configurator/__init__.py
"""
Saleor Configurator: reconciliação declarativa e deployment de configuração.

Este pacote raiz define o namespace público do Saleor Configurator, uma
ferramenta que compara o estado desejado de uma loja (descrito em YAML)
com o estado remoto real e aplica as diferenças em estágios ordenados.

Princípios centrais:
    - O estado desejado é declarativo e versionável
    - O diff é determinístico e auditável antes de qualquer mutação
    - O deployment é resiliente: falhas de um estágio não abortam os demais
    - Rastreabilidade da execução é um requisito de primeira classe

Arquitetura em alto nível:
    - schema            → modelo tipado do estado desejado, parser e preflight
    - diff              → comparadores por entidade e serviço de reconciliação
    - attributes        → cache e resolução de atributos globais compartilhados
    - remote            → capacidade abstrata de acesso ao estado remoto
    - stages            → estágios concretos de deployment, em ordem explícita
    - core.pipeline     → contratos de Stage, contexto e registry
    - core.engine       → execução do pipeline, métricas e resultados
    - core.traceability → relatório de deployment persistido em JSON

Limites explícitos:
    - Não define o protocolo de transporte remoto
    - Não contém CLI ou interação com o operador
    - Não executa deleções remotas

Este módulo existe para estabelecer o namespace do Saleor Configurator.
"""

__version__ = "0.1.0"
