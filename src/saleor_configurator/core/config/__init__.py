# src/saleor_configurator/core/config/__init__.py

"""
Camada de configuração da ferramenta.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar estruturalmente e identificar as settings de execução do
Saleor Configurator (política de deleção, paralelismo, relatórios e
seleção de seções do diff).

A configuração da ferramenta é:
    - declarativa
    - determinística
    - separada do estado desejado da loja

Responsabilidades do pacote:
    - Carregamento de arquivos YAML/JSON com validação do tipo raiz
    - Resolução de settings via deep-merge (defaults embutidos + local)
    - Materialização tipada (`Settings`)
    - Geração de hash canônico para rastreabilidade

Limites explícitos:
    - Não valida o estado desejado da loja
    - Não executa deployment

Este pacote existe para garantir previsibilidade,
rastreabilidade e segurança na resolução de configuração.
"""
