# src/saleor_configurator/schema/__init__.py
"""
Estado desejado da loja.

Este pacote define o modelo tipado (`model`), o parser estrutural
(`parser`), o loader de arquivos (`loader`) e o preflight semântico
(`preflight`) do documento de configuração.

Limites explícitos:
    - Não acessa a loja remota
    - Não calcula diffs
"""
