# src/saleor_configurator/core/traceability/__init__.py
"""
Rastreabilidade de deployments.

- report: persistência JSON determinística do relatório de deployment
"""
