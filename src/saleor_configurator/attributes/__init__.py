# src/saleor_configurator/attributes/__init__.py
"""
Atributos globais compartilhados.

    - cache    → `AttributeCache`, identidade nome → id remoto por run
    - resolver → `AttributeResolver`, resolução em lote de referências
                 e criação/reuso de definições inline
"""

from .cache import AttributeCache, AttributeCacheEntry
from .resolver import AttributeResolver, ResolvedAttribute

__all__ = ["AttributeCache", "AttributeCacheEntry", "AttributeResolver", "ResolvedAttribute"]
