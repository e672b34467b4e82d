# src/saleor_configurator/core/config/merge.py
"""
Deep-merge determinístico das settings da ferramenta.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

A política existe para que `settings.local.yaml` sobrescreva apenas o que
declara, preservando os defaults embutidos para todo o resto.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _type_label(value: Any) -> str:
    return type(value).__name__


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` e `override` produzindo um novo dicionário.

    Nenhum dos inputs é mutado. Chaves ausentes no override são preservadas
    da base. `bool` e `int` são tratados como tipos distintos, de modo que
    `max_workers: true` é rejeitado em vez de coerido.

    Args:
        base (Dict[str, Any]): Settings base (defaults embutidos).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova estrutura resultante.

    Raises:
        ConfigTypeConflictError: Se uma chave mudar de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{_type_label(base)} vs {_type_label(override)}"
        )

    merged: Dict[str, Any] = deepcopy(base)

    for key, incoming in override.items():
        if key not in merged:
            merged[key] = deepcopy(incoming)
            continue

        current = merged[key]

        if isinstance(current, dict) and isinstance(incoming, dict):
            merged[key] = deep_merge(current, incoming)
        elif isinstance(incoming, list) and isinstance(current, list):
            merged[key] = list(deepcopy(incoming))
        elif current is None or type(current) is type(incoming):
            merged[key] = deepcopy(incoming)
        else:
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{_type_label(current)} vs {_type_label(incoming)}"
            )

    return merged
