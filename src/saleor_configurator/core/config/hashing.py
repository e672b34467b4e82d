# src/saleor_configurator/core/config/hashing.py
"""
Hashing canônico de estruturas de configuração.

O hash identifica estruturalmente tanto as settings efetivas da ferramenta
quanto o estado desejado carregado do YAML, e é gravado no relatório de
deployment para auditoria ("qual configuração foi aplicada nesta run?").

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash, independente da
      ordem original das chaves
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash SHA-256 determinístico de um dicionário de configuração.

    Valores não serializáveis nativamente em JSON (ex.: enums, datas)
    são convertidos via `str`.

    Args:
        config (Dict[str, Any]): Estrutura de configuração.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
