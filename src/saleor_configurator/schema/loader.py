"""Loader canônico do estado desejado (YAML/JSON).

Notas:
- YAML é preferencial, JSON é alternativo.
- O formato é inferido pela extensão do arquivo.
- Toda falha vira uma subclasse de `ConfigurationLoadError` (exit code 4).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import (
    ConfigurationFileNotFoundError,
    ConfigurationParseError,
    UnsupportedConfigurationFormatError,
)
from .model import Configuration
from .parser import parse_configuration


def read_configuration_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Lê o arquivo e retorna o documento bruto (dict), sem validação de schema."""
    p = Path(path)
    if not p.exists():
        raise ConfigurationFileNotFoundError(
            message=f"configuration file not found: {p}",
            details={"path": str(p)},
            hint="Informe o caminho correto do arquivo config.yml.",
        )

    suffix = p.suffix.lower()
    if suffix not in {".yml", ".yaml", ".json"}:
        raise UnsupportedConfigurationFormatError(
            message=f"unsupported configuration format: {suffix}",
            details={"path": str(p), "suffix": suffix},
        )

    raw = p.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationParseError(
            message=str(e) or "failed to parse configuration",
            details={"path": str(p)},
        ) from e

    if data is None:
        raise ConfigurationParseError(message="configuration file is empty", details={"path": str(p)})

    if not isinstance(data, dict):
        raise ConfigurationParseError(
            message="configuration root must be a mapping/dict",
            details={"path": str(p), "received": type(data).__name__},
        )

    return data


def load_configuration(path: Union[str, Path]) -> Configuration:
    """Carrega e valida estruturalmente o estado desejado."""
    return parse_configuration(read_configuration_document(path))
