# src/saleor_configurator/core/config/loader.py
"""
Loader canônico de arquivos declarativos e das settings da ferramenta.

Este módulo é responsável por:
    - carregar arquivos YAML ou JSON validando o tipo raiz
    - resolver as settings efetivas a partir dos defaults embutidos e de
      um arquivo local opcional, via deep-merge determinístico

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Nenhuma heurística implícita é aplicada
    - Erros estruturais são tratados como falhas fatais
    - A mesma entrada sempre produz a mesma configuração final

Invariantes:
    - O resultado de `load_structured_file` é sempre um `dict`
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida o estado desejado da loja (ver `saleor_configurator.schema`)
    - Não interage com o pipeline de deployment
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .settings import DEFAULT_SETTINGS, Settings
from .errors import (
    InvalidConfigRootTypeError,
    SettingsFileNotFoundError,
    UnsupportedConfigFormatError,
)


PathLike = Union[str, Path]


def load_structured_file(path: PathLike) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML/JSON e valida que o conteúdo raiz é um mapa.

    Arquivos vazios são interpretados como dicionários vazios.

    Args:
        path (PathLike): Caminho do arquivo.

    Returns:
        Dict[str, Any]: Conteúdo carregado.

    Raises:
        SettingsFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
        yaml.YAMLError: Se o YAML for sintaticamente inválido.
    """
    file = Path(path)
    if not file.exists():
        raise SettingsFileNotFoundError(f"Arquivo não encontrado: {file}")

    suffix = file.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with file.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {file.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def resolve_settings(
    *,
    local_path: Optional[PathLike] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Resolve o dicionário efetivo de settings.

    Precedência (da menor para a maior):
        1. DEFAULT_SETTINGS embutidos
        2. arquivo local (quando informado e existente)
        3. overrides programáticos

    Um `local_path` informado mas inexistente é ignorado, mantendo o
    comportamento de "override opcional".
    """
    effective = deep_merge(DEFAULT_SETTINGS, {})

    if local_path is not None and Path(local_path).exists():
        effective = deep_merge(effective, load_structured_file(local_path))

    if overrides:
        effective = deep_merge(effective, overrides)

    return effective


def load_settings(
    *,
    local_path: Optional[PathLike] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Resolve e materializa as settings tipadas da ferramenta."""
    return Settings.from_dict(resolve_settings(local_path=local_path, overrides=overrides))
