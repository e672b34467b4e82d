# src/saleor_configurator/schema/errors.py
"""Erros de carregamento e validação do estado desejado (YAML da loja)."""

from __future__ import annotations

from dataclasses import dataclass

from saleor_configurator.core.exceptions import ValidationError


@dataclass(frozen=True, eq=False)
class ConfigurationLoadError(ValidationError):
    """Base para falhas ao ler o arquivo de configuração."""


@dataclass(frozen=True, eq=False)
class ConfigurationFileNotFoundError(ConfigurationLoadError):
    """Arquivo de configuração ausente."""


@dataclass(frozen=True, eq=False)
class UnsupportedConfigurationFormatError(ConfigurationLoadError):
    """Extensão não suportada (apenas .yaml, .yml, .json)."""


@dataclass(frozen=True, eq=False)
class ConfigurationParseError(ConfigurationLoadError):
    """Conteúdo sintaticamente inválido ou raiz que não é um mapa."""


@dataclass(frozen=True, eq=False)
class ConfigurationSchemaError(ValidationError):
    """Documento bem formado mas estruturalmente inválido."""
