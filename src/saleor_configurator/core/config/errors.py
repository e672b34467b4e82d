# src/saleor_configurator/core/config/errors.py
"""
Exceções canônicas da camada de configuração da ferramenta.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, merge e materialização das settings do Saleor Configurator
(não do estado desejado da loja, que possui seus próprios erros em
`saleor_configurator.schema.errors`).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`

Limites explícitos:
    - Não executa deployment
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração da ferramenta.

    Esta hierarquia permite captura genérica de erros de configuração e
    a classificação como erro de validação (exit code 4).
    """


class SettingsFileNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de settings explicitamente
    informado não existe.

    Limites explícitos:
        - Não tenta inferir ou criar o arquivo automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz não é um dicionário (`dict`).

    Invariantes:
        - O loader só opera sobre estruturas do tipo dicionário
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"deploy": {"fail_on_delete": false}}
        - override: {"deploy": "strict"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """
    Exceção levantada quando uma setting possui valor fora do domínio
    aceito (ex.: `max_workers` menor que 1, seção de diff desconhecida).
    """
