# src/event_stream_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Event Stream Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento de arquivos, a construção do registry de streams e a
consulta por constraints.

As exceções aqui definidas representam **violações estruturais
explícitas** da configuração, e não erros genéricos de execução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de validação são falhas fatais no momento da construção
    - Streams não encontrados NÃO são erros (apenas registrados em log)

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Erros de validação também são `ValueError`, para captura genérica

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de adapters HTTP ou de wiring de serviços
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração de streams.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e consulta ao registry devem herdar desta classe.
    """


class InvalidStreamConfigError(ConfigError, ValueError):
    """
    Exceção levantada quando uma entrada de stream config é inválida.

    Casos cobertos:
        - `stream` ausente, vazio ou de tipo diferente de `str`
        - `stream` com cara de regex (começa com '/') que não compila
        - `topics` ou `topic_prefixes` presentes mas que não são listas de strings
        - raiz de `EventStreams` / `EventStreamsDefaultSettings` com tipo inválido

    Invariantes:
        - Um registry nunca é construído parcialmente após este erro
    """


class InvalidConstraintsError(ConfigError, ValueError):
    """
    Exceção levantada quando as constraints de uma consulta não podem
    ser decompostas em um mapeamento chave-valor.

    Esta é a única falha alcançável em tempo de consulta.
    """


class ConfigFileNotFoundError(ConfigError):
    """Arquivo principal de configuração de streams não encontrado."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo de configuração
    não é um dicionário (`dict`).
    """


class MissingConfigOptionError(ConfigError):
    """Opção obrigatória ausente no provedor de configuração."""
