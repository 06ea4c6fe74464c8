# src/event_stream_config/core/config/__init__.py
"""
Camada de configuração do Event Stream Config.

Este pacote contém os utilitários responsáveis por carregar, mesclar e
identificar a configuração de streams que alimenta o registry.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (principal + override local)
    - Deep-merge de settings (defaults + entrada do stream)
    - Fingerprint canônico para detectar mudanças de configuração
    - Hierarquia de exceções de configuração

Limites explícitos:
    - Não resolve nomes de streams
    - Não valida semântica de settings (ex.: taxas de amostragem)
"""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConstraintsError,
    InvalidStreamConfigError,
    MissingConfigOptionError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import DEFAULT_SETTINGS_OPTION, EVENT_STREAMS_OPTION, load_stream_settings
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConstraintsError",
    "InvalidStreamConfigError",
    "MissingConfigOptionError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_stream_settings",
    "EVENT_STREAMS_OPTION",
    "DEFAULT_SETTINGS_OPTION",
]
