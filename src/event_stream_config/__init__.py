# src/event_stream_config/__init__.py
"""
Event Stream Config: resolução de configuração de event streams.

Este pacote resolve entradas de configuração de streams declaradas por
nome exato ou por padrão regex, mescla cada entrada com settings default,
deriva os tópicos de cada stream e filtra resultados por constraints
aninhadas.

Arquitetura em alto nível:
    - core.config  → carregamento, merge e fingerprint de configuração
    - core.streams → StreamConfig, StreamConfigRegistry e factory

Uso típico:

    from event_stream_config import StreamConfigsFactory, load_stream_settings

    options = load_stream_settings(streams_path="streams.yaml")
    registry = StreamConfigsFactory(options).get_instance()
    registry.get(["mediawiki.job.refreshLinks"])
"""

from .core.config import (
    ConfigError,
    InvalidConstraintsError,
    InvalidStreamConfigError,
    load_stream_settings,
)
from .core.streams import (
    StreamConfig,
    StreamConfigRegistry,
    StreamConfigsFactory,
    parse_constraints,
)

__all__ = [
    "ConfigError",
    "InvalidConstraintsError",
    "InvalidStreamConfigError",
    "StreamConfig",
    "StreamConfigRegistry",
    "StreamConfigsFactory",
    "load_stream_settings",
    "parse_constraints",
]
