# src/event_stream_config/core/streams/__init__.py
"""
Resolução de stream configs.

Este pacote contém o motor de resolução de configuração de streams:

    - stream_config → uma entrada (nome ou padrão): merge, matching e tópicos
    - matching      → padrões delimitados, coerção e matching parcial
    - registry      → coleção ordenada de entradas e consulta `get()`
    - factory       → construção a partir de opções e contributors
    - constraints   → parsing de constraints vindas de query strings

O motor é puro, síncrono e em memória: não faz I/O e não guarda estado
mutável após a construção.
"""

from .constraints import parse_constraints
from .factory import StreamConfigContributor, StreamConfigsFactory, merge_stream_sources
from .matching import is_partial_match, is_valid_pattern
from .registry import StreamConfigRegistry, is_ordinal_key
from .stream_config import (
    STREAM_SETTING,
    TOPIC_PREFIXES_SETTING,
    TOPICS_SETTING,
    StreamConfig,
)

__all__ = [
    "StreamConfig",
    "StreamConfigRegistry",
    "StreamConfigsFactory",
    "StreamConfigContributor",
    "merge_stream_sources",
    "parse_constraints",
    "is_partial_match",
    "is_valid_pattern",
    "is_ordinal_key",
    "STREAM_SETTING",
    "TOPICS_SETTING",
    "TOPIC_PREFIXES_SETTING",
]
