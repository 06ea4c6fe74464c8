# src/event_stream_config/core/streams/stream_config.py
"""
Configuração de settings de um único stream.

Este módulo define o `StreamConfig`, a entidade que representa uma
entrada de configuração para um nome de stream ou para um padrão
(regex delimitado) que casa com uma família de nomes.

Responsabilidades do módulo:
    - Validar o stream key e os settings reservados (`topics`, `topic_prefixes`)
    - Mesclar settings default com os settings da entrada
    - Decidir se um nome de stream casa com esta entrada
    - Derivar os tópicos de um stream
    - Verificar se a entrada satisfaz constraints de settings

Exemplo de settings:

    {
        "schema_title": "mediawiki/job",
        "sample": {"rate": 0.8},
        "destination_event_service": "eventgate-main",
        "topic_prefixes": ["eqiad.", "codfw."],
    }

Invariantes:
    - O stream key é imutável após a construção
    - `settings["stream"]` é sempre o stream key
    - A detecção de padrão é feita uma única vez, na construção

Limites explícitos:
    - Não valida semântica de settings (ex.: taxa de amostragem entre 0 e 1)
    - Não conhece outras entradas (resolução é feita pelo registry)
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Dict, List, Optional, Pattern

from ..config.errors import InvalidStreamConfigError
from ..config.merge import deep_merge
from .matching import (
    compile_stream_pattern,
    is_list_like,
    is_partial_match,
    is_valid_pattern,
    looks_like_pattern,
    prefix_pattern,
    stringify,
)

STREAM_SETTING = "stream"
TOPICS_SETTING = "topics"
TOPIC_PREFIXES_SETTING = "topic_prefixes"


class StreamConfig:
    """
    Entrada de configuração de um stream (nome exato ou padrão).

    O `StreamConfig` guarda os settings já mesclados com os defaults e
    expõe as operações de matching e de derivação de tópicos usadas pelo
    `StreamConfigRegistry`.

    Decisões arquiteturais:
        - O padrão compilado é guardado na construção, evitando checagens
          de validade de regex a cada consulta
        - `to_settings()` devolve cópias; o estado interno nunca é exposto

    Invariantes:
        - Um padrão inválido nunca produz uma instância
        - `is_pattern` é True somente se o stream key é um padrão válido
    """

    def __init__(
        self,
        stream: str,
        settings: Optional[Mapping] = None,
        default_settings: Optional[Mapping] = None,
    ) -> None:
        self._pattern = self._validate_stream(stream)
        self._stream = stream

        merged = deep_merge(default_settings or {}, settings or {})
        merged[STREAM_SETTING] = stream
        self._validate_topic_settings(merged)

        self._settings: Dict[str, Any] = merged

    @staticmethod
    def _validate_stream(stream: Any) -> Optional[Pattern[str]]:
        if not isinstance(stream, str) or not stream:
            raise InvalidStreamConfigError(
                f"{STREAM_SETTING} deve ser uma string não vazia, recebido: {stream!r}"
            )

        if not looks_like_pattern(stream):
            return None

        try:
            return compile_stream_pattern(stream)
        except re.error as e:
            raise InvalidStreamConfigError(f"Invalid regex '{stream}': {e}") from e

    def _validate_topic_settings(self, settings: Mapping) -> None:
        for key in (TOPICS_SETTING, TOPIC_PREFIXES_SETTING):
            value = settings.get(key)
            if value is None:
                continue
            if not is_list_like(value) or not all(isinstance(item, str) for item in value):
                raise InvalidStreamConfigError(
                    f"{key} de '{self._stream}' deve ser uma lista de strings, "
                    f"recebido: {value!r}"
                )

    @property
    def is_pattern(self) -> bool:
        return self._pattern is not None

    @property
    def settings(self) -> Dict[str, Any]:
        return deepcopy(self._settings)

    def stream(self) -> str:
        return self._stream

    def matches(self, stream: str) -> bool:
        """True se esta entrada se aplica ao nome de stream `stream`."""
        if self._pattern is not None:
            return self._pattern.search(stream) is not None
        return self._stream == stream

    def topics(self, stream: Optional[str] = None) -> List[str]:
        """
        Deriva os tópicos do stream.

        Ordem de resolução:
            1. `topics` explícito vence sempre (retornado como está)
            2. sem `topic_prefixes`, o tópico é o próprio nome do stream
            3. com `topic_prefixes` e `stream` sendo um padrão válido,
               retorna um único padrão reescrito com os prefixos
            4. caso contrário, um tópico por prefixo (`prefix + stream`),
               na ordem dos prefixos

        Args:
            stream (Optional[str]): Nome (ou padrão) alvo. Default: o stream key.

        Returns:
            List[str]: Tópicos do stream.
        """
        if stream is None:
            stream = self._stream

        explicit = self._settings.get(TOPICS_SETTING)
        if explicit is not None:
            return list(explicit)

        prefixes = self._settings.get(TOPIC_PREFIXES_SETTING)
        if prefixes is None:
            return [stream]

        if is_valid_pattern(stream):
            return [prefix_pattern(stream, prefixes)]

        return [prefix + stream for prefix in prefixes]

    def to_settings(self, stream: Optional[str] = None) -> Dict[str, Any]:
        """Retorna uma cópia dos settings com `topics` derivado para `stream`."""
        settings = deepcopy(self._settings)
        settings[TOPICS_SETTING] = self.topics(stream)
        return settings

    def matches_constraints(self, constraints: Mapping) -> bool:
        """
        True se esta entrada satisfaz todas as `constraints`.

        A constraint `stream` é avaliada via `matches()` (um padrão casa com
        nomes concretos); as demais via `is_partial_match` contra os settings.
        O mapping recebido não é mutado.
        """
        remaining = dict(constraints)

        if STREAM_SETTING in remaining:
            wanted = remaining.pop(STREAM_SETTING)
            if not self.matches(wanted if isinstance(wanted, str) else stringify(wanted)):
                return False

        return is_partial_match(self._settings, remaining)

    def __repr__(self) -> str:
        kind = "pattern" if self.is_pattern else "name"
        return f"StreamConfig({kind}={self._stream!r})"
