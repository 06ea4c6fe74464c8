# src/event_stream_config/core/streams/factory.py
"""
Factory do `StreamConfigRegistry`.

Este módulo constrói o registry a partir da configuração do processo e
de contribuições de outros componentes.

Fontes de stream configs:
    1. A opção `EventStreams` do provedor de configuração
    2. Contributors: callables que recebem um dict inicialmente vazio e
       acrescentam entradas nele

Em chaves duplicadas, `EventStreams` vence e a contribuição é descartada.
Entradas com chave ordinal (formato histórico) de ambas as fontes são
preservadas e renumeradas, nunca sobrescritas.

O factory também expõe um acessor memoizado (`get_instance`): o registry
só é reconstruído quando o fingerprint da configuração muda, e a
construção é serializada por um lock para que um único chamador a execute.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Optional, Protocol, Sequence

from ..config.errors import InvalidStreamConfigError, MissingConfigOptionError
from ..config.hashing import compute_config_hash
from ..config.loader import DEFAULT_SETTINGS_OPTION, EVENT_STREAMS_OPTION
from .registry import StreamConfigRegistry, is_ordinal_key

StreamConfigContributor = Callable[[Dict[Any, Any]], None]


class SettingsProvider(Protocol):
    """Fonte de opções de configuração (ex.: o dict de `load_stream_settings`)."""

    def get(self, name: str) -> Any:
        ...


def merge_stream_sources(contributed: Mapping, configured: Mapping) -> Dict[Any, Any]:
    """
    Combina stream configs contribuídas com as configuradas.

    Chaves nomeadas de `configured` substituem as de `contributed` (mantendo a
    posição original); chaves ordinais de ambas as fontes são anexadas ao
    final e renumeradas a partir de zero.
    """
    merged: Dict[Any, Any] = {}
    ordinal = 0

    for source in (contributed, configured):
        for key, settings in source.items():
            if is_ordinal_key(key):
                merged[ordinal] = settings
                ordinal += 1
            else:
                merged[key] = settings

    return merged


class StreamConfigsFactory:
    """
    Constrói `StreamConfigRegistry` a partir de opções e contributors.

    Decisões arquiteturais:
        - O registry nunca lê configuração global; o factory entrega a ele
          mappings já resolvidos
        - Contributors são executados apenas quando um registry é construído
    """

    CONSTRUCTOR_OPTIONS: Sequence[str] = (EVENT_STREAMS_OPTION, DEFAULT_SETTINGS_OPTION)

    def __init__(
        self,
        options: SettingsProvider,
        contributors: Iterable[StreamConfigContributor] = (),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._options = options
        self._contributors = list(contributors)
        self._logger = logger if logger is not None else logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._instance: Optional[StreamConfigRegistry] = None
        self._fingerprint: Optional[str] = None

        self._read_options()

    def _read_options(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for name in self.CONSTRUCTOR_OPTIONS:
            value = self._options.get(name)
            if value is None:
                raise MissingConfigOptionError(f"Opção obrigatória ausente: {name}")
            if not isinstance(value, Mapping):
                raise InvalidStreamConfigError(
                    f"{name} deve ser mapping, recebido: {type(value).__name__}"
                )
            values[name] = value
        return values

    def create(self) -> StreamConfigRegistry:
        """Constrói um novo registry, executando os contributors."""
        options = self._read_options()
        return self._build(options)

    def _build(self, options: Mapping) -> StreamConfigRegistry:
        contributed: Dict[Any, Any] = {}
        for contributor in self._contributors:
            contributor(contributed)

        stream_configs = merge_stream_sources(contributed, options[EVENT_STREAMS_OPTION])
        self._logger.debug(
            "Building stream config registry with %d entries (%d contributed)",
            len(stream_configs),
            len(contributed),
        )
        return StreamConfigRegistry(
            stream_configs,
            options[DEFAULT_SETTINGS_OPTION],
            logger=self._logger,
        )

    def get_instance(self) -> StreamConfigRegistry:
        """
        Retorna o registry memoizado, reconstruindo-o se a configuração mudou.

        Raises:
            MissingConfigOptionError: Se uma opção obrigatória estiver ausente.
            InvalidStreamConfigError: Se alguma entrada for inválida.
        """
        with self._lock:
            options = self._read_options()
            fingerprint = compute_config_hash(options)

            if self._instance is None or fingerprint != self._fingerprint:
                self._instance = self._build(options)
                self._fingerprint = fingerprint

            return self._instance
