# src/event_stream_config/core/streams/registry.py
"""
Registry de stream configs.

Este módulo define o `StreamConfigRegistry`, responsável por manter a
coleção ordenada de `StreamConfig` e por responder consultas por nomes
de stream e por constraints de settings.

Resolução de nomes:
    - Sem nomes alvo, todas as entradas são retornadas, na ordem de
      declaração, indexadas pelo próprio stream key (que pode ser um padrão)
    - Com nomes alvo, cada nome é resolvido primeiro por igualdade exata
      de stream key e, na falta dela, pelo primeiro padrão que casar
    - Nomes sem entrada correspondente são registrados em log (WARNING)
      e omitidos do resultado

Compatibilidade:
    Entradas declaradas com chave ordinal (formato histórico, lista de
    entradas) são registradas pelo valor de `stream` embutido nos settings.
    Strings com um inteiro decimal canônico ("0", "1") também são ordinais,
    como as chaves de um objeto JSON que representa essa lista.

Invariantes:
    - O registry é imutável após a construção
    - Um registry é totalmente válido ou não é construído
    - `get()` é somente leitura e pode ser chamado concorrentemente

Limites explícitos:
    - Não lê configuração global (recebe mappings já resolvidos)
    - Não serializa resultados
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..config.errors import InvalidConstraintsError, InvalidStreamConfigError
from .stream_config import STREAM_SETTING, StreamConfig

# inteiros decimais canônicos: "0", "12", "-3" (não "01", "+1" nem " 1")
_ORDINAL_STRING_RE = re.compile(r"0|-?[1-9][0-9]*")


def is_ordinal_key(key: Any) -> bool:
    """
    True se `key` é uma chave ordinal (formato histórico).

    Inteiros são ordinais; strings com um inteiro decimal canônico também,
    já que um objeto JSON com chaves "0", "1"... representa a mesma lista
    de entradas.
    """
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and _ORDINAL_STRING_RE.fullmatch(key) is not None


class StreamConfigRegistry:
    """
    Coleção ordenada de `StreamConfig`, indexada por stream key.

    Decisões arquiteturais:
        - Todas as entradas são construídas (e validadas) no construtor
        - Igualdade exata sempre tem prioridade sobre padrões, mesmo que
          o padrão tenha sido declarado antes
        - Streams não encontrados degradam o resultado, nunca falham
    """

    def __init__(
        self,
        stream_configs: Mapping,
        default_settings: Optional[Mapping] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not isinstance(stream_configs, Mapping):
            raise InvalidStreamConfigError(
                f"EventStreams deve ser mapping, recebido: {type(stream_configs).__name__}"
            )
        if default_settings is None:
            default_settings = {}
        if not isinstance(default_settings, Mapping):
            raise InvalidStreamConfigError(
                "EventStreamsDefaultSettings deve ser mapping, "
                f"recebido: {type(default_settings).__name__}"
            )

        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._entries: Dict[str, StreamConfig] = {}

        for key, settings in stream_configs.items():
            if settings is not None and not isinstance(settings, Mapping):
                raise InvalidStreamConfigError(
                    f"Settings do stream '{key}' devem ser mapping, "
                    f"recebido: {type(settings).__name__}"
                )
            stream = self._resolve_key(key, settings or {})
            self._entries[stream] = StreamConfig(stream, settings, default_settings)

    @staticmethod
    def _resolve_key(key: Any, settings: Mapping) -> Any:
        if is_ordinal_key(key) and STREAM_SETTING in settings:
            return settings[STREAM_SETTING]
        return key

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, stream: object) -> bool:
        return stream in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def entries(self) -> List[StreamConfig]:
        return list(self._entries.values())

    def find(self, stream: str) -> Optional[StreamConfig]:
        """
        Retorna a entrada que se aplica a `stream`, ou None.

        A entrada com stream key idêntico vence; caso não exista, vence o
        primeiro padrão (em ordem de declaração) que casar com `stream`.
        """
        exact = self._entries.get(stream)
        if exact is not None:
            return exact

        for entry in self._entries.values():
            if entry.matches(stream):
                return entry

        return None

    def _select(self, streams: Optional[Iterable[str]]) -> Iterator[Tuple[str, StreamConfig]]:
        if streams is None:
            self._logger.debug("Selecting all stream configs.")
            yield from self._entries.items()
            return

        if isinstance(streams, str):
            streams = [streams]
        streams = list(streams)
        self._logger.debug(
            "Selecting stream configs for target streams: %s", " ".join(streams)
        )
        for stream in streams:
            entry = self.find(stream)
            if entry is None:
                self._logger.warning(
                    "Stream '%s' does not match any `stream` in stream config", stream
                )
                continue
            yield stream, entry

    def get(
        self,
        streams: Optional[Iterable[str]] = None,
        constraints: Optional[Mapping] = None,
    ) -> Dict[str, Dict[str, Any]]:
        """
        Consulta stream configs por nome e por constraints de settings.

        Args:
            streams (Optional[Iterable[str]]): Nomes de streams alvo. Se None,
                todas as entradas são consideradas.
            constraints (Optional[Mapping]): Se informado (e não vazio), apenas
                entradas cujos settings satisfazem as constraints são retornadas.

        Returns:
            Dict[str, Dict[str, Any]]: Nome resolvido → settings (com `topics`),
            na ordem de resolução.

        Raises:
            InvalidConstraintsError: Se `constraints` não for um mapping.
        """
        if constraints is not None and not isinstance(constraints, Mapping):
            raise InvalidConstraintsError(
                f"Constraints devem ser mapping, recebido: {type(constraints).__name__}"
            )

        result: Dict[str, Dict[str, Any]] = {}
        for stream, entry in self._select(streams):
            if not constraints or entry.matches_constraints(constraints):
                result[stream] = entry.to_settings(stream)
        return result
