# src/event_stream_config/core/config/hashing.py
"""
Fingerprint canônico de configuração de streams.

Este módulo gera um hash determinístico da configuração de streams
(`EventStreams` + `EventStreamsDefaultSettings`), utilizado pelo factory
para decidir se um registry já construído ainda corresponde à
configuração atual ou se um novo registry deve ser construído.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Chaves de mappings convertidas para string antes da ordenação,
      já que `EventStreams` pode misturar chaves ordinais e nomes
    - Tuplas são tratadas como listas
    - Escalares sem representação JSON (ex.: `datetime.date` vindo do
      YAML) entram no hash pela sua `repr`
    - Algoritmo SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres

Limites explícitos:
    - Não carrega nem valida configuração
    - Não persiste o hash
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def _canonicalize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _canonicalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonicalize(item) for item in value]
    return value


def compute_config_hash(config: Mapping) -> str:
    """
    Gera um hash SHA-256 determinístico de uma configuração de streams.

    Args:
        config (Mapping): Configuração a ser identificada.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um mapping.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser mapping, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _canonicalize(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=repr,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
