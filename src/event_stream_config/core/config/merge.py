# src/event_stream_config/core/config/merge.py
"""
Utilitário canônico de deep-merge de settings.

Este módulo implementa a política de deep-merge utilizada para combinar
os settings default de streams com os settings específicos de cada
entrada, e também para aplicar overrides locais sobre o arquivo
principal de configuração.

Política de merge:
    - mapping + mapping → merge recursivo por chave
    - qualquer outro caso → o valor do override vence (inclusive `None`)

Diferente de um merge estritamente tipado, aqui não existe conflito de
tipos: uma entrada de stream pode substituir um mapping default por um
escalar, ou anular um default com `None` (ex.: `topic_prefixes: null`).

Invariantes:
    - Nenhum input é mutado
    - A ordem das chaves da base é preservada; chaves novas vão ao final
    - A mesma entrada sempre produz a mesma saída

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida semântica de domínio
"""

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Dict


def deep_merge(base: Mapping, override: Mapping) -> Dict[Any, Any]:
    """
    Realiza um deep-merge determinístico entre dois mapeamentos.

    Para cada chave do override: se ambos os lados possuem mappings,
    o merge é recursivo; caso contrário, o valor do override substitui
    o valor da base.

    Args:
        base (Mapping): Settings base (ex.: defaults).
        override (Mapping): Settings com precedência (ex.: entrada do stream).

    Returns:
        Dict[Any, Any]: Novo dicionário resultante do merge.

    Raises:
        TypeError: Se `base` ou `override` não forem mappings.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise TypeError(
            f"Deep-merge requer mappings, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[Any, Any] = {key: deepcopy(value) for key, value in base.items()}

    for key, override_value in override.items():
        base_value = result.get(key)

        if isinstance(base_value, Mapping) and isinstance(override_value, Mapping):
            result[key] = deep_merge(base_value, override_value)
            continue

        result[key] = deepcopy(override_value)

    return result
