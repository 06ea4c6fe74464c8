# src/event_stream_config/core/streams/constraints.py
"""
Parsing de constraints de settings vindas de parâmetros de consulta.

Adapters (ex.: um endpoint HTTP) recebem constraints como pares
`chave=valor`, opcionalmente agrupados num único texto separado por `|`:

    constraints=destination_event_service=eventgate-main|sample[rate]=0.5

Este módulo converte esses pares no mapping (possivelmente aninhado)
esperado por `StreamConfigRegistry.get()`:

    {
        "destination_event_service": "eventgate-main",
        "sample": {"rate": "0.5"},
    }

Chaves com colchetes aninham (`foo[bar][baz]=x`) e `foo[]=x` acrescenta
a uma lista. Valores permanecem strings; a coerção para comparação é
responsabilidade do matching parcial.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Union

from ..config.errors import InvalidConstraintsError

MULTI_VALUE_SEPARATOR = "|"

_KEY_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


def _parse_key(raw_key: str) -> List[Optional[str]]:
    match = _KEY_RE.match(raw_key.strip())
    if match is None:
        raise InvalidConstraintsError(f"Chave de constraint inválida: {raw_key!r}")

    path: List[Optional[str]] = [match.group(1)]
    for segment in _SEGMENT_RE.findall(match.group(2)):
        path.append(segment or None)
    return path


def _assign(root: Dict[str, Any], path: List[Optional[str]], value: str) -> None:
    node: Any = root
    for index, segment in enumerate(path):
        is_last = index == len(path) - 1

        if segment is None:
            if is_last:
                node.append(value)
                return
            child: Any = [] if path[index + 1] is None else {}
            node.append(child)
            node = child
            continue

        if is_last:
            node[segment] = value
            return

        child_type = list if path[index + 1] is None else dict
        child = node.get(segment)
        if not isinstance(child, child_type):
            child = child_type()
            node[segment] = child
        node = child


def parse_constraints(
    values: Union[str, Iterable[str]],
    separator: str = "=",
) -> Dict[str, Any]:
    """
    Converte pares `chave=valor` em um mapping de constraints.

    Args:
        values: Lista de pares, ou um único texto com pares separados por `|`.
        separator (str): Separador entre chave e valor. Default: `=`.

    Returns:
        Dict[str, Any]: Constraints, possivelmente aninhadas.

    Raises:
        InvalidConstraintsError: Se algum item não for `chave<separador>valor`.
    """
    if isinstance(values, str):
        values = [item for item in values.split(MULTI_VALUE_SEPARATOR) if item]

    constraints: Dict[str, Any] = {}
    for item in values:
        if not isinstance(item, str) or separator not in item:
            raise InvalidConstraintsError(
                f"Constraint deve ter o formato chave{separator}valor, recebido: {item!r}"
            )
        raw_key, value = item.split(separator, 1)
        _assign(constraints, _parse_key(raw_key), value)

    return constraints
