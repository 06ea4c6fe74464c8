# src/event_stream_config/core/streams/matching.py
"""
Algoritmos de matching de streams e de settings.

Este módulo concentra as regras de comparação usadas pelo `StreamConfig`:

    - reconhecimento e compilação de padrões de stream delimitados
      (ex.: `/^mediawiki\\.job\\..+/` ou `/^foo/i`)
    - reescrita de padrões com prefixos de tópico
    - coerção de valores escalares para string
    - matching parcial e recursivo de settings contra constraints

Padrões de stream:
    Um stream key é considerado padrão quando começa com o delimitador
    `/`, possui um delimitador de fechamento e o corpo compila como regex.
    O corpo termina no primeiro `/` não escapado; tudo o que vem depois
    são modificadores (`/^foo/bar/` é inválido, `/^foo\\/bar/` não).

    Modificadores aceitos: `i`, `m`, `s`, `x`, `u` e `A` (ancorado no
    início do nome). `D` e `U` não têm equivalente em `re` e, como
    qualquer outro modificador, invalidam o padrão.

Coerção de escalares:
    Valores são comparados pela sua representação em string, com
    `True` → "1", `False`/`None` → "" e floats integrais sem parte
    fracionária (`1.0` → "1"). Assim a constraint "1" (vinda de uma
    query string) casa com o setting booleano `True`.

Invariantes:
    - Nenhuma função deste módulo muta seus argumentos
    - Falhas de compilação são expostas como `re.error`, nunca suprimidas
      de forma ampla
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Iterable, Pattern, Tuple

PATTERN_DELIMITER = "/"

DEFAULT_MAX_DEPTH = 10

_MODIFIER_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
    "A": 0,
}

ANCHORED_MODIFIER = "A"

# caracteres escapados em literais inseridos em padrões (inclui o delimitador)
_LITERAL_SPECIALS = frozenset(".\\+*?[^]$(){}=!<>|:-#" + PATTERN_DELIMITER)


# ---------------------------------------------------------------------------
# Padrões delimitados
# ---------------------------------------------------------------------------

def _split_delimited(text: str) -> Tuple[str, str]:
    """Separa um padrão delimitado em (corpo, modificadores)."""
    if not text.startswith(PATTERN_DELIMITER):
        raise re.error(f"padrão sem delimitador inicial: {text!r}")

    index = 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == PATTERN_DELIMITER:
            return text[1:index], text[index + 1:]
        index += 1

    raise re.error(f"padrão sem delimitador final: {text!r}")


def compile_stream_pattern(text: str) -> Pattern[str]:
    """
    Compila um padrão de stream delimitado.

    Raises:
        re.error: Se o texto não for um padrão delimitado válido.
    """
    body, modifiers = _split_delimited(text)

    flags = 0
    for modifier in modifiers:
        if modifier not in _MODIFIER_FLAGS:
            raise re.error(f"modificador desconhecido {modifier!r} em {text!r}")
        flags |= _MODIFIER_FLAGS[modifier]

    if ANCHORED_MODIFIER in modifiers:
        # em modo verbose um comentário no fim do corpo engoliria o `)`
        closing = "\n)" if "x" in modifiers else ")"
        body = rf"\A(?:{body}" + closing

    return re.compile(body, flags)


def looks_like_pattern(text: Any) -> bool:
    return isinstance(text, str) and text.startswith(PATTERN_DELIMITER)


def is_valid_pattern(text: Any) -> bool:
    """True se `text` começa com o delimitador e compila como regex."""
    if not looks_like_pattern(text):
        return False
    try:
        compile_stream_pattern(text)
    except re.error:
        return False
    return True


def quote_literal(text: str) -> str:
    """Escapa `text` para uso literal dentro de um padrão delimitado."""
    quoted = []
    for char in text:
        if char == "\0":
            quoted.append("\\x00")
        elif char in _LITERAL_SPECIALS:
            quoted.append("\\" + char)
        else:
            quoted.append(char)
    return "".join(quoted)


def prefix_pattern(pattern: str, prefixes: Iterable[str]) -> str:
    """
    Reescreve um padrão delimitado para casar apenas nomes prefixados.

    A alternância dos prefixos (escapados) é inserida logo após o
    delimitador inicial e após a âncora `^`, quando existir:

        prefix_pattern("/^mediawiki\\.job\\..+/", ["eqiad.", "codfw."])
        == "/^(eqiad\\.|codfw\\.)mediawiki\\.job\\..+/"
    """
    body, modifiers = _split_delimited(pattern)

    anchor = "^" if body.startswith("^") else ""
    alternation = "|".join(quote_literal(prefix) for prefix in prefixes)

    return (
        f"{PATTERN_DELIMITER}{anchor}({alternation}){body[len(anchor):]}"
        f"{PATTERN_DELIMITER}{modifiers}"
    )


# ---------------------------------------------------------------------------
# Coerção e matching parcial
# ---------------------------------------------------------------------------

def stringify(value: Any) -> str:
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return "NAN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def is_list_like(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping_like(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_container(value: Any) -> bool:
    return is_list_like(value) or is_mapping_like(value)


def _as_mapping(value: Any) -> Mapping:
    if is_list_like(value):
        return dict(enumerate(value))
    return value


def _list_contains(haystack: Iterable[Any], needle: Any) -> bool:
    if _is_container(needle):
        return any(item == needle for item in haystack)

    wanted = stringify(needle)
    return any(
        not _is_container(item) and stringify(item) == wanted
        for item in haystack
    )


def is_partial_match(
    actual: Mapping,
    expected: Mapping,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bool:
    """
    Verifica se `actual` contém (recursivamente) tudo o que está em `expected`.

    Regras por chave de `expected`:
        - a chave deve existir em `actual`
        - lista + lista → todo elemento esperado deve estar presente na
          lista real (contenção, independente de ordem)
        - mapping + mapping → recursão com `max_depth - 1`
        - lista + mapping → a lista é vista como mapping indexado por posição
        - container + escalar → não casa
        - escalar + escalar → comparação por `stringify`

    Quando a profundidade se esgota, o resultado é `True`: constraints
    aninhadas além do limite não restringem o resultado.

    Args:
        actual (Mapping): Settings reais do stream.
        expected (Mapping): Constraints esperadas.
        max_depth (int): Profundidade máxima de recursão.

    Returns:
        bool: True se todas as constraints forem satisfeitas.
    """
    if max_depth <= 0:
        return True

    for key, expected_value in expected.items():
        if key not in actual:
            return False

        actual_value = actual[key]

        if is_list_like(actual_value) and is_list_like(expected_value):
            if not all(_list_contains(actual_value, item) for item in expected_value):
                return False

        elif _is_container(actual_value) and _is_container(expected_value):
            if not is_partial_match(
                _as_mapping(actual_value), _as_mapping(expected_value), max_depth - 1
            ):
                return False

        elif _is_container(actual_value) or _is_container(expected_value):
            return False

        elif stringify(actual_value) != stringify(expected_value):
            return False

    return True
