"""Argument classification and printf-style substitution for logged output.

Substitution follows the browser console conventions: ``%s``, ``%i``, ``%d``
and ``%O`` each consume the next argument of the log call.
"""

import collections.abc
import numbers
from enum import Enum
from typing import Any, List, Sequence, Tuple

DIRECTIVES = frozenset("sidO")


class _Undefined:
    """Marker for an argument that carries no value at all (distinct from None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


class ValueKind(Enum):
    """Closed classification of logged values."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    ARRAY = "array"
    OBJECT = "object"


def classify(value: Any) -> ValueKind:
    """Classify a value. Order matters: bool is a Number and str is a Sequence."""
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, numbers.Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (collections.abc.Sequence, collections.abc.Set)):
        return ValueKind.ARRAY
    return ValueKind.OBJECT


def stringify(value: Any) -> str:
    """str() of a value, or the generic object repr when its __str__ fails."""
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def render_token(value: Any) -> str:
    """String form of a primitive token."""
    kind = classify(value)
    if kind is ValueKind.UNDEFINED:
        return "undefined"
    if kind is ValueKind.NULL:
        return "null"
    return stringify(value)


def substitute(template: str, args: Sequence[Any], index: int) -> Tuple[str, int]:
    """
    Expand substitution directives in a logged string.

    Args:
        template: The string argument being formatted
        args: All arguments of the log call
        index: Position of template within args

    Returns:
        Tuple of (substituted string, index of the last argument consumed)
    """
    buf: List[str] = []
    j = 0
    length = len(template)
    while j < length:
        ch = template[j]
        if ch == "%" and j + 1 < length and template[j + 1] in DIRECTIVES:
            index += 1
            replacement = args[index] if index < len(args) else UNDEFINED
            if replacement is not UNDEFINED and replacement is not None:
                buf.append(stringify(replacement))
            j += 2
        else:
            buf.append(ch)
            j += 1

    return "".join(buf), index


def join_tokens(tokens: Sequence[Any]) -> str:
    return " ".join(render_token(token) for token in tokens)
