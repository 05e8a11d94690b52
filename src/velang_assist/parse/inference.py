"""Literal-based type inference for unannotated variables."""

from __future__ import annotations

import re

INTEGER_TYPE = "i32"
FLOAT_TYPE = "f64"
BOOLEAN_TYPE = "bool"
STRING_TYPE = "string"
NULL_TYPE = "null"
UNRESOLVED_TYPE = "auto"

_INTEGER = re.compile(r"^\d+$")
_FLOAT = re.compile(r"^\d+\.\d+$")
_STRING_QUOTES = ('"', "'", "`")


def _is_quoted(value: str) -> bool:
    return any(
        len(value) >= 2 and value.startswith(quote) and value.endswith(quote)
        for quote in _STRING_QUOTES
    )


def infer_type(value: str) -> str:
    """Classify an initializer into a primitive type name.

    Rules are checked in order and the first match wins. A single-character
    literal such as ``'x'`` is a string because the quote rule comes first.
    Anything else resolves to ``auto``; this function never raises.

    Examples:
        >>> infer_type("42")
        'i32'
        >>> infer_type("3.14")
        'f64'
        >>> infer_type("x + y")
        'auto'
    """
    value = value.strip()

    if _INTEGER.match(value):
        return INTEGER_TYPE
    if _FLOAT.match(value):
        return FLOAT_TYPE
    if value in ("true", "false"):
        return BOOLEAN_TYPE
    if _is_quoted(value):
        return STRING_TYPE
    if value == "null":
        return NULL_TYPE
    return UNRESOLVED_TYPE


__all__ = [
    "BOOLEAN_TYPE",
    "FLOAT_TYPE",
    "INTEGER_TYPE",
    "NULL_TYPE",
    "STRING_TYPE",
    "UNRESOLVED_TYPE",
    "infer_type",
]
