"""Scope-aware variable resolution at a cursor position.

Bindings are returned in tier order: parameters of the enclosing function,
then its locals and loop variables declared above the cursor, then every
top-level variable of the buffer. Names are not deduplicated across tiers.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from velang_assist.models.scope import ScopeKind, VariableBinding
from velang_assist.parse.braces import block_extent
from velang_assist.parse.heads import (
    IDENTIFIER,
    EnumHead,
    FunctionHead,
    LoopHead,
    StructHead,
    VariableHead,
    classify,
    match_function_head,
)
from velang_assist.parse.inference import UNRESOLVED_TYPE, infer_type
from velang_assist.utils import split_lines

if TYPE_CHECKING:
    from collections.abc import Sequence

    from velang_assist.models.symbols import Position

log = structlog.get_logger()

LOOP_VARIABLE_TYPE = "iterator"
PREVIEW_LIMIT = 50

_TYPED_PARAMETER = re.compile(rf"^(?P<name>{IDENTIFIER})\s*:\s*(?P<type>\S.*)$")


def preview_value(value: str | None, limit: int = PREVIEW_LIMIT) -> str | None:
    """Truncate an initializer for display, ending cut text with ``...``."""
    if value is None:
        return None
    if len(value) > limit:
        return value[: limit - 3] + "..."
    return value


def _variable_binding(head: VariableHead, *, is_global: bool) -> VariableBinding:
    if head.annotation:
        var_type = head.annotation
    elif head.initializer is not None:
        var_type = infer_type(head.initializer)
    else:
        var_type = UNRESOLVED_TYPE

    scope_kind: ScopeKind
    if is_global:
        scope_kind = "global_foreign_variable" if head.is_foreign else "global_variable"
    else:
        scope_kind = "local_foreign_variable" if head.is_foreign else "local_variable"

    return VariableBinding(
        name=head.name,
        type=var_type,
        scope_kind=scope_kind,
        value_preview=preview_value(head.initializer),
    )


def _enclosing_function(
    lines: Sequence[str], cursor_line: int
) -> tuple[int, FunctionHead] | None:
    for index in range(cursor_line, -1, -1):
        head = match_function_head(lines[index].strip())
        if head is not None:
            return index, head
    return None


def _parameter_bindings(head: FunctionHead) -> list[VariableBinding]:
    bindings: list[VariableBinding] = []
    if not head.raw_parameters:
        return bindings
    for param in head.raw_parameters.split(","):
        match = _TYPED_PARAMETER.match(param.strip())
        # Untyped parameters are dropped.
        if match is None:
            continue
        bindings.append(
            VariableBinding(
                name=match["name"],
                type=match["type"].strip(),
                scope_kind="parameter",
            )
        )
    return bindings


def _local_bindings(
    lines: Sequence[str], function_line: int, stop_line: int
) -> list[VariableBinding]:
    bindings: list[VariableBinding] = []
    for index in range(function_line + 1, stop_line):
        head = classify(lines[index].strip())
        if isinstance(head, VariableHead):
            bindings.append(_variable_binding(head, is_global=False))
        elif isinstance(head, LoopHead):
            bindings.append(
                VariableBinding(
                    name=head.name,
                    type=LOOP_VARIABLE_TYPE,
                    scope_kind="loop_variable",
                )
            )
    return bindings


def global_bindings(lines: Sequence[str]) -> list[VariableBinding]:
    """Top-level variables; declaration bodies are skipped wholesale."""
    bindings: list[VariableBinding] = []
    index = 0
    while index < len(lines):
        head = classify(lines[index].strip())
        if isinstance(head, FunctionHead | StructHead | EnumHead):
            index = block_extent(lines, index).line + 1
            continue
        if isinstance(head, VariableHead):
            bindings.append(_variable_binding(head, is_global=True))
        index += 1
    return bindings


def resolve_scope(text: str, cursor: Position) -> list[VariableBinding]:
    """Return the variable bindings visible at ``cursor``.

    The current function is the nearest function head at or above the cursor
    line, even when its block has already closed. Locals are collected from
    lines strictly between the function head and
    ``min(cursor.line, block end line)``, so nothing declared on or after the
    cursor line, or after the closing brace, is visible.
    """
    lines = split_lines(text)
    cursor_line = min(max(cursor.line, 0), len(lines) - 1)
    bindings: list[VariableBinding] = []

    found = _enclosing_function(lines, cursor_line)
    if found is not None:
        function_line, head = found
        end = block_extent(lines, function_line)
        if cursor_line > end.line:
            log.debug("scope.past_function", function=head.name, line=cursor_line)
        bindings.extend(_parameter_bindings(head))
        bindings.extend(
            _local_bindings(lines, function_line, min(cursor_line, end.line))
        )

    bindings.extend(global_bindings(lines))
    return bindings


__all__ = [
    "LOOP_VARIABLE_TYPE",
    "PREVIEW_LIMIT",
    "global_bindings",
    "preview_value",
    "resolve_scope",
]
