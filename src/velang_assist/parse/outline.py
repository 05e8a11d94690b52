"""Outline extraction: the declaration tree of a VeLang buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from velang_assist.models.symbols import Position, Range, Symbol
from velang_assist.parse.braces import block_extent
from velang_assist.parse.heads import (
    EnumHead,
    FunctionHead,
    StructHead,
    VariableHead,
    classify,
    match_enum_variant,
    match_field,
    match_variable_head,
)
from velang_assist.utils import split_lines

if TYPE_CHECKING:
    from collections.abc import Sequence

    from velang_assist.models.symbols import SymbolKind

log = structlog.get_logger()

ENTRY_POINT_NAME = "main"


def _line_ranges(lines: Sequence[str], index: int) -> tuple[Range, Range]:
    """Declaration and selection ranges of a single-line declaration."""
    raw = lines[index]
    indent = len(raw) - len(raw.lstrip())
    end = Position(line=index, column=len(raw.rstrip()))
    return (
        Range(start=Position(line=index, column=0), end=end),
        Range(start=Position(line=index, column=indent), end=end),
    )


def _line_symbol(
    lines: Sequence[str], index: int, kind: SymbolKind, name: str, detail: str
) -> Symbol:
    declaration, selection = _line_ranges(lines, index)
    return Symbol(
        kind=kind,
        name=name,
        detail=detail,
        range=declaration,
        selection_range=selection,
    )


def _block_symbol(
    lines: Sequence[str],
    index: int,
    end: Position,
    kind: SymbolKind,
    name: str,
    detail: str,
) -> Symbol:
    """Symbol spanning from its head line to the closing brace (inclusive)."""
    head_range, selection = _line_ranges(lines, index)
    closing = Position(
        line=end.line,
        column=min(end.column + 1, len(lines[end.line])),
    )
    if closing.key() < head_range.end.key():
        closing = head_range.end
    return Symbol(
        kind=kind,
        name=name,
        detail=detail,
        range=Range(start=head_range.start, end=closing),
        selection_range=selection,
    )


def _function_locals(lines: Sequence[str], start: int, end: int) -> list[Symbol]:
    children: list[Symbol] = []
    for index in range(start + 1, end):
        head = match_variable_head(lines[index].strip())
        if head is None or head.annotation is None:
            continue
        detail = "Local FFI variable" if head.is_foreign else "Local variable"
        children.append(_line_symbol(lines, index, "variable", head.name, detail))
    return children


def _struct_fields(lines: Sequence[str], start: int, end: int) -> list[Symbol]:
    children: list[Symbol] = []
    for index in range(start + 1, end):
        field = match_field(lines[index].strip())
        if field is not None:
            children.append(
                _line_symbol(lines, index, "field", field.name, f"Field ({field.type})")
            )
    return children


def _enum_variants(lines: Sequence[str], start: int, end: int) -> list[Symbol]:
    children: list[Symbol] = []
    for index in range(start + 1, end):
        variant = match_enum_variant(lines[index].strip())
        if variant is not None:
            children.append(
                _line_symbol(lines, index, "enum_variant", variant.name, "Enum variant")
            )
    return children


def build_outline(text: str) -> list[Symbol]:
    """Build the top-level declaration tree of a buffer.

    Functions carry their annotated local variables as children, structs
    their fields and enums their variants. After a block declaration the scan
    resumes on the line after its closing brace, so nothing inside a body is
    reported as a top-level symbol.

    Returns:
        Top-level symbols in source order. Malformed input yields a partial
        (possibly empty) list, never an error.
    """
    lines = split_lines(text)
    symbols: list[Symbol] = []

    index = 0
    while index < len(lines):
        head = classify(lines[index].strip())

        if isinstance(head, FunctionHead | StructHead | EnumHead):
            end = block_extent(lines, index)
            if isinstance(head, FunctionHead):
                detail = "Main function" if head.name == ENTRY_POINT_NAME else "Function"
                symbol = _block_symbol(lines, index, end, "function", head.name, detail)
                symbol.children = _function_locals(lines, index, end.line)
            elif isinstance(head, StructHead):
                symbol = _block_symbol(lines, index, end, "struct", head.name, "Struct")
                symbol.children = _struct_fields(lines, index, end.line)
            else:
                symbol = _block_symbol(lines, index, end, "enum", head.name, "Enum")
                symbol.children = _enum_variants(lines, index, end.line)
            symbols.append(symbol)
            index = end.line + 1
            continue

        if isinstance(head, VariableHead):
            detail = "FFI Variable" if head.is_foreign else "Variable"
            symbols.append(_line_symbol(lines, index, "variable", head.name, detail))

        index += 1

    log.debug("outline.built", lines=len(lines), symbols=len(symbols))
    return symbols


def find_entry_points(text: str) -> list[int]:
    """Lines declaring ``fn main``, where a host offers a "run" action."""
    return [
        symbol.range.start.line
        for symbol in build_outline(text)
        if symbol.kind == "function" and symbol.name == ENTRY_POINT_NAME
    ]


__all__ = ["ENTRY_POINT_NAME", "build_outline", "find_entry_points"]
