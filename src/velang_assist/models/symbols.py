"""Outline symbol models.

This module contains models for representing the declarations of a VeLang
buffer (functions, structs, enums, variables) and their nested members.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SymbolKind = Literal["function", "struct", "enum", "variable", "field", "enum_variant"]


class Position(BaseModel):
    """A 0-based line/column position in a buffer."""

    line: int
    column: int

    def key(self) -> tuple[int, int]:
        return (self.line, self.column)


class Range(BaseModel):
    """A half-open span between two positions."""

    start: Position
    end: Position

    def contains(self, other: Range) -> bool:
        """Return True when ``other`` lies entirely inside this range."""
        return (
            self.start.key() <= other.start.key()
            and other.end.key() <= self.end.key()
        )


class Symbol(BaseModel):
    """A declaration found in a VeLang buffer."""

    kind: SymbolKind
    name: str
    detail: str = ""
    range: Range
    selection_range: Range
    children: list[Symbol] = Field(default_factory=list)


__all__ = ["Position", "Range", "Symbol", "SymbolKind"]
