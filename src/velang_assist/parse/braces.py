"""Brace block matching shared by the outline and scope passes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from velang_assist.models.symbols import Position

if TYPE_CHECKING:
    from collections.abc import Sequence


def find_block_end(lines: Sequence[str], start_line: int) -> Position:
    """Return the position of the brace closing the block opened at ``start_line``.

    Characters are scanned in reading order from the start of ``start_line``;
    ``{`` increments a depth counter and ``}`` decrements it. The first ``}``
    that brings the depth back to zero after at least one ``{`` was seen is
    the match.

    Braces inside string and comment literals are counted like any other, so
    an unbalanced brace in a literal shifts every later block boundary.

    Returns:
        The ``}`` position, or ``Position(start_line, 0)`` unchanged when the
        block is unterminated.
    """
    depth = 0
    opened = False
    for line_index in range(start_line, len(lines)):
        for column, char in enumerate(lines[line_index]):
            if char == "{":
                depth += 1
                opened = True
            elif char == "}":
                depth -= 1
                if opened and depth == 0:
                    return Position(line=line_index, column=column)
    return Position(line=start_line, column=0)


def is_unterminated(end: Position, start_line: int) -> bool:
    # A real match is always preceded by a "{", so it can never sit at
    # column 0 of the start line.
    return end.line == start_line and end.column == 0


def block_extent(lines: Sequence[str], start_line: int) -> Position:
    """Like :func:`find_block_end`, but unterminated blocks run to buffer end."""
    end = find_block_end(lines, start_line)
    if is_unterminated(end, start_line) and lines:
        last = len(lines) - 1
        return Position(line=last, column=max(len(lines[last]) - 1, 0))
    return end


__all__ = ["block_extent", "find_block_end", "is_unterminated"]
