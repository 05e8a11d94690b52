"""Completion context classification and candidate assembly."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from velang_assist.catalog.modules import list_modules, standard_module_functions
from velang_assist.complete.candidates import (
    IMPORT_KEYWORD,
    entry_point_candidate,
    function_candidates,
    import_keyword_candidate,
    import_line_candidates,
    keyword_candidates,
    quoted_module_candidates,
    snippet_keyword_candidates,
    variable_candidates,
)
from velang_assist.models.completion import CompletionCandidate, CompletionContext
from velang_assist.models.symbols import Position, Range
from velang_assist.parse.scope import resolve_scope
from velang_assist.parse.signatures import extract_imports, extract_signatures
from velang_assist.utils import SOURCE_SUFFIX, split_lines

if TYPE_CHECKING:
    from pathlib import Path

    from velang_assist.config import AssistConfig
    from velang_assist.models.modules import ModuleDescriptor
    from velang_assist.parse.signatures import FunctionSignature

log = structlog.get_logger()

_IMPORT_WORD = re.compile(rf"\b{IMPORT_KEYWORD}\b")
_IMPORT_KEYWORD_TAIL = re.compile(rf"\b{IMPORT_KEYWORD}\s*$")
_FUNCTION_KEYWORD_TAIL = re.compile(r"(?:^|\W)fn\s+$")
_WORD_CHAR = re.compile(r"[A-Za-z0-9_]")


@dataclass(frozen=True)
class CompletionEnvironment:
    """Host-owned locations that completion may read modules from."""

    library_root: Path | None = None
    workspace_root: Path | None = None
    current_file: Path | None = None
    suffix: str = SOURCE_SUFFIX
    exclude_patterns: tuple[str, ...] = ()
    nested_gitignore: bool = False

    @classmethod
    def from_config(
        cls,
        config: AssistConfig,
        *,
        workspace_root: Path | None = None,
        current_file: Path | None = None,
    ) -> CompletionEnvironment:
        return cls(
            library_root=config.library_root(),
            workspace_root=workspace_root,
            current_file=current_file,
            suffix=config.source_suffix,
            exclude_patterns=tuple(config.exclude),
            nested_gitignore=config.nested_gitignore,
        )


def word_at(line: str, column: int) -> str | None:
    """The identifier touching ``column``, or None when there is none."""
    column = min(max(column, 0), len(line))
    start = column
    while start > 0 and _WORD_CHAR.match(line[start - 1]):
        start -= 1
    end = column
    while end < len(line) and _WORD_CHAR.match(line[end]):
        end += 1
    if start == end:
        return None
    return line[start:end]


def _buffer_functions(text: str, env: CompletionEnvironment) -> list[FunctionSignature]:
    """Functions declared in the buffer, then those of imported std modules."""
    functions = extract_signatures(text)
    for module in extract_imports(text):
        functions.extend(standard_module_functions(env.library_root, module, env.suffix))
    return functions


def _available_modules(env: CompletionEnvironment) -> list[ModuleDescriptor]:
    return list_modules(
        env.library_root,
        env.workspace_root,
        env.current_file,
        suffix=env.suffix,
        exclude_patterns=list(env.exclude_patterns),
        nested_gitignore=env.nested_gitignore,
    )


def _import_path_context(
    before: str, line: str, cursor: Position, env: CompletionEnvironment
) -> CompletionContext:
    modules = _available_modules(env)
    inside_quotes = '"' in before and not before.endswith('"')
    if not inside_quotes:
        return CompletionContext(
            kind="import_path",
            candidates=quoted_module_candidates(modules),
        )

    partial = before[before.rindex('"') + 1 :]
    line_range = Range(
        start=Position(line=cursor.line, column=0),
        end=Position(line=cursor.line, column=len(line)),
    )
    return CompletionContext(
        kind="import_path",
        prefix=partial,
        candidates=import_line_candidates(modules, partial, line_range),
    )


def _identifier_candidates(
    text: str, cursor: Position, prefix: str | None, env: CompletionEnvironment
) -> list[CompletionCandidate]:
    candidates = snippet_keyword_candidates(prefix)
    candidates.extend(function_candidates(_buffer_functions(text, env), prefix))
    candidates.extend(variable_candidates(resolve_scope(text, cursor), prefix))
    candidates.extend(keyword_candidates())
    return candidates


def classify_context(
    text: str,
    cursor: Position,
    text_before_cursor: str | None = None,
    *,
    environment: CompletionEnvironment | None = None,
) -> CompletionContext:
    """Decide the completion mode at ``cursor`` and assemble its candidates.

    Modes are tried in order: import path (an ``import`` with an open quote
    or trailing space), import keyword, ``fn`` keyword, identifier prefix
    (a word touches the cursor) and empty context. The last two also carry
    the fixed keyword set.

    Args:
        text: Full buffer text
        cursor: 0-based cursor position
        text_before_cursor: Text of the cursor line up to the cursor; derived
            from ``text`` when omitted
        environment: Library and workspace locations for module lookups

    Returns:
        The context with its unsorted candidates; callers order by sort_key.
    """
    env = environment or CompletionEnvironment()
    lines = split_lines(text)
    line = lines[cursor.line] if 0 <= cursor.line < len(lines) else ""
    before = line[: cursor.column] if text_before_cursor is None else text_before_cursor

    if _IMPORT_WORD.search(before) and ('"' in before or before.endswith(" ")):
        context = _import_path_context(before, line, cursor, env)
    elif _IMPORT_KEYWORD_TAIL.search(before):
        context = CompletionContext(
            kind="import_keyword", candidates=[import_keyword_candidate()]
        )
    elif _FUNCTION_KEYWORD_TAIL.search(before):
        context = CompletionContext(
            kind="function_keyword", candidates=[entry_point_candidate()]
        )
    else:
        prefix = word_at(line, cursor.column)
        context = CompletionContext(
            kind="identifier_prefix" if prefix is not None else "empty_context",
            prefix=prefix,
            candidates=_identifier_candidates(text, cursor, prefix, env),
        )

    log.debug(
        "completion.classified",
        kind=context.kind,
        candidates=len(context.candidates),
    )
    return context


def completion_candidates(
    text: str,
    cursor: Position,
    text_before_cursor: str | None = None,
    *,
    environment: CompletionEnvironment | None = None,
) -> list[CompletionCandidate]:
    """Candidates for the completion popup at ``cursor``, unsorted."""
    return classify_context(
        text, cursor, text_before_cursor, environment=environment
    ).candidates


__all__ = [
    "CompletionEnvironment",
    "classify_context",
    "completion_candidates",
    "word_at",
]
