"""Builders for completion candidates of each family."""

from __future__ import annotations

from typing import TYPE_CHECKING

from velang_assist.catalog.modules import STD_PREFIX
from velang_assist.models.completion import CompletionCandidate, sort_key_for

if TYPE_CHECKING:
    from collections.abc import Iterable

    from velang_assist.models.modules import ModuleDescriptor
    from velang_assist.models.scope import VariableBinding
    from velang_assist.models.symbols import Range
    from velang_assist.parse.signatures import FunctionSignature

KEYWORDS: tuple[str, ...] = (
    "fn",
    "let",
    "var",
    "if",
    "else",
    "return",
    "safe",
    "rawptr",
    "defer",
    "as",
    "while",
    "for",
    "import",
    "from",
    "export",
    "struct",
    "enum",
    "match",
    "true",
    "false",
    "foreign",
    "in",
)

IMPORT_KEYWORD = "import"
FUNCTION_KEYWORD = "fn"
FUNCTION_SNIPPET = "fn ${1:function_name}(${2:parameters}) {\n\t$0\n}"
ENTRY_POINT_SNIPPET = "${1:main}() {\n\t$0\n}"


def _matches(label: str, prefix: str | None) -> bool:
    """Prefix filter; an exact match is not worth offering."""
    if prefix is None:
        return True
    return label.startswith(prefix) and label != prefix


def import_keyword_candidate() -> CompletionCandidate:
    return CompletionCandidate(
        label=IMPORT_KEYWORD,
        kind="keyword",
        insertion_template=IMPORT_KEYWORD,
        detail="Import statement",
        documentation="Import a module",
        sort_key=sort_key_for("keyword", IMPORT_KEYWORD),
    )


def function_keyword_candidate() -> CompletionCandidate:
    return CompletionCandidate(
        label=FUNCTION_KEYWORD,
        kind="keyword",
        insertion_template=FUNCTION_SNIPPET,
        detail="Function declaration",
        documentation="Create a new function",
        sort_key=sort_key_for("keyword", FUNCTION_KEYWORD),
        is_snippet=True,
    )


def entry_point_candidate() -> CompletionCandidate:
    """Skeleton offered right after ``fn ``: a named ``main`` with a body slot."""
    return CompletionCandidate(
        label="main",
        kind="function",
        insertion_template=ENTRY_POINT_SNIPPET,
        detail="Main function",
        documentation="Creates the main entry point function",
        sort_key=sort_key_for("function", "main"),
        is_snippet=True,
    )


def snippet_keyword_candidates(prefix: str | None) -> list[CompletionCandidate]:
    candidates: list[CompletionCandidate] = []
    if _matches(IMPORT_KEYWORD, prefix):
        candidates.append(import_keyword_candidate())
    if _matches(FUNCTION_KEYWORD, prefix):
        candidates.append(function_keyword_candidate())
    return candidates


def function_candidates(
    signatures: Iterable[FunctionSignature], prefix: str | None
) -> list[CompletionCandidate]:
    return [
        CompletionCandidate(
            label=signature.name,
            kind="function",
            insertion_template=signature.snippet(),
            detail=signature.detail,
            documentation=f"Call {signature.name} function",
            sort_key=sort_key_for("function", signature.name),
            is_snippet=True,
        )
        for signature in signatures
        if _matches(signature.name, prefix)
    ]


def variable_candidates(
    bindings: Iterable[VariableBinding], prefix: str | None
) -> list[CompletionCandidate]:
    candidates: list[CompletionCandidate] = []
    for binding in bindings:
        if not _matches(binding.name, prefix):
            continue
        keyword = "var" if binding.is_foreign else "let"
        candidates.append(
            CompletionCandidate(
                label=binding.name,
                kind="variable",
                insertion_template=binding.name,
                detail=f"{keyword} {binding.name}: {binding.type}",
                documentation=f"Variable of type {binding.type}",
                sort_key=sort_key_for("variable", binding.name),
            )
        )
    return candidates


def keyword_candidates() -> list[CompletionCandidate]:
    return [
        CompletionCandidate(
            label=keyword,
            kind="keyword",
            insertion_template=keyword,
            detail="Keyword",
            sort_key=sort_key_for("keyword", keyword),
        )
        for keyword in KEYWORDS
    ]


def import_line_candidates(
    modules: Iterable[ModuleDescriptor], partial: str, line_range: Range
) -> list[CompletionCandidate]:
    """Modules matching a partially typed path; each rewrites the whole line."""
    return [
        CompletionCandidate(
            label=module.name,
            kind="module",
            insertion_template=f'import "{module.name}";',
            detail="Library module",
            documentation=module.description,
            sort_key=sort_key_for("module", module.name),
            replace_range=line_range,
        )
        for module in modules
        if module.name.startswith(partial)
    ]


def quoted_module_candidates(
    modules: Iterable[ModuleDescriptor],
) -> list[CompletionCandidate]:
    return [
        CompletionCandidate(
            label=f'"{module.name}"',
            kind="module",
            insertion_template=f'"{module.name}"',
            detail=(
                "Standard library module"
                if module.name.startswith(STD_PREFIX)
                else "Local module"
            ),
            documentation=module.description,
            sort_key=sort_key_for("module", module.name),
            is_snippet=True,
        )
        for module in modules
    ]


__all__ = [
    "KEYWORDS",
    "entry_point_candidate",
    "function_candidates",
    "import_keyword_candidate",
    "import_line_candidates",
    "keyword_candidates",
    "quoted_module_candidates",
    "snippet_keyword_candidates",
    "variable_candidates",
]
