"""Completion candidate models.

Sort keys encode a priority tier as a leading digit followed by the label:
``0`` for keywords and modules, ``1`` for functions, ``2`` for variables.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from velang_assist.models.symbols import Range

CandidateKind = Literal["keyword", "function", "variable", "module"]

ContextKind = Literal[
    "import_path",
    "import_keyword",
    "function_keyword",
    "identifier_prefix",
    "empty_context",
]

SORT_TIERS: dict[CandidateKind, str] = {
    "keyword": "0",
    "module": "0",
    "function": "1",
    "variable": "2",
}


def sort_key_for(kind: CandidateKind, label: str) -> str:
    return f"{SORT_TIERS[kind]}{label}"


class CompletionCandidate(BaseModel):
    """A single entry of a completion popup."""

    label: str
    kind: CandidateKind
    insertion_template: str
    detail: str
    sort_key: str
    documentation: str | None = None
    is_snippet: bool = False
    replace_range: Range | None = Field(
        default=None,
        description="Span replaced on accept (whole line for import paths)",
    )


class CompletionContext(BaseModel):
    """The completion mode chosen for a cursor and its candidates."""

    kind: ContextKind
    prefix: str | None = None
    candidates: list[CompletionCandidate] = Field(default_factory=list)


__all__ = [
    "CandidateKind",
    "CompletionCandidate",
    "CompletionContext",
    "ContextKind",
    "SORT_TIERS",
    "sort_key_for",
]
