"""Editor-assist analysis core for the VeLang language.

The query surface consumed by editor hosts: each function re-analyzes the
buffer it is given and returns fresh pydantic models.
"""

from velang_assist.catalog.modules import list_modules
from velang_assist.complete.context import (
    CompletionEnvironment,
    classify_context,
    completion_candidates,
)
from velang_assist.parse.inference import infer_type
from velang_assist.parse.outline import build_outline, find_entry_points
from velang_assist.parse.scope import resolve_scope

__all__ = [
    "CompletionEnvironment",
    "build_outline",
    "classify_context",
    "completion_candidates",
    "find_entry_points",
    "infer_type",
    "list_modules",
    "resolve_scope",
]
