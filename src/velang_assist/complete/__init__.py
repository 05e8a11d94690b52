"""Context-sensitive completion."""

from velang_assist.complete.context import (
    CompletionEnvironment,
    classify_context,
    completion_candidates,
)

__all__ = ["CompletionEnvironment", "classify_context", "completion_candidates"]
