"""Variable binding models produced by scope resolution."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ScopeKind = Literal[
    "parameter",
    "local_variable",
    "local_foreign_variable",
    "loop_variable",
    "global_variable",
    "global_foreign_variable",
]

FOREIGN_SCOPE_KINDS: frozenset[ScopeKind] = frozenset(
    {"local_foreign_variable", "global_foreign_variable"}
)


class VariableBinding(BaseModel):
    """A name visible at a cursor position."""

    name: str
    type: str
    scope_kind: ScopeKind
    value_preview: str | None = Field(
        default=None, description="Initializer text, truncated for display"
    )

    @property
    def is_foreign(self) -> bool:
        return self.scope_kind in FOREIGN_SCOPE_KINDS


__all__ = ["FOREIGN_SCOPE_KINDS", "ScopeKind", "VariableBinding"]
