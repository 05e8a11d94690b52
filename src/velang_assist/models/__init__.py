"""Result models returned by the analysis core."""

from velang_assist.models.completion import (
    CandidateKind,
    CompletionCandidate,
    CompletionContext,
    ContextKind,
)
from velang_assist.models.modules import ModuleDescriptor
from velang_assist.models.scope import ScopeKind, VariableBinding
from velang_assist.models.symbols import Position, Range, Symbol, SymbolKind

__all__ = [
    "CandidateKind",
    "CompletionCandidate",
    "CompletionContext",
    "ContextKind",
    "ModuleDescriptor",
    "Position",
    "Range",
    "ScopeKind",
    "Symbol",
    "SymbolKind",
    "VariableBinding",
]
