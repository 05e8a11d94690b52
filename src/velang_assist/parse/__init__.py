"""Line-level structural analysis of VeLang buffers."""

from velang_assist.parse.braces import block_extent, find_block_end
from velang_assist.parse.heads import classify
from velang_assist.parse.inference import infer_type
from velang_assist.parse.outline import build_outline, find_entry_points
from velang_assist.parse.scope import resolve_scope
from velang_assist.parse.signatures import (
    FunctionSignature,
    extract_imports,
    extract_signatures,
)

__all__ = [
    "FunctionSignature",
    "block_extent",
    "build_outline",
    "classify",
    "extract_imports",
    "extract_signatures",
    "find_block_end",
    "find_entry_points",
    "infer_type",
    "resolve_scope",
]
