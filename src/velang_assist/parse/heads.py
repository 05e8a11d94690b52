"""Line classification against the fixed grammar of declaration heads.

Each head shape has its own matcher returning a frozen dataclass or None, and
:func:`classify` tries them in a fixed order. Matchers expect a line that has
already been stripped of surrounding whitespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

IDENTIFIER = r"[a-zA-Z_][a-zA-Z0-9_]*"

BindingKeyword = Literal["let", "var"]

_FUNCTION_HEAD = re.compile(
    rf"^(?P<export>export\s+)?fn\s+(?P<name>{IDENTIFIER})\s*\((?P<params>[^)]*)\)?"
)
_STRUCT_HEAD = re.compile(rf"^struct\s+(?P<name>{IDENTIFIER})\s*\{{")
_ENUM_HEAD = re.compile(rf"^enum\s+(?P<name>{IDENTIFIER})\s*\{{")
_VARIABLE_HEAD = re.compile(
    rf"^(?P<keyword>let|var)\s+(?P<name>{IDENTIFIER})\s*"
    r"(?P<colon>:\s*(?P<annotation>[^=;]*[^=;\s])?)?\s*"
    r"(?:=\s*(?P<value>.+?))?\s*;?\s*$"
)
_LOOP_HEAD = re.compile(rf"^for\s+(?P<name>{IDENTIFIER})\s+in\s+")
_IMPORT_HEAD = re.compile(r'^import\s+"(?P<path>[^"]+)";?$')
_FIELD = re.compile(rf"^(?P<name>{IDENTIFIER})\s*:\s*(?P<type>{IDENTIFIER})")
_ENUM_VARIANT = re.compile(r"^(?P<name>[A-Z][a-zA-Z0-9_]*)")


@dataclass(frozen=True)
class FunctionHead:
    name: str
    raw_parameters: str
    exported: bool = False


@dataclass(frozen=True)
class StructHead:
    name: str


@dataclass(frozen=True)
class EnumHead:
    name: str


@dataclass(frozen=True)
class VariableHead:
    """A ``let``/``var`` declaration.

    ``annotation`` is the explicit type text, ``initializer`` the right-hand
    side without its trailing semicolon. Either may be None. An annotation
    of ``""`` means the colon is typed but the type is not.
    """

    keyword: BindingKeyword
    name: str
    annotation: str | None
    initializer: str | None

    @property
    def is_foreign(self) -> bool:
        return self.keyword == "var"


@dataclass(frozen=True)
class LoopHead:
    name: str


@dataclass(frozen=True)
class ImportHead:
    path: str


@dataclass(frozen=True)
class FieldLine:
    name: str
    type: str


@dataclass(frozen=True)
class EnumVariantLine:
    name: str


Head = FunctionHead | StructHead | EnumHead | VariableHead | LoopHead | ImportHead


def match_function_head(line: str) -> FunctionHead | None:
    match = _FUNCTION_HEAD.match(line)
    if match is None:
        return None
    return FunctionHead(
        name=match["name"],
        raw_parameters=match["params"].strip(),
        exported=match["export"] is not None,
    )


def match_struct_head(line: str) -> StructHead | None:
    match = _STRUCT_HEAD.match(line)
    return StructHead(name=match["name"]) if match else None


def match_enum_head(line: str) -> EnumHead | None:
    match = _ENUM_HEAD.match(line)
    return EnumHead(name=match["name"]) if match else None


def match_variable_head(line: str) -> VariableHead | None:
    match = _VARIABLE_HEAD.match(line)
    if match is None:
        return None

    initializer = match["value"]
    if initializer is not None:
        initializer = initializer.strip()
    elif not line.rstrip().endswith(";") and match["colon"] is None:
        # "let x" with nothing after it is still being typed.
        return None

    annotation = match["annotation"]
    if annotation is not None:
        annotation = annotation.strip()
    elif match["colon"] is not None:
        # "let x:" whose type is not written yet.
        annotation = ""

    return VariableHead(
        keyword="let" if match["keyword"] == "let" else "var",
        name=match["name"],
        annotation=annotation,
        initializer=initializer,
    )


def match_loop_head(line: str) -> LoopHead | None:
    match = _LOOP_HEAD.match(line)
    return LoopHead(name=match["name"]) if match else None


def match_import_head(line: str) -> ImportHead | None:
    match = _IMPORT_HEAD.match(line)
    return ImportHead(path=match["path"]) if match else None


def match_field(line: str) -> FieldLine | None:
    match = _FIELD.match(line)
    return FieldLine(name=match["name"], type=match["type"]) if match else None


def match_enum_variant(line: str) -> EnumVariantLine | None:
    match = _ENUM_VARIANT.match(line)
    return EnumVariantLine(name=match["name"]) if match else None


_MATCHERS = (
    match_function_head,
    match_struct_head,
    match_enum_head,
    match_variable_head,
    match_loop_head,
    match_import_head,
)


def classify(line: str) -> Head | None:
    """Classify a trimmed line; None means "not a declaration on this line"."""
    for matcher in _MATCHERS:
        head = matcher(line)
        if head is not None:
            return head
    return None


__all__ = [
    "IDENTIFIER",
    "EnumHead",
    "EnumVariantLine",
    "FieldLine",
    "FunctionHead",
    "Head",
    "ImportHead",
    "LoopHead",
    "StructHead",
    "VariableHead",
    "classify",
    "match_enum_head",
    "match_enum_variant",
    "match_field",
    "match_function_head",
    "match_import_head",
    "match_loop_head",
    "match_struct_head",
    "match_variable_head",
]
