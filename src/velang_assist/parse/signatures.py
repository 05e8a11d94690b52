"""Function signatures and import statements of a buffer."""

from __future__ import annotations

import re
from dataclasses import dataclass

from velang_assist.parse.heads import (
    IDENTIFIER,
    match_function_head,
    match_import_head,
)

_PARAMETER_NAME = re.compile(rf"^({IDENTIFIER})")


@dataclass(frozen=True)
class FunctionSignature:
    """A callable declared in a buffer or an imported library module."""

    name: str
    raw_parameters: str
    parameter_names: tuple[str, ...]

    @property
    def detail(self) -> str:
        return f"Function ({self.raw_parameters or 'no parameters'})"

    def snippet(self) -> str:
        """Call template with one placeholder per parameter, in order."""
        if not self.parameter_names:
            return f"{self.name}($0)"
        slots = ", ".join(
            f"${{{index}:{param}}}"
            for index, param in enumerate(self.parameter_names, start=1)
        )
        return f"{self.name}({slots})"


def parameter_names(raw_parameters: str) -> tuple[str, ...]:
    """Split raw parameter text into names, ``paramN`` for unnamed slots."""
    if not raw_parameters.strip():
        return ()
    names: list[str] = []
    for index, param in enumerate(raw_parameters.split(","), start=1):
        match = _PARAMETER_NAME.match(param.strip())
        names.append(match.group(1) if match else f"param{index}")
    return tuple(names)


def extract_signatures(text: str) -> list[FunctionSignature]:
    """Return every function head in ``text`` in declaration order."""
    signatures: list[FunctionSignature] = []
    for raw_line in text.split("\n"):
        head = match_function_head(raw_line.strip())
        if head is None:
            continue
        signatures.append(
            FunctionSignature(
                name=head.name,
                raw_parameters=head.raw_parameters,
                parameter_names=parameter_names(head.raw_parameters),
            )
        )
    return signatures


def extract_imports(text: str) -> list[str]:
    """Return the module paths of all ``import "...";`` lines."""
    imports: list[str] = []
    for raw_line in text.split("\n"):
        head = match_import_head(raw_line.strip())
        if head is not None:
            imports.append(head.path)
    return imports


__all__ = [
    "FunctionSignature",
    "extract_imports",
    "extract_signatures",
    "parameter_names",
]
