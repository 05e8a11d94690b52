"""Catalog of importable modules: standard library and workspace files.

Every filesystem failure is handled here. A missing or unreadable standard
library degrades to a built-in catalog, an unreadable workspace to no local
modules, so completion always has something to offer.
"""

from __future__ import annotations

from itertools import islice
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from velang_assist.models.modules import ModuleDescriptor
from velang_assist.parse.signatures import extract_signatures
from velang_assist.scan.files import find_source_files
from velang_assist.utils import SOURCE_SUFFIX, path_to_module, relative_module_name

if TYPE_CHECKING:
    from velang_assist.parse.signatures import FunctionSignature

log = structlog.get_logger()

STD_PREFIX = "std/"
DESCRIPTION_SCAN_LINES = 5

FALLBACK_MODULES: tuple[tuple[str, str], ...] = (
    ("std/io", "Input/output operations"),
    ("std/math", "Mathematical functions"),
    ("std/string", "String utilities"),
    ("std/fs", "File system operations"),
    ("std/net", "Network operations"),
    ("std/collections", "Data structures"),
    ("std/time", "Time and date operations"),
    ("std/json", "JSON parsing and serialization"),
    ("std/http", "HTTP client and server"),
    ("std/crypto", "Cryptographic functions"),
)


def fallback_catalog() -> list[ModuleDescriptor]:
    return [
        ModuleDescriptor(name=name, description=description)
        for name, description in FALLBACK_MODULES
    ]


def _module_description(path: Path, stem: str) -> str:
    """First ``//`` comment within the leading lines, else ``<stem> module``."""
    default = f"{stem} module"
    try:
        with path.open(encoding="utf-8") as handle:
            leading = list(islice(handle, DESCRIPTION_SCAN_LINES))
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("catalog.description_unreadable", path=str(path), error=str(exc))
        return default

    for line in leading:
        trimmed = line.strip()
        if trimmed.startswith("//") and len(trimmed) > 3:
            return trimmed[2:].strip()
    return default


def list_standard_modules(
    library_root: Path | None,
    suffix: str = SOURCE_SUFFIX,
) -> list[ModuleDescriptor]:
    """List ``std/<name>`` modules found in the standard library directory.

    Returns:
        Descriptors sorted by file name, or the fixed fallback catalog when
        the library root is unset, missing or unreadable.
    """
    if library_root is None:
        return fallback_catalog()

    try:
        files = sorted(
            (p for p in library_root.iterdir() if p.is_file() and p.name.endswith(suffix)),
            key=lambda p: p.name,
        )
    except OSError as exc:
        log.warning(
            "catalog.library_unavailable",
            library_root=str(library_root),
            error=str(exc),
        )
        return fallback_catalog()

    modules: list[ModuleDescriptor] = []
    for path in files:
        stem = path.name[: -len(suffix)]
        modules.append(
            ModuleDescriptor(
                name=f"{STD_PREFIX}{stem}",
                description=_module_description(path, stem),
            )
        )
    return modules


def _excluded_module(root: Path, exclude_name: str | Path | None, suffix: str) -> str | None:
    if exclude_name is None:
        return None
    excluded = Path(exclude_name)
    if excluded.is_absolute():
        try:
            excluded = excluded.resolve().relative_to(root.resolve())
        except (OSError, ValueError):
            return None
    return relative_module_name(excluded, suffix)


def list_local_modules(
    root: Path | None,
    exclude_name: str | Path | None = None,
    *,
    suffix: str = SOURCE_SUFFIX,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> list[ModuleDescriptor]:
    """List workspace source files as ``./<relative path>`` modules.

    Args:
        root: Workspace root; None yields no modules
        exclude_name: The currently open file (absolute, or relative to root),
            which is never offered as an import of itself
        suffix: Source file extension
        exclude_patterns: fnmatch patterns of files to hide
        nested_gitignore: Honour nested .gitignore files
    """
    if root is None:
        return []

    excluded = _excluded_module(root, exclude_name, suffix)
    modules: list[ModuleDescriptor] = []
    try:
        for path in find_source_files(
            root,
            suffix=suffix,
            exclude_patterns=exclude_patterns,
            nested_gitignore=nested_gitignore,
        ):
            relative_path = path.relative_to(root)
            if relative_module_name(relative_path, suffix) == excluded:
                continue
            modules.append(
                ModuleDescriptor(
                    name=path_to_module(relative_path, suffix),
                    description=f"Local module: {relative_module_name(relative_path, suffix)}",
                )
            )
    except OSError as exc:
        log.warning("catalog.workspace_unavailable", root=str(root), error=str(exc))

    return modules


def list_modules(
    library_root: Path | None,
    workspace_root: Path | None,
    exclude_name: str | Path | None = None,
    *,
    suffix: str = SOURCE_SUFFIX,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> list[ModuleDescriptor]:
    """Standard modules followed by local modules, unique by name."""
    seen: set[str] = set()
    modules: list[ModuleDescriptor] = []
    for module in [
        *list_standard_modules(library_root, suffix),
        *list_local_modules(
            workspace_root,
            exclude_name,
            suffix=suffix,
            exclude_patterns=exclude_patterns,
            nested_gitignore=nested_gitignore,
        ),
    ]:
        if module.name in seen:
            continue
        seen.add(module.name)
        modules.append(module)
    return modules


def standard_module_functions(
    library_root: Path | None,
    module: str,
    suffix: str = SOURCE_SUFFIX,
) -> list[FunctionSignature]:
    """Function signatures declared by an imported ``std/`` module."""
    if library_root is None or not module.startswith(STD_PREFIX):
        return []

    path = library_root / f"{module[len(STD_PREFIX):]}{suffix}"
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("catalog.module_missing", module=module, path=str(path))
        return []
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("catalog.module_unreadable", module=module, error=str(exc))
        return []

    return extract_signatures(text)


__all__ = [
    "FALLBACK_MODULES",
    "fallback_catalog",
    "list_local_modules",
    "list_modules",
    "list_standard_modules",
    "standard_module_functions",
]
