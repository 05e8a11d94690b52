"""Shared utilities for velang-assist."""

from __future__ import annotations

from pathlib import Path

SOURCE_SUFFIX = ".ve"


def split_lines(text: str) -> list[str]:
    """Split buffer text into lines, tolerating ``\\r\\n`` endings.

    Unlike :meth:`str.splitlines`, a trailing newline yields a final empty
    line so that line indices match editor line numbers.
    """
    return [line.removesuffix("\r") for line in text.split("\n")]


def path_to_module(file_path: str | Path, suffix: str = SOURCE_SUFFIX) -> str:
    """Convert a workspace-relative source path to a local module name.

    Args:
        file_path: Relative file path (e.g., "net/client.ve" or Path object)
        suffix: Source file extension to strip

    Returns:
        Module name (e.g., "./net/client")

    Examples:
        >>> path_to_module("net/client.ve")
        './net/client'
        >>> path_to_module("util.ve")
        './util'
        >>> path_to_module("lib\\\\strings.ve")
        './lib/strings'
    """
    return f"./{relative_module_name(file_path, suffix)}"


def relative_module_name(file_path: str | Path, suffix: str = SOURCE_SUFFIX) -> str:
    """Normalized relative path without extension, e.g. ``net/client``."""
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    normalized_parts = [part for part in path_str.replace("\\", "/").split("/") if part]

    if normalized_parts and normalized_parts[0] == ".":
        normalized_parts = normalized_parts[1:]

    if normalized_parts and normalized_parts[-1].endswith(suffix):
        normalized_parts[-1] = normalized_parts[-1][: -len(suffix)]

    return "/".join(normalized_parts)


__all__ = ["SOURCE_SUFFIX", "path_to_module", "relative_module_name", "split_lines"]
