"""Workspace file scanning."""

from velang_assist.scan.files import find_source_files

__all__ = ["find_source_files"]
