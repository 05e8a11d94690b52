"""Source file scanning for local module discovery."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from velang_assist.utils import SOURCE_SUFFIX

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


def _is_within_root(path: Path, root: Path) -> bool:
    """True when ``path`` still resolves inside the workspace root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Every regular .gitignore of the workspace, ordered by relative path."""
    candidates = {root / ".gitignore", *root.rglob(".gitignore")}
    found = [p for p in candidates if p.is_file() and not p.is_symlink()]
    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    """Predicate hiding ignored workspace files from local-module discovery.

    Only the root .gitignore is read unless ``nested_gitignore`` is set; a
    path ignored by any composed file is hidden. None when nothing applies.
    """
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def is_ignored(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return is_ignored


def _is_excluded(
    path: Path,
    root: Path,
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    if path.is_symlink() or not _is_within_root(path, root):
        return True

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return True

    if not exclude_patterns:
        return False

    rel_path_str = path.relative_to(root).as_posix()
    return any(fnmatch(rel_path_str, pat) for pat in exclude_patterns)


def _walk(
    directory: Path,
    root: Path,
    suffix: str,
    gitignore_matches: Callable[[str], bool] | None,
    exclude_patterns: list[str] | None,
) -> Iterator[Path]:
    entries = sorted(directory.iterdir(), key=lambda p: p.name)
    subdirs = [p for p in entries if p.is_dir()]
    files = [p for p in entries if p.is_file() and p.name.endswith(suffix)]

    for subdir in subdirs:
        if not _is_excluded(subdir, root, gitignore_matches, exclude_patterns):
            yield from _walk(subdir, root, suffix, gitignore_matches, exclude_patterns)

    for path in files:
        if not _is_excluded(path, root, gitignore_matches, exclude_patterns):
            yield path


def find_source_files(
    directory: Path,
    *,
    suffix: str = SOURCE_SUFFIX,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all VeLang source files in a directory, respecting .gitignore.

    Args:
        directory: Workspace root to search
        suffix: Source file extension (default ".ve")
        exclude_patterns: Optional list of fnmatch patterns matched against
            the root-relative path; matching files and directories are skipped
        nested_gitignore: Also honour .gitignore files below the root

    Yields:
        Path objects, walking each directory's subdirectories before its
        files and both in name order. Symlinks are never followed.

    Raises:
        OSError: If a directory cannot be listed.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )
    yield from _walk(directory, directory, suffix, gitignore_matches, exclude_patterns)


__all__ = ["find_source_files"]
