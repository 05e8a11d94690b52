from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from velang_assist.scan.files import find_source_files

if TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path, text: str = "fn f() {\n}\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _relative(root: Path, **kwargs: object) -> list[str]:
    return [p.relative_to(root).as_posix() for p in find_source_files(root, **kwargs)]


def test_walk_visits_subdirectories_before_files(tmp_path: Path) -> None:
    _touch(tmp_path / "b.ve")
    _touch(tmp_path / "a.ve")
    _touch(tmp_path / "lib" / "z.ve")
    _touch(tmp_path / "notes.txt", "not source")

    assert _relative(tmp_path) == ["lib/z.ve", "a.ve", "b.ve"]


def test_root_gitignore_hides_files(tmp_path: Path) -> None:
    _touch(tmp_path / "keep.ve")
    _touch(tmp_path / "build" / "gen.ve")
    (tmp_path / ".gitignore").write_text("build/\n", encoding="utf-8")

    assert _relative(tmp_path) == ["keep.ve"]


def test_exclude_patterns_match_relative_paths(tmp_path: Path) -> None:
    _touch(tmp_path / "keep.ve")
    _touch(tmp_path / "vendor" / "dep.ve")

    assert _relative(tmp_path, exclude_patterns=["vendor"]) == ["keep.ve"]


def test_nested_gitignore_only_when_enabled(tmp_path: Path) -> None:
    _touch(tmp_path / "pkg" / "keep.ve")
    _touch(tmp_path / "pkg" / "scratch.ve")
    (tmp_path / "pkg" / ".gitignore").write_text("scratch.ve\n", encoding="utf-8")

    assert _relative(tmp_path) == ["pkg/keep.ve", "pkg/scratch.ve"]
    assert _relative(tmp_path, nested_gitignore=True) == ["pkg/keep.ve"]


def test_custom_suffix(tmp_path: Path) -> None:
    _touch(tmp_path / "a.ve")
    _touch(tmp_path / "b.vel")

    assert _relative(tmp_path, suffix=".vel") == ["b.vel"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_directories_are_not_followed(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "pkg" / "module.ve")

    external_root = tmp_path / "external"
    _touch(external_root / "leak.ve")

    (repo_root / "linked").symlink_to(external_root, target_is_directory=True)

    results = _relative(repo_root)

    assert "pkg/module.ve" in results
    assert "linked/leak.ve" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_nested_gitignore_is_not_read(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "pkg" / "module.ve")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "rules").write_text("module.ve\n", encoding="utf-8")
    (repo_root / "pkg" / ".gitignore").symlink_to(external_root / "rules")

    assert _relative(repo_root, nested_gitignore=True) == ["pkg/module.ve"]
