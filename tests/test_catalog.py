from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from velang_assist.catalog.modules import (
    FALLBACK_MODULES,
    list_local_modules,
    list_modules,
    list_standard_modules,
    standard_module_functions,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_library_root_returns_fallback_catalog(tmp_path: Path) -> None:
    modules = list_standard_modules(tmp_path / "no-such-dir")

    assert len(modules) == 10
    assert [(m.name, m.description) for m in modules] == list(FALLBACK_MODULES)
    assert ("std/json", "JSON parsing and serialization") in FALLBACK_MODULES


def test_unset_library_root_returns_fallback_catalog() -> None:
    assert [m.name for m in list_standard_modules(None)][:2] == ["std/io", "std/math"]


def test_library_root_that_is_a_file_returns_fallback(tmp_path: Path) -> None:
    not_a_dir = _write(tmp_path / "lib")

    assert len(list_standard_modules(not_a_dir)) == 10


def test_standard_modules_read_descriptions(tmp_path: Path) -> None:
    library = tmp_path / "std"
    _write(library / "io.ve", "// Console and file input/output\nexport fn print(s: string) {}\n")
    _write(library / "math.ve", "\n\n\n\n\n// too late to count\n")
    _write(library / "empty.ve", "//\n// \n")
    _write(library / "notes.txt", "// not a module\n")

    modules = list_standard_modules(library)

    assert [(m.name, m.description) for m in modules] == [
        ("std/empty", "empty module"),
        ("std/io", "Console and file input/output"),
        ("std/math", "math module"),
    ]


def test_empty_library_yields_no_modules(tmp_path: Path) -> None:
    library = tmp_path / "std"
    library.mkdir()

    assert list_standard_modules(library) == []


def test_local_modules_walk_directories_first(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _write(root / "main.ve")
    _write(root / "util.ve")
    _write(root / "net" / "client.ve")
    _write(root / "net" / "proto" / "frame.ve")
    _write(root / "README.md")

    modules = list_local_modules(root, "main.ve")

    assert [m.name for m in modules] == [
        "./net/proto/frame",
        "./net/client",
        "./util",
    ]
    assert modules[-1].description == "Local module: util"


def test_local_modules_exclude_absolute_current_file(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    current = _write(root / "net" / "client.ve")
    _write(root / "main.ve")

    names = [m.name for m in list_local_modules(root, current)]

    assert names == ["./main"]


def test_local_modules_honour_gitignore_and_excludes(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _write(root / ".gitignore", "generated.ve\n")
    _write(root / "generated.ve")
    _write(root / "keep.ve")
    _write(root / "vendor" / "dep.ve")

    names = [m.name for m in list_local_modules(root, exclude_patterns=["vendor"])]

    assert names == ["./keep"]


def test_missing_workspace_yields_no_local_modules(tmp_path: Path) -> None:
    assert list_local_modules(tmp_path / "missing") == []
    assert list_local_modules(None) == []


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_local_modules_skip_symlinked_dirs(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    _write(root / "own.ve")
    external = tmp_path / "external"
    _write(external / "leak.ve")
    (root / "linked").symlink_to(external, target_is_directory=True)

    assert [m.name for m in list_local_modules(root)] == ["./own"]


def test_list_modules_standard_then_local(tmp_path: Path) -> None:
    library = tmp_path / "std"
    _write(library / "io.ve", "// IO\n")
    root = tmp_path / "ws"
    _write(root / "app.ve")
    _write(root / "helpers.ve")

    modules = list_modules(library, root, "app.ve")

    assert [m.name for m in modules] == ["std/io", "./helpers"]


def test_standard_module_functions(tmp_path: Path) -> None:
    library = tmp_path / "std"
    _write(
        library / "math.ve",
        "// Math\nexport fn sqrt(x: f64) {\n}\nfn helper() {\n}\n",
    )

    functions = standard_module_functions(library, "std/math")

    assert [(f.name, f.raw_parameters) for f in functions] == [
        ("sqrt", "x: f64"),
        ("helper", ""),
    ]
    assert standard_module_functions(library, "std/missing") == []
    assert standard_module_functions(library, "./local") == []
    assert standard_module_functions(None, "std/math") == []
