from __future__ import annotations

import json
from typing import TYPE_CHECKING

from velang_assist.cli import main

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

SOURCE = """\
import "std/io";

let greeting = "hi";

fn main() {
    let n: i32 = 1;
    pr
}
"""


def _write_workspace(tmp_path: Path) -> tuple[Path, Path]:
    install = tmp_path / "install"
    library = install / "lib" / "std" / "src"
    library.mkdir(parents=True)
    (library / "io.ve").write_text(
        "// Input/output\nexport fn print(msg: string) {\n}\n", encoding="utf-8"
    )

    root = tmp_path / "ws"
    root.mkdir()
    (root / "velang.toml").write_text(
        f'home = "{install.as_posix()}"\n', encoding="utf-8"
    )
    source = root / "main.ve"
    source.write_text(SOURCE, encoding="utf-8")
    (root / "util.ve").write_text("fn helper() {\n}\n", encoding="utf-8")
    return root, source


def test_cli_outline(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _, source = _write_workspace(tmp_path)

    exit_code = main(["outline", str(source)])

    assert exit_code == 0
    symbols = json.loads(capsys.readouterr().out)
    assert [s["name"] for s in symbols] == ["greeting", "main"]
    assert symbols[1]["children"][0]["name"] == "n"


def test_cli_entry_points(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _, source = _write_workspace(tmp_path)

    assert main(["entry-points", str(source)]) == 0
    assert json.loads(capsys.readouterr().out) == [4]


def test_cli_scope(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _, source = _write_workspace(tmp_path)

    assert main(["scope", str(source), "--line", "6"]) == 0
    bindings = json.loads(capsys.readouterr().out)
    assert [(b["name"], b["type"], b["scope_kind"]) for b in bindings] == [
        ("n", "i32", "local_variable"),
        ("greeting", "string", "global_variable"),
    ]


def test_cli_complete_uses_configured_library(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, source = _write_workspace(tmp_path)

    exit_code = main(
        ["complete", str(source), "--line", "6", "--root", str(root)]
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "identifier_prefix"
    assert payload["prefix"] == "pr"
    labels = [c["label"] for c in payload["candidates"] if c["kind"] == "function"]
    assert labels == ["print"]
    sort_keys = [c["sort_key"] for c in payload["candidates"]]
    assert sort_keys == sorted(sort_keys)


def test_cli_modules(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root, source = _write_workspace(tmp_path)

    exit_code = main(["modules", "--root", str(root), "--exclude", str(source)])

    assert exit_code == 0
    modules = json.loads(capsys.readouterr().out)
    assert modules == [
        {"name": "std/io", "description": "Input/output"},
        {"name": "./util", "description": "Local module: util"},
    ]


def test_cli_missing_file_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["outline", str(tmp_path / "absent.ve")])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error:" in captured.err
    assert "cli.input_unreadable" not in captured.err


def test_cli_debug_log_json_goes_to_stderr(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        ["--log-level", "DEBUG", "--log-json", "outline", str(tmp_path / "absent.ve")]
    )

    assert exit_code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    records = [
        json.loads(line) for line in captured.err.splitlines() if line.startswith("{")
    ]
    assert [r["event"] for r in records] == ["cli.input_unreadable"]
    assert records[0]["level"] == "debug"
    assert records[0]["logger"] == "velang_assist.cli"


def test_cli_invalid_config_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, _ = _write_workspace(tmp_path)
    (root / "velang.toml").write_text("unknown = 1\n", encoding="utf-8")

    exit_code = main(["modules", "--root", str(root)])

    assert exit_code == 2
    assert "config:" in capsys.readouterr().err
