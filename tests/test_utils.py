from __future__ import annotations

from pathlib import Path

from velang_assist.utils import path_to_module, relative_module_name, split_lines


def test_path_to_module_rules() -> None:
    assert path_to_module("util.ve") == "./util"
    assert path_to_module("net/client.ve") == "./net/client"
    assert path_to_module(Path("a/b/c.ve")) == "./a/b/c"
    assert path_to_module("win\\style\\mod.ve") == "./win/style/mod"


def test_relative_module_name_strips_only_the_suffix() -> None:
    assert relative_module_name("./x.ve") == "x"
    assert relative_module_name("archive.ve.bak") == "archive.ve.bak"
    assert relative_module_name("lib.vx", suffix=".vx") == "lib"


def test_split_lines_keeps_trailing_empty_line() -> None:
    assert split_lines("a\r\nb\n") == ["a", "b", ""]
    assert split_lines("") == [""]
