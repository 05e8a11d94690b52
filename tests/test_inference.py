from __future__ import annotations

import pytest

from velang_assist.parse.inference import infer_type


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("42", "i32"),
        ("0", "i32"),
        ("3.14", "f64"),
        ("true", "bool"),
        ("false", "bool"),
        ('"hi"', "string"),
        ("'hello'", "string"),
        ("`raw`", "string"),
        ("'x'", "string"),
        ("null", "null"),
        ("x + y", "auto"),
        ("-1", "auto"),
        ("1.", "auto"),
        ('"', "auto"),
        ("", "auto"),
        ("  7  ", "i32"),
    ],
)
def test_infer_type(value: str, expected: str) -> None:
    assert infer_type(value) == expected


def test_infer_type_is_deterministic() -> None:
    assert infer_type("call()") == infer_type("call()") == "auto"
