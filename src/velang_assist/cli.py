"""Command-line interface for velang-assist."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from velang_assist.catalog.modules import list_modules
from velang_assist.complete.context import CompletionEnvironment, classify_context
from velang_assist.config import ConfigError, load_config
from velang_assist.core.logging import configure_logging, get_logger
from velang_assist.models.symbols import Position
from velang_assist.parse.outline import build_outline, find_entry_points
from velang_assist.parse.scope import resolve_scope
from velang_assist.utils import split_lines

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pydantic import BaseModel


def _add_file(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="VeLang source file to analyze")


def _add_cursor(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--line", type=int, required=True, help="0-based line")
    parser.add_argument(
        "--column",
        type=int,
        default=None,
        help="0-based column (default: end of line)",
    )


def _add_root(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Workspace root holding velang.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="velang-assist")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for stderr diagnostics (default: WARNING)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write stderr diagnostics as JSON lines",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    outline_parser = subparsers.add_parser("outline", help="Print the symbol tree")
    _add_file(outline_parser)

    entry_parser = subparsers.add_parser(
        "entry-points", help="Print lines declaring fn main"
    )
    _add_file(entry_parser)

    scope_parser = subparsers.add_parser(
        "scope", help="Print variables visible at a cursor"
    )
    _add_file(scope_parser)
    _add_cursor(scope_parser)

    complete_parser = subparsers.add_parser(
        "complete", help="Print completion candidates at a cursor"
    )
    _add_file(complete_parser)
    _add_cursor(complete_parser)
    _add_root(complete_parser)

    modules_parser = subparsers.add_parser("modules", help="Print importable modules")
    _add_root(modules_parser)
    modules_parser.add_argument(
        "--exclude",
        default=None,
        help="Currently open file, left out of local modules",
    )

    return parser


def _write_json(payload: object) -> None:
    opts = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
    sys.stdout.write(orjson.dumps(payload, option=opts).decode("utf-8"))
    sys.stdout.flush()


def _dump(models: Sequence[BaseModel]) -> list[object]:
    return [model.model_dump(mode="json") for model in models]


def _read_buffer(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _cursor(text: str, line: int, column: int | None) -> Position:
    if column is None:
        lines = split_lines(text)
        column = len(lines[line]) if 0 <= line < len(lines) else 0
    return Position(line=line, column=column)


def _handle_complete(args: argparse.Namespace, text: str) -> int:
    root = Path(args.root).expanduser().resolve()
    config = load_config(root)
    environment = CompletionEnvironment.from_config(
        config,
        workspace_root=root,
        current_file=Path(args.file).expanduser().resolve(),
    )
    context = classify_context(
        text, _cursor(text, args.line, args.column), environment=environment
    )
    candidates = sorted(context.candidates, key=lambda c: c.sort_key)
    _write_json(
        {
            "kind": context.kind,
            "prefix": context.prefix,
            "candidates": _dump(candidates),
        }
    )
    return 0


def _handle_modules(args: argparse.Namespace) -> int:
    root = Path(args.root).expanduser().resolve()
    config = load_config(root)
    modules = list_modules(
        config.library_root(),
        root,
        args.exclude,
        suffix=config.source_suffix,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    )
    _write_json(_dump(modules))
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "modules":
        return _handle_modules(args)

    text = _read_buffer(Path(args.file).expanduser())

    if args.command == "outline":
        _write_json(_dump(build_outline(text)))
        return 0

    if args.command == "entry-points":
        _write_json(find_entry_points(text))
        return 0

    if args.command == "scope":
        bindings = resolve_scope(text, _cursor(text, args.line, args.column))
        _write_json(_dump(bindings))
        return 0

    if args.command == "complete":
        return _handle_complete(args, text)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, json_format=args.log_json)
    log = get_logger("velang_assist.cli")

    try:
        return _dispatch(args)
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("cli.input_unreadable", error=str(exc))
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except ConfigError as exc:
        sys.stderr.write(f"config: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
