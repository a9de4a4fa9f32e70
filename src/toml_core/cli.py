"""``toml-core`` command: decode a TOML file and print its document tree.

Also runnable as ``python -m toml_core.cli``.
"""

from __future__ import annotations

import argparse
import datetime
import json
import logging
import sys
from typing import IO

from .assembler import read
from .errors import TomlDecodeError
from .values import Value, VArray, VString, VTable, VTableArray, to_python

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VString):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, VArray):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VTable):
        inner = ", ".join(f"{k} = {_fmt_inline(v)}" for k, v in value.entries.items())
        return "{ " + inner + " }" if inner else "{}"
    if isinstance(value, VTableArray):
        return "[" + ", ".join(_fmt_inline(t) for t in value.tables) + "]"
    return str(value)


def _fmt_inspect(table: VTable, indent: int = 0) -> list[str]:
    """Indented tree view: nested tables and table arrays get their own block."""
    pad = "  " * indent
    lines: list[str] = []
    for key, value in table.entries.items():
        if isinstance(value, VTable):
            lines.append(f"{pad}{key}:")
            lines.extend(_fmt_inspect(value, indent + 1))
        elif isinstance(value, VTableArray):
            lines.append(f"{pad}{key}: ({len(value)} tables)")
            for i, sub in enumerate(value.tables, 1):
                lines.append(f"{pad}  {i}:")
                lines.extend(_fmt_inspect(sub, indent + 2))
        else:
            lines.append(f"{pad}{key}: {_fmt_inline(value)}")
    return lines


def _json_default(obj):
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


def _show(root: VTable, as_json: bool, dest: IO[str]) -> None:
    if as_json:
        print(json.dumps(to_python(root), default=_json_default, indent=2, ensure_ascii=False), file=dest)
        return
    lines = _fmt_inspect(root)
    if not lines:
        print("  (empty document)", file=dest)
    for line in lines:
        print(line, file=dest)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="toml-core", description="Decode a TOML document and print it.")
    parser.add_argument("path", help="TOML file to read, or '-' for stdin")
    parser.add_argument("--json", action="store_true", help="print JSON instead of the tree view")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None, dest: IO[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    dest = dest or sys.stdout

    try:
        if args.path == "-":
            text = sys.stdin.read()
        else:
            with open(args.path, encoding="utf-8") as fh:
                text = fh.read()
    except OSError as exc:
        print(f"Error reading '{args.path}': {exc}", file=sys.stderr)
        return 2

    try:
        root = read(text)
    except TomlDecodeError as exc:
        logger.debug("Decoding %s failed at offset %s", args.path, exc.pos)
        print(f"error: {exc.kind.name}: {exc}", file=sys.stderr)
        return 1

    _show(root, args.json, dest)
    return 0


if __name__ == "__main__":
    sys.exit(main())
