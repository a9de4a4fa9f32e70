"""Key paths: reading dotted keys and resolving them against a table."""

from __future__ import annotations

import string

from .errors import ErrorKind
from .scanner import EOF, NEWLINES, Scanner
from .strings import read_basic_string, read_literal_string
from .values import Value, VTable, VTableArray


BARE_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "_-")


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def read_key_path(scanner: Scanner, kind: ErrorKind = ErrorKind.InvalidKey) -> list[str]:
    """Read ``seg(.seg)*`` where each segment is bare or single-line quoted.

    Spaces and tabs are allowed around the dots. Syntax errors are
    reported with *kind* (``InvalidKey`` for assignments,
    ``MalformedHeader`` inside table headers). The cursor is left on
    the first significant character after the path.
    """
    parts: list[str] = []
    while True:
        ch = scanner.skip_spaces()
        if ch == '"':
            if scanner.lookahead('"""'):
                raise scanner.error(kind, "multi-line strings cannot be used as keys")
            parts.append(read_basic_string(scanner))
        elif ch == "'":
            if scanner.lookahead("'''"):
                raise scanner.error(kind, "multi-line strings cannot be used as keys")
            parts.append(read_literal_string(scanner))
        else:
            bare = scanner.consume_while(BARE_KEY_CHARS)
            if not bare:
                if ch == EOF:
                    raise scanner.error(ErrorKind.UnexpectedEndOfInput, "expected a key")
                if ch in NEWLINES:
                    raise scanner.error(kind, "line break inside a key")
                raise scanner.error(kind, f"expected a key, found {scanner.describe(ch)}")
            parts.append(bare)
        if scanner.skip_spaces() != ".":
            return parts
        scanner.advance()


def format_key_path(parts: list[str]) -> str:
    out = []
    for part in parts:
        if part and all(c in BARE_KEY_CHARS for c in part):
            out.append(part)
        else:
            out.append('"' + part.replace("\\", "\\\\").replace('"', '\\"') + '"')
    return ".".join(out)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_table(
    scanner: Scanner,
    table: VTable,
    parts: list[str],
    pos: int,
    created: set[int] | None = None,
    sealed: set[int] | None = None,
) -> VTable:
    """Descend *parts* from *table*, creating missing tables on the way.

    A table-array segment descends into its most recent table. Any other
    value on the path is a structural conflict reported at *pos*, and so
    is an inline table whose ``id()`` is in *sealed*. The ``id()`` of
    every table created here is added to *created*.
    """
    current = table
    for depth, part in enumerate(parts):
        child = current.entries.get(part)
        if child is None:
            child = VTable()
            current.entries[part] = child
            if created is not None:
                created.add(id(child))
        if isinstance(child, VTableArray):
            current = child.tables[-1]
        elif isinstance(child, VTable):
            if sealed is not None and id(child) in sealed:
                path = format_key_path(parts[:depth + 1])
                raise scanner.error(
                    ErrorKind.StructuralConflict,
                    f"key {path!r} is an inline table and cannot be extended",
                    pos=pos,
                )
            current = child
        else:
            path = format_key_path(parts[:depth + 1])
            raise scanner.error(
                ErrorKind.StructuralConflict,
                f"key {path!r} is already defined as a non-table value",
                pos=pos,
            )
    return current


def insert_value(
    scanner: Scanner,
    table: VTable,
    parts: list[str],
    value: Value,
    pos: int,
    sealed: set[int] | None = None,
) -> None:
    """Assign *value* at the dotted path *parts* relative to *table*.

    A table value can only come from an inline table, so its ``id()`` is
    added to *sealed*.
    """
    parent = resolve_table(scanner, table, parts[:-1], pos, sealed=sealed)
    key = parts[-1]
    if key in parent.entries:
        raise scanner.error(
            ErrorKind.DuplicateKey,
            f"key {format_key_path(parts)!r} is defined more than once",
            pos=pos,
        )
    parent.entries[key] = value
    if sealed is not None and isinstance(value, VTable):
        sealed.add(id(value))
