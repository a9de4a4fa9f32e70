"""Document assembler: table blocks and headers → document tree."""

from __future__ import annotations

import logging
from typing import IO, Any

from .errors import ErrorKind
from .keys import format_key_path, insert_value, read_key_path, resolve_table
from .reader import read_value
from .scanner import EOF, NEWLINES, Scanner
from .values import VTable, VTableArray, to_python

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def read(text: str) -> VTable:
    """Decode a complete TOML buffer into its root table."""
    return DocumentAssembler(text).read()


def loads(text: str) -> dict[str, Any]:
    """Decode *text* into plain Python objects."""
    if not isinstance(text, str):
        raise TypeError(f"loads() argument must be str, not {type(text).__name__}")
    return to_python(read(text))


def load(fp: IO) -> dict[str, Any]:
    """Decode the whole content of a file object (bytes are read as UTF-8)."""
    data = fp.read()
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return loads(data)


# ---------------------------------------------------------------------------
# DocumentAssembler
# ---------------------------------------------------------------------------

class DocumentAssembler:
    """Drives a single parse of *text*; one instance per document.

    The implicit root block is read first. Every ``[`` that starts a line
    afterwards opens a header, whose body is the block that follows;
    the body is then attached at the header's path. End of input during
    a block ends the document.
    """

    def __init__(self, text: str) -> None:
        self.scanner = Scanner(text)
        # id() of tables created only as intermediates of a header path;
        # a later plain header may still define them.
        self._implicit: set[int] = set()
        # id() of inline tables; no later key or header may add to them.
        self._sealed: set[int] = set()

    def read(self) -> VTable:
        scanner = self.scanner
        root = self._read_table_content()

        while scanner.skip_insignificant() != EOF:
            header_pos = scanner.pos
            parts, is_array = self._read_header()
            body = self._read_table_content()
            if is_array:
                self._append_to_table_array(root, parts, body, header_pos)
            else:
                self._define_table(root, parts, body, header_pos)

        logger.debug("Decoded document with %d top-level keys", len(root))
        return root

    # -- Blocks ---------------------------------------------------------

    def _read_table_content(self) -> VTable:
        """Read ``key = value`` lines up to the next header or end of input."""
        scanner = self.scanner
        table = VTable()
        while True:
            ch = scanner.skip_insignificant()
            if ch == EOF or ch == "[":
                return table

            key_pos = scanner.pos
            parts = read_key_path(scanner)
            ch = scanner.skip_spaces()
            if ch == EOF:
                raise scanner.error(
                    ErrorKind.UnexpectedEndOfInput,
                    f"expected '=' after key {format_key_path(parts)!r}",
                )
            if ch != "=":
                raise scanner.error(
                    ErrorKind.InvalidKey,
                    f"expected '=' after key {format_key_path(parts)!r}",
                )
            scanner.advance()
            scanner.skip_spaces()
            value = read_value(scanner)
            insert_value(scanner, table, parts, value, key_pos, self._sealed)
            self._expect_end_of_line(ErrorKind.InvalidLiteral, "value")

    def _read_header(self) -> tuple[list[str], bool]:
        """Read ``[path]`` or ``[[path]]``; return the path and the array flag."""
        scanner = self.scanner
        scanner.advance()  # [
        is_array = scanner.consume("[")
        parts = read_key_path(scanner, ErrorKind.MalformedHeader)
        closing = "]]" if is_array else "]"
        if not scanner.consume(closing):
            raise scanner.error(
                ErrorKind.MalformedHeader,
                f"expected {closing!r} to close table header, found {scanner.describe(scanner.peek())}",
            )
        self._expect_end_of_line(ErrorKind.MalformedHeader, "table header")
        return parts, is_array

    def _expect_end_of_line(self, kind: ErrorKind, what: str) -> None:
        scanner = self.scanner
        ch = scanner.skip_insignificant(allow_newlines=False)
        if ch != EOF and ch not in NEWLINES:
            raise scanner.error(kind, f"expected end of line after {what}, found {ch!r}")

    # -- Attaching header bodies ---------------------------------------

    def _define_table(self, root: VTable, parts: list[str], body: VTable, pos: int) -> None:
        scanner = self.scanner
        parent = resolve_table(scanner, root, parts[:-1], pos, self._implicit, self._sealed)
        key = parts[-1]
        existing = parent.entries.get(key)
        path = format_key_path(parts)

        if existing is None:
            parent.entries[key] = body
        elif isinstance(existing, VTable) and id(existing) in self._implicit:
            for name, value in body.entries.items():
                if name in existing.entries:
                    raise scanner.error(
                        ErrorKind.DuplicateKey,
                        f"key {format_key_path(parts + [name])!r} is defined more than once",
                        pos=pos,
                    )
                existing.entries[name] = value
            self._implicit.discard(id(existing))
        elif isinstance(existing, VTable):
            raise scanner.error(ErrorKind.DuplicateTable, f"table [{path}] is defined more than once", pos=pos)
        else:
            raise scanner.error(
                ErrorKind.StructuralConflict,
                f"cannot define table [{path}]: the key already holds a non-table value",
                pos=pos,
            )
        logger.debug("Defined table [%s] with %d keys", path, len(body))

    def _append_to_table_array(self, root: VTable, parts: list[str], body: VTable, pos: int) -> None:
        scanner = self.scanner
        parent = resolve_table(scanner, root, parts[:-1], pos, self._implicit, self._sealed)
        key = parts[-1]
        existing = parent.entries.get(key)
        path = format_key_path(parts)

        if existing is None:
            existing = VTableArray()
            parent.entries[key] = existing
        elif not isinstance(existing, VTableArray):
            raise scanner.error(
                ErrorKind.StructuralConflict,
                f"cannot append to [[{path}]]: the key already holds a value that is not a table array",
                pos=pos,
            )
        existing.tables.append(body)
        logger.debug("Appended table #%d to [[%s]]", len(existing), path)
