"""Reader layer: value dispatch plus the array and inline-table readers."""

from __future__ import annotations

import string

from .errors import ErrorKind
from .keys import insert_value, read_key_path
from .scalars import read_boolean, read_number_or_date
from .scanner import EOF, NEWLINES, Scanner
from .strings import read_string
from .values import Value, VArray, VTable, family_of


_NUMBER_START = frozenset(string.digits + "+-")


# ---------------------------------------------------------------------------
# Value dispatcher
# ---------------------------------------------------------------------------

def read_value(scanner: Scanner) -> Value:
    """Read one value starting at the current (significant) character.

    ``[`` array, ``{`` inline table, quotes → string, ``t``/``f`` →
    boolean, digit or sign → number-or-date. End of input is a missing
    value, never an empty result.
    """
    ch = scanner.peek()
    if ch == EOF:
        raise scanner.error(ErrorKind.UnexpectedEndOfInput, "missing value")
    if ch == "[":
        return read_array(scanner)
    if ch == "{":
        return read_inline_table(scanner)
    if ch in ('"', "'"):
        return read_string(scanner)
    if ch in ("t", "f"):
        return read_boolean(scanner)
    if ch in _NUMBER_START:
        return read_number_or_date(scanner)
    if ch in NEWLINES:
        raise scanner.error(ErrorKind.InvalidLiteral, "missing value before line break")
    raise scanner.error(ErrorKind.InvalidLiteral, f"unexpected character {ch!r} at start of value")


# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------

def read_array(scanner: Scanner) -> VArray:
    """``[v, v, ...]``: newlines and comments allowed, trailing comma allowed.

    Every element must be in the same variant family as the first one;
    a mismatch is reported at the start of the offending element.
    """
    scanner.advance()  # [
    items: list[Value] = []
    while True:
        ch = scanner.skip_insignificant()
        if ch == "]":
            scanner.advance()
            return VArray(items)

        start = scanner.pos
        value = read_value(scanner)
        if items and family_of(value) is not family_of(items[0]):
            raise scanner.error(
                ErrorKind.TypeMismatchInArray,
                f"array mixes {family_of(items[0]).name} and {family_of(value).name} values",
                pos=start,
            )
        items.append(value)

        ch = scanner.skip_insignificant()
        if ch == ",":
            scanner.advance()
        elif ch == "]":
            scanner.advance()
            return VArray(items)
        elif ch == EOF:
            raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated array")
        else:
            raise scanner.error(
                ErrorKind.InvalidLiteral,
                f"expected ',' or ']' after array element, found {scanner.describe(ch)}",
            )


# ---------------------------------------------------------------------------
# Inline table
# ---------------------------------------------------------------------------

def _skip_inline_spaces(scanner: Scanner) -> str:
    ch = scanner.skip_spaces()
    if ch in NEWLINES:
        raise scanner.error(ErrorKind.InvalidLineBreak, "line break inside an inline table")
    if ch == "#":
        raise scanner.error(ErrorKind.InvalidLiteral, "comments are not allowed inside an inline table")
    return ch


def read_inline_table(scanner: Scanner) -> VTable:
    """``{ k = v, ... }`` on a single line; no trailing comma."""
    scanner.advance()  # {
    table = VTable()
    if _skip_inline_spaces(scanner) == "}":
        scanner.advance()
        return table

    sealed: set[int] = set()
    while True:
        key_pos = scanner.pos
        parts = read_key_path(scanner)
        ch = _skip_inline_spaces(scanner)
        if ch == EOF:
            raise scanner.error(ErrorKind.UnexpectedEndOfInput, "expected '=' after key")
        if ch != "=":
            raise scanner.error(ErrorKind.InvalidKey, "expected '=' after key")
        scanner.advance()
        _skip_inline_spaces(scanner)
        insert_value(scanner, table, parts, read_value(scanner), key_pos, sealed)

        ch = _skip_inline_spaces(scanner)
        if ch == "}":
            scanner.advance()
            return table
        if ch == EOF:
            raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated inline table")
        if ch != ",":
            raise scanner.error(
                ErrorKind.InvalidLiteral,
                f"expected ',' or '}}' in inline table, found {scanner.describe(ch)}",
            )
        scanner.advance()
        if _skip_inline_spaces(scanner) == "}":
            raise scanner.error(ErrorKind.InvalidLiteral, "trailing comma in inline table")
