"""Error kinds and the decode error raised by every reader."""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    UnexpectedEndOfInput = auto()
    InvalidEscapeSequence = auto()
    InvalidLineBreak = auto()     # raw newline inside a basic string / inline table
    InvalidLiteral = auto()
    InvalidKey = auto()
    MalformedHeader = auto()
    TypeMismatchInArray = auto()
    DuplicateKey = auto()
    DuplicateTable = auto()
    StructuralConflict = auto()   # key path runs through a non-table value


class TomlDecodeError(ValueError):
    """Raised when a document cannot be decoded.

    ``pos`` is the 0-based offset into ``doc``; ``lineno`` and ``colno``
    are 1-based and point at or just after the fault.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        doc: str | None = None,
        pos: int | None = None,
        lineno: int | None = None,
        colno: int | None = None,
    ) -> None:
        if lineno is not None and colno is not None:
            full = f"{message} (at line {lineno}, column {colno})"
        else:
            full = message
        super().__init__(full)
        self.kind = kind
        self.msg = message
        self.doc = doc
        self.pos = pos
        self.lineno = lineno
        self.colno = colno
