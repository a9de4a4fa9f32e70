"""Lexical scanner: a cursor over an immutable text buffer."""

from __future__ import annotations

from .errors import ErrorKind, TomlDecodeError
from .position import Position, PositionIndex


EOF = ""  # end-of-input sentinel; never equal to a real character

SPACES = frozenset(" \t")
NEWLINES = frozenset("\r\n")


class Scanner:
    """Cursor over *text* shared by every reader of a single parse call.

    The cursor only moves forward, except through :meth:`unread`, which
    steps back exactly one character. Lookahead never needs more than
    three characters (``peek(0..2)`` or :meth:`lookahead`).
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self._positions = PositionIndex(text)

    # -- Lookahead --------------------------------------------------------

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        if i < len(self.text):
            return self.text[i]
        return EOF

    def lookahead(self, literal: str) -> bool:
        return self.text.startswith(literal, self.pos)

    # -- Consumption ------------------------------------------------------

    def advance(self) -> str:
        """Consume one character and return it (``EOF`` at the end)."""
        if self.pos >= len(self.text):
            return EOF
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def unread(self) -> None:
        if self.pos == 0:
            raise RuntimeError("unread() at start of input")
        self.pos -= 1

    def consume(self, literal: str) -> bool:
        """Consume *literal* if the buffer continues with it."""
        if self.lookahead(literal):
            self.pos += len(literal)
            return True
        return False

    def consume_until(self, stop: frozenset[str] | str) -> str:
        """Return the text up to the first character in *stop*.

        The cursor is left *at* the stop character (or at the end).
        """
        start = self.pos
        text = self.text
        end = len(text)
        while self.pos < end and text[self.pos] not in stop:
            self.pos += 1
        return text[start:self.pos]

    def consume_while(self, allowed: frozenset[str]) -> str:
        start = self.pos
        text = self.text
        end = len(text)
        while self.pos < end and text[self.pos] in allowed:
            self.pos += 1
        return text[start:self.pos]

    def skip_insignificant(
        self,
        allow_comments: bool = True,
        allow_newlines: bool = True,
    ) -> str:
        """Skip whitespace (and comments) and peek at what follows.

        Spaces and tabs are always skipped. Newlines are skipped only if
        *allow_newlines*; a ``#`` comment runs up to, not including, the
        end of its line. The returned character is not consumed.
        """
        while True:
            ch = self.peek()
            if ch in SPACES:
                self.pos += 1
            elif allow_newlines and ch in NEWLINES:
                self.pos += 1
            elif allow_comments and ch == "#":
                self.consume_until(NEWLINES)
            else:
                return ch

    def skip_spaces(self) -> str:
        return self.skip_insignificant(allow_comments=False, allow_newlines=False)

    # -- Diagnostics ------------------------------------------------------

    def locate(self, pos: int | None = None) -> Position:
        return self._positions.locate(self.pos if pos is None else pos)

    def error(self, kind: ErrorKind, message: str, pos: int | None = None) -> TomlDecodeError:
        """Build a decode error positioned at *pos* (default: the cursor)."""
        if pos is None:
            pos = self.pos
        where = self._positions.locate(pos)
        return TomlDecodeError(
            kind,
            message,
            doc=self.text,
            pos=pos,
            lineno=where.line,
            colno=where.column,
        )

    def describe(self, ch: str) -> str:
        """Human-readable name of a character for error messages."""
        if ch == EOF:
            return "end of input"
        if ch == "\n":
            return "line break"
        return repr(ch)
