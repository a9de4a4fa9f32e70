"""Quoted string readers: basic, literal and their multi-line forms.

Every reader is entered with the scanner positioned *on* the opening
quote(s) and returns with the cursor just past the closing quote(s).
"""

from __future__ import annotations

import string

from .errors import ErrorKind
from .scanner import EOF, NEWLINES, SPACES, Scanner
from .values import VString


_ESCAPES: dict[str, str] = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

_UNICODE_ESCAPE_WIDTH: dict[str, int] = {"u": 4, "U": 8}

_HEX_DIGITS = frozenset(string.hexdigits)

# U+0000 to U+001F must not appear raw in any string; tab is the exception.
_CONTROL_CHARS = frozenset(map(chr, range(0x20))) - {"\t"}


# ---------------------------------------------------------------------------
# Escape handling
# ---------------------------------------------------------------------------

def read_escape(scanner: Scanner) -> str:
    """Decode one escape sequence; the backslash is already consumed."""
    start = scanner.pos - 1
    ch = scanner.advance()
    if ch == EOF:
        raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated escape sequence")
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ch in _UNICODE_ESCAPE_WIDTH:
        width = _UNICODE_ESCAPE_WIDTH[ch]
        digits = scanner.text[scanner.pos:scanner.pos + width]
        if len(digits) < width:
            raise scanner.error(
                ErrorKind.UnexpectedEndOfInput,
                f"\\{ch} escape needs {width} hex digits",
            )
        if not all(d in _HEX_DIGITS for d in digits):
            raise scanner.error(
                ErrorKind.InvalidEscapeSequence,
                f"invalid unicode escape \\{ch}{digits}",
                pos=start,
            )
        codepoint = int(digits, 16)
        if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
            raise scanner.error(
                ErrorKind.InvalidEscapeSequence,
                f"\\{ch}{digits} is not a unicode scalar value",
                pos=start,
            )
        scanner.pos += width
        return chr(codepoint)
    raise scanner.error(
        ErrorKind.InvalidEscapeSequence,
        f"invalid escape sequence \\{ch}",
        pos=start,
    )


def _skip_line_continuation(scanner: Scanner) -> bool:
    """Handle a line-ending backslash inside a multi-line basic string.

    Called right after the backslash. If only spaces/tabs separate it
    from a line break, consume all whitespace and line breaks that
    follow and return True; otherwise leave the cursor untouched.
    """
    offset = 0
    while scanner.peek(offset) in SPACES:
        offset += 1
    if scanner.peek(offset) not in NEWLINES:
        return False
    scanner.pos += offset
    scanner.skip_insignificant(allow_comments=False)
    return True


def _check_raw_text(scanner: Scanner, text: str, start: int, allowed: frozenset[str] = frozenset()) -> None:
    """Reject a raw control character in *text*, which begins at offset *start*."""
    for i, ch in enumerate(text):
        if ch in _CONTROL_CHARS and ch not in allowed:
            raise scanner.error(
                ErrorKind.InvalidLiteral,
                f"control character U+{ord(ch):04X} must not appear raw in a string",
                pos=start + i,
            )


def _strip_leading_newline(scanner: Scanner) -> None:
    if not scanner.consume("\r\n"):
        scanner.consume("\n")


# ---------------------------------------------------------------------------
# Basic strings
# ---------------------------------------------------------------------------

def read_basic_string(scanner: Scanner) -> str:
    """``"..."``: escapes decoded, raw line breaks rejected."""
    scanner.advance()  # opening "
    parts: list[str] = []
    while True:
        ch = scanner.advance()
        if ch == EOF:
            raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated basic string")
        if ch in NEWLINES:
            scanner.unread()
            raise scanner.error(ErrorKind.InvalidLineBreak, "line break in a single-line basic string")
        if ch == '"':
            return "".join(parts)
        if ch == "\\":
            parts.append(read_escape(scanner))
        else:
            _check_raw_text(scanner, ch, scanner.pos - 1)
            parts.append(ch)


def read_multiline_basic_string(scanner: Scanner) -> str:
    """``\"\"\"...\"\"\"``: first newline stripped, escapes decoded."""
    scanner.consume('"""')
    _strip_leading_newline(scanner)
    parts: list[str] = []
    while True:
        if scanner.consume('"""'):
            return "".join(parts)
        ch = scanner.advance()
        if ch == EOF:
            raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated multi-line basic string")
        if ch == "\\":
            if not _skip_line_continuation(scanner):
                parts.append(read_escape(scanner))
        else:
            _check_raw_text(scanner, ch, scanner.pos - 1, NEWLINES)
            parts.append(ch)


# ---------------------------------------------------------------------------
# Literal strings
# ---------------------------------------------------------------------------

def read_literal_string(scanner: Scanner) -> str:
    """``'...'``: taken verbatim up to the next single quote."""
    scanner.advance()  # opening '
    start = scanner.pos
    content = scanner.consume_until("'\r\n")
    ch = scanner.peek()
    if ch == EOF:
        raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated literal string")
    if ch != "'":
        raise scanner.error(ErrorKind.InvalidLineBreak, "line break in a single-line literal string")
    _check_raw_text(scanner, content, start)
    scanner.advance()
    return content


def read_multiline_literal_string(scanner: Scanner) -> str:
    """``'''...'''``: verbatim, first newline stripped."""
    scanner.consume("'''")
    _strip_leading_newline(scanner)
    end = scanner.text.find("'''", scanner.pos)
    if end == -1:
        scanner.pos = len(scanner.text)
        raise scanner.error(ErrorKind.UnexpectedEndOfInput, "unterminated multi-line literal string")
    content = scanner.text[scanner.pos:end]
    _check_raw_text(scanner, content, scanner.pos, NEWLINES)
    scanner.pos = end + 3
    return content


# ---------------------------------------------------------------------------
# Dispatch on the quote style
# ---------------------------------------------------------------------------

def read_string(scanner: Scanner) -> VString:
    if scanner.lookahead('"""'):
        return VString(read_multiline_basic_string(scanner))
    if scanner.peek() == '"':
        return VString(read_basic_string(scanner))
    if scanner.lookahead("'''"):
        return VString(read_multiline_literal_string(scanner))
    return VString(read_literal_string(scanner))
