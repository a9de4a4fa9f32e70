"""Tests for the quoted string readers."""

import pytest

from toml_core.errors import ErrorKind, TomlDecodeError
from toml_core.scanner import Scanner
from toml_core.strings import (
    read_basic_string,
    read_literal_string,
    read_multiline_basic_string,
    read_multiline_literal_string,
    read_string,
)
from toml_core.values import VString


def _read(reader, text):
    s = Scanner(text)
    return reader(s), s


# ---------------------------------------------------------------------------
# Basic strings
# ---------------------------------------------------------------------------

def test_basic_plain():
    value, s = _read(read_basic_string, '"hello world" tail')
    assert value == "hello world"
    assert s.peek() == " "

def test_basic_empty():
    value, _ = _read(read_basic_string, '""')
    assert value == ""

@pytest.mark.parametrize("escape, expected", [
    (r"\b", "\b"),
    (r"\t", "\t"),
    (r"\n", "\n"),
    (r"\f", "\f"),
    (r"\r", "\r"),
    (r"\"", '"'),
    (r"\\", "\\"),
    (r"\u00E9", "é"),
    (r"\U0001F600", "\U0001F600"),
])
def test_basic_escapes(escape, expected):
    value, _ = _read(read_basic_string, f'"{escape}"')
    assert value == expected

def test_basic_escape_decodes_to_one_character():
    value, _ = _read(read_basic_string, r'"a\u0041b"')
    assert value == "aAb"

def test_basic_invalid_escape():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, r'"bad \q escape"')
    assert exc.value.kind is ErrorKind.InvalidEscapeSequence

def test_basic_invalid_unicode_digits():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, r'"\u12G4"')
    assert exc.value.kind is ErrorKind.InvalidEscapeSequence

def test_basic_surrogate_rejected():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, r'"\uD800"')
    assert exc.value.kind is ErrorKind.InvalidEscapeSequence

def test_basic_codepoint_out_of_range():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, r'"\U00110000"')
    assert exc.value.kind is ErrorKind.InvalidEscapeSequence

def test_basic_truncated_unicode_escape():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, r'"\u12')
    assert exc.value.kind is ErrorKind.UnexpectedEndOfInput

def test_basic_raw_newline_rejected():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, '"abc\ndef"')
    assert exc.value.kind is ErrorKind.InvalidLineBreak
    assert (exc.value.lineno, exc.value.colno) == (1, 5)

def test_basic_unterminated():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, '"abc')
    assert exc.value.kind is ErrorKind.UnexpectedEndOfInput

def test_basic_eof_after_backslash():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, '"abc\\')
    assert exc.value.kind is ErrorKind.UnexpectedEndOfInput

def test_basic_tab_allowed_raw():
    value, _ = _read(read_basic_string, '"a\tb"')
    assert value == "a\tb"

@pytest.mark.parametrize("control", ["\x00", "\x1b", "\x0c"])
def test_basic_raw_control_character_rejected(control):
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_basic_string, f'"a{control}b"')
    assert exc.value.kind is ErrorKind.InvalidLiteral
    assert (exc.value.lineno, exc.value.colno) == (1, 3)


# ---------------------------------------------------------------------------
# Multi-line basic strings
# ---------------------------------------------------------------------------

def test_multiline_basic_strips_first_newline():
    value, _ = _read(read_multiline_basic_string, '"""\nRoses\nViolets"""')
    assert value == "Roses\nViolets"

def test_multiline_basic_strips_crlf():
    value, _ = _read(read_multiline_basic_string, '"""\r\nline"""')
    assert value == "line"

def test_multiline_basic_keeps_later_newlines():
    value, _ = _read(read_multiline_basic_string, '"""a\n\nb\n"""')
    assert value == "a\n\nb\n"

def test_multiline_basic_escapes_apply():
    value, _ = _read(read_multiline_basic_string, r'"""tab\there \"q\""""')
    assert value == 'tab\there "q"'

def test_multiline_basic_embedded_quotes():
    value, _ = _read(read_multiline_basic_string, '"""say "hi" ""ok"" """')
    assert value == 'say "hi" ""ok"" '

def test_multiline_basic_line_ending_backslash():
    text = '"""\nThe quick \\\n\n    brown \\\n   fox."""'
    value, _ = _read(read_multiline_basic_string, text)
    assert value == "The quick brown fox."

def test_multiline_basic_backslash_with_trailing_spaces():
    value, _ = _read(read_multiline_basic_string, '"""a \\  \n  b"""')
    assert value == "a b"

def test_multiline_basic_unterminated():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_multiline_basic_string, '"""never\nends""')
    assert exc.value.kind is ErrorKind.UnexpectedEndOfInput

def test_multiline_basic_invalid_escape():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_multiline_basic_string, '"""\\x"""')
    assert exc.value.kind is ErrorKind.InvalidEscapeSequence

def test_multiline_basic_raw_control_character_rejected():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_multiline_basic_string, '"""a\nb\x07c"""')
    assert exc.value.kind is ErrorKind.InvalidLiteral
    assert (exc.value.lineno, exc.value.colno) == (2, 2)


# ---------------------------------------------------------------------------
# Literal strings
# ---------------------------------------------------------------------------

def test_literal_no_escapes():
    value, _ = _read(read_literal_string, r"'C:\Users\nodejs\templates'")
    assert value == r"C:\Users\nodejs\templates"

def test_literal_raw_newline_rejected():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_literal_string, "'abc\ndef'")
    assert exc.value.kind is ErrorKind.InvalidLineBreak

def test_literal_unterminated():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_literal_string, "'abc")
    assert exc.value.kind is ErrorKind.UnexpectedEndOfInput

def test_multiline_literal():
    value, s = _read(read_multiline_literal_string, "'''\nI [dw]on't need \\d{2} apples'''x")
    assert value == "I [dw]on't need \\d{2} apples"
    assert s.peek() == "x"

def test_multiline_literal_keeps_newlines():
    value, _ = _read(read_multiline_literal_string, "'''\nfirst\n  second\n'''")
    assert value == "first\n  second\n"

def test_multiline_literal_unterminated():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_multiline_literal_string, "'''abc''")
    assert exc.value.kind is ErrorKind.UnexpectedEndOfInput

def test_literal_raw_control_character_rejected():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_literal_string, "'ab\x00'")
    assert exc.value.kind is ErrorKind.InvalidLiteral
    assert exc.value.colno == 4

def test_multiline_literal_raw_control_character_rejected():
    with pytest.raises(TomlDecodeError) as exc:
        _read(read_multiline_literal_string, "'''\nok\n\x7f\x01'''")
    assert exc.value.kind is ErrorKind.InvalidLiteral
    assert (exc.value.lineno, exc.value.colno) == (3, 2)


# ---------------------------------------------------------------------------
# read_string dispatch
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text, expected", [
    ('"basic"', "basic"),
    ('"""multi"""', "multi"),
    ("'literal'", "literal"),
    ("'''multi literal'''", "multi literal"),
    ('""', ""),
    ("''", ""),
])
def test_read_string_dispatch(text, expected):
    value, s = _read(read_string, text)
    assert value == VString(expected)
    assert s.at_end
