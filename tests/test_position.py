"""Tests for toml_core.position."""

from toml_core.position import Position, PositionIndex


def test_first_character():
    assert PositionIndex("abc").locate(0) == Position(1, 1)

def test_column_within_first_line():
    assert PositionIndex("abc").locate(2) == Position(1, 3)

def test_after_newline():
    idx = PositionIndex("ab\ncd\nef")
    assert idx.locate(3) == Position(2, 1)
    assert idx.locate(7) == Position(3, 2)

def test_newline_belongs_to_its_line():
    idx = PositionIndex("ab\ncd")
    assert idx.locate(2) == Position(1, 3)

def test_offset_past_end_is_clamped():
    idx = PositionIndex("ab\n")
    assert idx.locate(100) == Position(2, 1)

def test_empty_buffer():
    idx = PositionIndex("")
    assert idx.line_count == 1
    assert idx.locate(0) == Position(1, 1)

def test_line_count():
    assert PositionIndex("a\nb\nc\n").line_count == 4

def test_str():
    assert str(Position(3, 7)) == "3:7"
