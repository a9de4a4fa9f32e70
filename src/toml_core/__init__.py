"""TOML Core: decoder from TOML text to a typed document tree."""

from .assembler import DocumentAssembler, load, loads, read
from .errors import ErrorKind, TomlDecodeError
from .position import Position
from .values import (
    Family,
    Value,
    VArray,
    VBool,
    VDate,
    VFloat,
    VInteger,
    VLocalDateTime,
    VString,
    VTable,
    VTableArray,
    VZonedDateTime,
    family_of,
    to_python,
)

__all__ = [
    "read",
    "loads",
    "load",
    "DocumentAssembler",
    "ErrorKind",
    "TomlDecodeError",
    "Position",
    "Family",
    "Value",
    "VArray",
    "VBool",
    "VDate",
    "VFloat",
    "VInteger",
    "VLocalDateTime",
    "VString",
    "VTable",
    "VTableArray",
    "VZonedDateTime",
    "family_of",
    "to_python",
]
