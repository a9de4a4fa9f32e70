"""Value types of the decoded document tree."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterator, Union


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class VInteger:
    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise OverflowError(f"integer {self.value} does not fit in 64 bits")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True)
class VFloat:
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


# ---------------------------------------------------------------------------
# Temporal values (distinct variants, never coerced into each other)
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VDate:
    value: datetime.date

    def __str__(self) -> str:
        return self.value.isoformat()


@dataclass(slots=True)
class VLocalDateTime:
    value: datetime.datetime  # naive

    def __str__(self) -> str:
        return self.value.isoformat()


@dataclass(slots=True)
class VZonedDateTime:
    value: datetime.datetime  # timezone-aware

    def __str__(self) -> str:
        return self.value.isoformat()


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VArray:
    items: list["Value"] = field(default_factory=list)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass(slots=True)
class VTable:
    entries: dict[str, "Value"] = field(default_factory=dict)

    def __getitem__(self, key: str) -> "Value":
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def get(self, key: str) -> "Value | None":
        return self.entries.get(key)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k} = {v}" for k, v in self.entries.items()) + "}"


@dataclass(slots=True)
class VTableArray:
    """Tables appended by repeated ``[[path]]`` headers."""

    tables: list[VTable] = field(default_factory=list)

    def __getitem__(self, index: int) -> VTable:
        return self.tables[index]

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self) -> Iterator[VTable]:
        return iter(self.tables)

    def __str__(self) -> str:
        return "[" + ", ".join(str(t) for t in self.tables) + "]"


Value = Union[
    VString, VInteger, VFloat, VBool,
    VDate, VLocalDateTime, VZonedDateTime,
    VArray, VTable, VTableArray,
]


# ---------------------------------------------------------------------------
# Variant families (array homogeneity)
# ---------------------------------------------------------------------------

class Family(Enum):
    String = auto()
    Integer = auto()
    Float = auto()
    Boolean = auto()
    Date = auto()
    LocalDateTime = auto()
    ZonedDateTime = auto()
    Array = auto()
    Table = auto()
    TableArray = auto()


_FAMILIES: dict[type, Family] = {
    VString: Family.String,
    VInteger: Family.Integer,
    VFloat: Family.Float,
    VBool: Family.Boolean,
    VDate: Family.Date,
    VLocalDateTime: Family.LocalDateTime,
    VZonedDateTime: Family.ZonedDateTime,
    VArray: Family.Array,
    VTable: Family.Table,
    VTableArray: Family.TableArray,
}


def family_of(value: Value) -> Family:
    """Return the variant family of *value*.

    Integers and floats are separate families; every array is in the
    ``Array`` family whatever its element type.
    """
    try:
        return _FAMILIES[type(value)]
    except KeyError:
        raise TypeError(f"not a document value: {value!r}") from None


# ---------------------------------------------------------------------------
# Conversion to plain Python objects
# ---------------------------------------------------------------------------

def to_python(value: Value) -> Any:
    """Unwrap a document value into builtin / ``datetime`` objects.

    - VTable       → dict
    - VArray       → list
    - VTableArray  → list of dict
    - scalars      → their payload
    """
    if isinstance(value, VTable):
        return {k: to_python(v) for k, v in value.entries.items()}
    if isinstance(value, VTableArray):
        return [to_python(t) for t in value.tables]
    if isinstance(value, VArray):
        return [to_python(v) for v in value.items]
    if isinstance(value, (VString, VInteger, VFloat, VBool, VDate, VLocalDateTime, VZonedDateTime)):
        return value.value
    raise TypeError(f"not a document value: {value!r}")
