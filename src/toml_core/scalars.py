"""Boolean and number-or-date readers."""

from __future__ import annotations

import datetime
import re

from .errors import ErrorKind
from .scanner import EOF, Scanner
from .values import (
    INT64_MAX,
    INT64_MIN,
    Value,
    VBool,
    VDate,
    VFloat,
    VInteger,
    VLocalDateTime,
    VZonedDateTime,
)


# Characters that end a bare scalar token. The terminator is not consumed.
VALUE_TERMINATORS = frozenset(", \t\r\n]}#")

_INTEGER_RE = re.compile(r"[+-]?(?:0|[1-9](?:_?[0-9])*)")
_FLOAT_RE = re.compile(
    r"[+-]?(?:0|[1-9](?:_?[0-9])*)"
    r"(?:\.[0-9](?:_?[0-9])*)?"
    r"(?:[eE][+-]?[0-9](?:_?[0-9])*)?"
)

_DATE = r"([0-9]{4})-([0-9]{2})-([0-9]{2})"
_TIME = r"([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]+))?"
_DATE_RE = re.compile(_DATE)
_LOCAL_DATETIME_RE = re.compile(_DATE + "T" + _TIME)
_OFFSET_DATETIME_RE = re.compile(_DATE + "T" + _TIME + r"(Z|[+-][0-9]{2}:[0-9]{2})")


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------

def read_boolean(scanner: Scanner) -> VBool:
    """Match ``true`` / ``false`` in full; any other tail is an error."""
    start = scanner.pos
    for word, value in (("true", True), ("false", False)):
        if scanner.lookahead(word):
            after = scanner.peek(len(word))
            if after == EOF or after in VALUE_TERMINATORS:
                scanner.pos += len(word)
                return VBool(value)
            break
    token = scanner.consume_until(VALUE_TERMINATORS)
    raise scanner.error(ErrorKind.InvalidLiteral, f"invalid value {token!r}", pos=start)


# ---------------------------------------------------------------------------
# Number or date
# ---------------------------------------------------------------------------

def classify_number(token: str) -> tuple[bool, bool, bool]:
    """Return the surviving ``(integer, float, datetime)`` candidacies.

    - ``:`` ``T`` ``Z``            → not a number
    - ``e`` / ``E``                → not an integer, not a date
    - ``.``                        → not an integer; not a date unless a
                                     ``:`` came first (fractional seconds)
    - ``-`` not at the start and not after an exponent → not a number
    - ``_``                        → not a date
    """
    maybe_integer = maybe_float = maybe_date = True
    seen_colon = False
    for i, ch in enumerate(token):
        if ch in ":TZ":
            maybe_integer = maybe_float = False
            if ch == ":":
                seen_colon = True
        elif ch in "eE":
            maybe_integer = maybe_date = False
        elif ch == ".":
            maybe_integer = False
            if not seen_colon:
                maybe_date = False
        elif ch == "-" and i > 0 and token[i - 1] not in "eE":
            maybe_integer = maybe_float = False
        elif ch == "_":
            maybe_date = False
    return maybe_integer, maybe_float, maybe_date


def read_number_or_date(scanner: Scanner) -> Value:
    """Read an integer, float or datetime literal.

    The token runs up to the next value terminator, which is left in
    place. Failures report the position of the token's first character.
    """
    start = scanner.pos
    token = scanner.consume_until(VALUE_TERMINATORS)
    maybe_integer, maybe_float, maybe_date = classify_number(token)

    if maybe_integer:
        value = _parse_integer(token)
    elif maybe_float:
        value = _parse_float(token)
    elif maybe_date:
        value = parse_datetime(token)
    else:
        value = None

    if value is None:
        raise scanner.error(ErrorKind.InvalidLiteral, f"invalid value {token!r}", pos=start)
    return value


def _parse_integer(token: str) -> VInteger | None:
    if not _INTEGER_RE.fullmatch(token):
        return None
    number = int(token.replace("_", ""))
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return VInteger(number)


def _parse_float(token: str) -> VFloat | None:
    if not _FLOAT_RE.fullmatch(token):
        return None
    return VFloat(float(token.replace("_", "")))


# ---------------------------------------------------------------------------
# Datetime grammars, tried in order: date, local date-time, offset date-time
# ---------------------------------------------------------------------------

def parse_datetime(token: str) -> VDate | VLocalDateTime | VZonedDateTime | None:
    """Parse *token* against the three temporal grammars.

    Returns None when no grammar matches or the fields are out of range
    (e.g. month 13).
    """
    try:
        m = _DATE_RE.fullmatch(token)
        if m:
            return VDate(datetime.date(*(int(g) for g in m.groups())))
        m = _LOCAL_DATETIME_RE.fullmatch(token)
        if m:
            return VLocalDateTime(_build_datetime(m.groups(), None))
        m = _OFFSET_DATETIME_RE.fullmatch(token)
        if m:
            *fields, offset = m.groups()
            return VZonedDateTime(_build_datetime(fields, _parse_offset(offset)))
    except ValueError:
        return None
    return None


def _build_datetime(fields, tz: datetime.tzinfo | None) -> datetime.datetime:
    year, month, day, hour, minute, second, fraction = fields
    # Precision beyond microseconds is truncated
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return datetime.datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second), micro,
        tzinfo=tz,
    )


def _parse_offset(offset: str) -> datetime.timezone:
    if offset == "Z":
        return datetime.timezone.utc
    sign = -1 if offset[0] == "-" else 1
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if minutes >= 60:
        raise ValueError(f"invalid offset {offset}")
    return datetime.timezone(sign * datetime.timedelta(hours=hours, minutes=minutes))
