"""Coercion of raw worksheet cell values into the declared column types.

Each parser returns a ``(value, error)`` pair. Blank cells never reach the
parsers: callers drop them first so that required-ness is reported once by the
row validator rather than by every type parser.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable

from openpyxl.utils.datetime import WINDOWS_EPOCH, from_excel

from fleetdata.domain.entities import (
    COLUMN_TYPE_DATE,
    COLUMN_TYPE_ENUM,
    COLUMN_TYPE_NUMBER,
    COLUMN_TYPE_STRING,
    TemplateColumn,
)
from fleetdata.utils import ensure_app_naive_datetime

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ].+)?$")
_YMD_PATTERN = re.compile(
    r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:\s+(\d{1,2}):(\d{2}))?$"
)
_SLASH_PATTERN = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:\s+(\d{1,2}):(\d{2}))?$"
)


def is_blank(value: Any) -> bool:
    """Return ``True`` for cells that carry no data."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def _build_datetime(
    year: str, month: str, day: str, hour: str | None, minute: str | None
) -> datetime | None:
    try:
        return datetime(
            int(year), int(month), int(day), int(hour or 0), int(minute or 0)
        )
    except ValueError:
        return None


def parse_date_text(text: str) -> datetime | None:
    """Parse ``text`` trying ISO, ``YYYY-MM-DD``, ``MM/DD/YYYY`` then ``DD/MM/YYYY``.

    Impossible calendar dates (``2024-04-31``) never roll over into the next
    month: every candidate is built through :class:`datetime`, which rejects
    them, and parsing moves on to the next format.
    """

    candidate = text.strip()
    if _ISO_PREFIX.match(candidate):
        try:
            return ensure_app_naive_datetime(datetime.fromisoformat(candidate))
        except ValueError:
            pass

    match = _YMD_PATTERN.match(candidate)
    if match:
        year, month, day, hour, minute = match.groups()
        parsed = _build_datetime(year, month, day, hour, minute)
        if parsed is not None:
            return parsed

    match = _SLASH_PATTERN.match(candidate)
    if match:
        first, second, year, hour, minute = match.groups()
        month_first = _build_datetime(year, first, second, hour, minute)
        if month_first is not None:
            return month_first
        return _build_datetime(year, second, first, hour, minute)

    return None


def _format_time(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def _parse_string(
    value: Any, column: TemplateColumn, epoch: datetime
) -> tuple[Any, str | None]:
    if isinstance(value, time):
        return _format_time(value), None
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.strftime("%Y-%m-%d"), None
        return value.strftime("%Y-%m-%d %H:%M"), None
    if isinstance(value, float) and value.is_integer():
        return str(int(value)), None
    return str(value).strip(), None


def _parse_number(
    value: Any, column: TemplateColumn, epoch: datetime
) -> tuple[Any, str | None]:
    error = f"Invalid number: {value}"
    if isinstance(value, bool):
        return None, error
    if isinstance(value, int):
        return value, None
    if isinstance(value, (float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None, error
    else:
        return None, error
    if not math.isfinite(number):
        return None, error
    if number.is_integer():
        return int(number), None
    return number, None


def _parse_date(
    value: Any, column: TemplateColumn, epoch: datetime
) -> tuple[Any, str | None]:
    error = f"Invalid date: {value}"
    if isinstance(value, datetime):
        return ensure_app_naive_datetime(value), None
    if isinstance(value, date):
        return datetime.combine(value, time()), None
    if isinstance(value, bool):
        return None, error
    if isinstance(value, (int, float)):
        if value < 1:
            return None, error
        try:
            converted = from_excel(value, epoch=epoch)
        except (OverflowError, ValueError):
            return None, error
        if not isinstance(converted, datetime):
            return None, error
        return converted, None
    parsed = parse_date_text(str(value))
    if parsed is None:
        return None, error
    return parsed, None


def _parse_enum(
    value: Any, column: TemplateColumn, epoch: datetime
) -> tuple[Any, str | None]:
    text = str(value).strip()
    if text in column.enum_values:
        return text, None
    allowed = ", ".join(column.enum_values)
    return None, f"Invalid value: {text}. Allowed: {allowed}"


_TypeParser = Callable[[Any, TemplateColumn, datetime], tuple[Any, str | None]]

_TYPE_PARSERS: dict[str, _TypeParser] = {
    COLUMN_TYPE_STRING: _parse_string,
    COLUMN_TYPE_NUMBER: _parse_number,
    COLUMN_TYPE_DATE: _parse_date,
    COLUMN_TYPE_ENUM: _parse_enum,
}


def coerce_cell(
    value: Any, column: TemplateColumn, *, epoch: datetime = WINDOWS_EPOCH
) -> tuple[Any, str | None]:
    """Convert ``value`` to ``column``'s type.

    ``epoch`` is the day-count origin of the workbook the value came from and is
    only used for serial date numbers.
    """

    if is_blank(value):
        return None, None
    return _TYPE_PARSERS[column.type](value, column, epoch)


__all__ = ["coerce_cell", "is_blank", "parse_date_text"]
