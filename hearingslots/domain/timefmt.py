"""
Parsing and formatting of calendar dates and wall-clock times.

Dates travel as ``pendulum.Date``; times of day travel as integer minutes
since midnight so that buffered intervals may extend past either end of the
day without wrapping.
"""

import re
from datetime import date as _stdlib_date
from typing import Union

import pendulum
from pendulum import Date

from .exceptions import InvalidRequestError

DATE_DISPLAY_FORMAT = "DD/MM/YYYY"

# Tried in order; the first one is the format used by the court registry.
DATE_INPUT_FORMATS = ("DD/MM/YYYY", "DD-MM-YYYY", "YYYY-MM-DD")

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

DateLike = Union[Date, _stdlib_date, str]


def parse_date(value: DateLike, field: str = "date") -> Date:
    """
    Convert user input into a ``pendulum.Date``.

    Args:
        value: A date object or a string in one of ``DATE_INPUT_FORMATS``
        field: Field name used in the error message

    Raises:
        InvalidRequestError: If the string matches none of the formats
    """
    if isinstance(value, _stdlib_date):
        return pendulum.date(value.year, value.month, value.day)

    text = (value or "").strip()
    if not text:
        raise InvalidRequestError(f"{field} is required")

    for fmt in DATE_INPUT_FORMATS:
        try:
            return pendulum.from_format(text, fmt).date()
        except ValueError:
            continue

    raise InvalidRequestError(
        f"Invalid {field} '{text}'. Use DD/MM/YYYY or YYYY-MM-DD."
    )


def parse_time(value: Union[str, int], field: str = "time") -> int:
    """
    Convert ``HH:MM`` / ``HH:MM:SS`` into minutes since midnight.

    Seconds are accepted for compatibility with the registry's ``HH:mm:ss``
    output but must be zero.
    """
    if isinstance(value, int):
        minutes = value
    else:
        match = _TIME_PATTERN.match((value or "").strip())
        if not match:
            raise InvalidRequestError(f"Invalid {field} '{value}'. Use HH:MM.")
        hours, mins, secs = int(match.group(1)), int(match.group(2)), int(match.group(3) or 0)
        if hours > 23 or mins > 59 or secs != 0:
            raise InvalidRequestError(f"Invalid {field} '{value}'. Use HH:MM.")
        minutes = hours * 60 + mins

    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidRequestError(f"{field} must be within the day, got {minutes} minutes")
    return minutes


def format_date(day: Date) -> str:
    """Format a date as DD/MM/YYYY."""
    return pendulum.date(day.year, day.month, day.day).format(DATE_DISPLAY_FORMAT)


def format_time(minutes: int, with_seconds: bool = True) -> str:
    """
    Format minutes since midnight as HH:MM:SS (or HH:MM).

    Values outside the day are shown as signed offsets, which only happens
    for buffered intervals and never for slots.
    """
    sign = "-" if minutes < 0 else ""
    hours, mins = divmod(abs(minutes), 60)
    text = f"{sign}{hours:02d}:{mins:02d}"
    return f"{text}:00" if with_seconds else text
