"""
Shared helpers for the test suite.
"""

import pendulum

from hearingslots.domain.models import Hearing, Interval
from hearingslots.domain.timefmt import parse_time

MONDAY = pendulum.date(2024, 11, 25)
TUESDAY = pendulum.date(2024, 11, 26)


def t(text: str) -> int:
    """Shorthand: 'HH:MM' -> minutes since midnight."""
    return parse_time(text)


def interval(start: str, end: str, day=MONDAY) -> Interval:
    return Interval(date=day, start=t(start), end=t(end))


def hearing(id, start: str, end: str, court_id=1, day=MONDAY, **extra) -> Hearing:
    return Hearing(id=id, date=day, start=t(start), end=t(end), court_id=court_id, **extra)
