"""
Domain models for hearing intervals, slots and requests.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import pendulum
from pendulum import Date

from .timefmt import format_date, format_time


HearingId = Union[int, str]


def same_id(a: Optional[HearingId], b: Optional[HearingId]) -> bool:
    """Compare ids that may arrive as int from JSON and as str from the CLI."""
    if a is None or b is None:
        return False
    return str(a).strip() == str(b).strip()


@dataclass(frozen=True, order=True)
class Interval:
    """
    An immutable time interval inside one calendar day.

    ``start`` and ``end`` are minutes since midnight of ``date``. Buffered
    intervals may fall below zero or above 24h; they never wrap into the
    neighbouring day.

    Invariant: start must be before end.
    """
    date: Date
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Start {format_time(self.start)} must be before end {format_time(self.end)}"
            )

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "Interval") -> bool:
        """
        Half-open overlap check on the same day.

        An interval ending exactly when the other starts does not overlap.
        """
        return self.date == other.date and self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return (
            f"{format_date(self.date)} "
            f"{format_time(self.start, with_seconds=False)} - {format_time(self.end, with_seconds=False)}"
        )


@dataclass(frozen=True)
class TimeSlot:
    """
    A bookable slot returned by the free-slot search.
    """
    date: Date
    start: int
    end: int

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the registry's wire format."""
        return {
            "date": format_date(self.date),
            "start_time": format_time(self.start),
            "end_time": format_time(self.end),
            "duration_minutes": self.duration_minutes,
        }

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: Weekday, DD/MM/YYYY | HH:MM - HH:MM (N min)
        """
        weekday_names = {
            0: "Segunda-feira",
            1: "Terça-feira",
            2: "Quarta-feira",
            3: "Quinta-feira",
            4: "Sexta-feira",
            5: "Sábado",
            6: "Domingo",
        }

        weekday = weekday_names[self.date.weekday()]
        start = format_time(self.start, with_seconds=False)
        end = format_time(self.end, with_seconds=False)

        return f"{weekday}, {format_date(self.date)} | {start} - {end} ({self.duration_minutes} min)"


@dataclass(frozen=True)
class Hearing:
    """
    An existing hearing as supplied by the registry. Read-only for the core.
    """
    id: HearingId
    date: Date
    start: int
    end: int
    court_id: HearingId
    process_number: str = ""
    court_name: str = ""
    judge_name: str = ""

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Hearing {self.id}: start {format_time(self.start)} "
                f"must be before end {format_time(self.end)}"
            )

    @classmethod
    def from_duration(
        cls,
        id: HearingId,
        date: Date,
        start: int,
        duration_minutes: int,
        court_id: HearingId,
        **extra: str,
    ) -> "Hearing":
        """Build a hearing whose end is derived as start + duration."""
        return cls(id=id, date=date, start=start, end=start + duration_minutes, court_id=court_id, **extra)

    @property
    def interval(self) -> Interval:
        return Interval(date=self.date, start=self.start, end=self.end)

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    def label(self) -> str:
        return f"process {self.process_number}" if self.process_number else f"hearing {self.id}"

    def format_times(self) -> str:
        return f"{format_time(self.start)} - {format_time(self.end)}"

    def to_conflict_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "process_number": self.process_number,
            "start_time": format_time(self.start),
            "end_time": format_time(self.end),
            "court_name": self.court_name,
            "judge_name": self.judge_name,
        }


@dataclass(frozen=True)
class SearchRequest:
    """
    Parameters of a free-slot search.

    Range and duration are optional at construction time so that missing
    values are reported by validation with a message naming the field.
    """
    date_start: Optional[Date] = None
    date_end: Optional[Date] = None
    duration_minutes: Optional[int] = None
    court_id: Optional[HearingId] = None
    buffer_before_minutes: int = 10
    buffer_after_minutes: int = 10
    grid_minutes: int = 15
    min_gap_minutes: int = 5

    @property
    def court_filter(self) -> Optional[HearingId]:
        """Court to filter on, or None for all courts (empty string included)."""
        if self.court_id is None or self.court_id == "":
            return None
        return self.court_id


@dataclass(frozen=True)
class ConflictQuery:
    """A proposed hearing to check against existing ones."""
    date: Date
    start: int
    duration_minutes: int
    court_id: HearingId
    exclude_hearing_id: Optional[HearingId] = None

    @property
    def interval(self) -> Interval:
        return Interval(date=self.date, start=self.start, end=self.start + self.duration_minutes)

    @classmethod
    def for_hearing(cls, hearing: Hearing, exclude_self: bool = False) -> "ConflictQuery":
        return cls(
            date=hearing.date,
            start=hearing.start,
            duration_minutes=hearing.duration_minutes,
            court_id=hearing.court_id,
            exclude_hearing_id=hearing.id if exclude_self else None,
        )


@dataclass(frozen=True)
class WorkSession:
    """A daily session during which hearings may be scheduled."""
    name: str
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Session '{self.name}' must start before it ends")


DEFAULT_SESSIONS = (
    WorkSession(name="morning", start=8 * 60, end=12 * 60),
    WorkSession(name="afternoon", start=13 * 60, end=18 * 60),
)


@dataclass
class WorkingCalendar:
    """
    Calendar rules for building work windows.
    """
    sessions: List[WorkSession] = field(default_factory=lambda: list(DEFAULT_SESSIONS))
    exclude_weekdays: List[int] = field(default_factory=lambda: [5, 6])  # 0=Monday, 6=Sunday

    def is_working_day(self, day: Date) -> bool:
        """Check if a given date is eligible for hearings."""
        return day.weekday() not in self.exclude_weekdays

    def get_windows_for_day(self, day: Date) -> List[Interval]:
        """
        Get the work windows for a specific day, ordered by start.
        Returns an empty list if it's not a working day.
        """
        if not self.is_working_day(day):
            return []

        ordered = sorted(self.sessions, key=lambda s: s.start)
        return [Interval(date=day, start=s.start, end=s.end) for s in ordered]

    def build_windows(self, date_start: Date, date_end: Date) -> List[Interval]:
        """
        Expand an inclusive date range into work windows.

        The caller rejects inverted ranges; here they simply produce nothing.
        """
        windows: List[Interval] = []
        current = pendulum.date(date_start.year, date_start.month, date_start.day)

        while current <= date_end:
            windows.extend(self.get_windows_for_day(current))
            current = current.add(days=1)

        return windows
