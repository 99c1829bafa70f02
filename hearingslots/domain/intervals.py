"""
Pure interval arithmetic shared by the free-slot search and conflict checks.

Every function takes immutable ``Interval`` values and returns new lists;
nothing is mutated in place.
"""

from itertools import groupby
from typing import Iterable, Iterator, List

from .models import Interval, TimeSlot


def overlaps(a: Interval, b: Interval) -> bool:
    """
    Half-open overlap: ``a.start < b.end and b.start < a.end`` on the same day.

    Touching intervals (one ends when the other starts) do not overlap.
    """
    return a.overlaps(b)


def expand_buffers(
    intervals: Iterable[Interval],
    buffer_before_minutes: int,
    buffer_after_minutes: int
) -> List[Interval]:
    """
    Inflate each occupied interval by the before/after buffers.

    Example (10/10): 09:00-10:00 -> 08:50-10:10
    """
    return [
        Interval(
            date=interval.date,
            start=interval.start - buffer_before_minutes,
            end=interval.end + buffer_after_minutes
        )
        for interval in intervals
    ]


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """
    Merge overlapping or touching intervals, per day.

    Example: [09:00-10:00, 10:00-11:00, 10:30-12:00] -> [09:00-12:00]

    Returns the merged intervals sorted by (date, start).
    """
    ordered = sorted(intervals, key=lambda i: (i.date, i.start))
    merged: List[Interval] = []

    for _, day_intervals in groupby(ordered, key=lambda i: i.date):
        day_iter = iter(day_intervals)
        current = next(day_iter)

        for candidate in day_iter:
            if candidate.start <= current.end:
                # touching intervals merge too
                current = Interval(
                    date=current.date,
                    start=current.start,
                    end=max(current.end, candidate.end)
                )
            else:
                merged.append(current)
                current = candidate

        merged.append(current)

    return merged


def subtract_occupied(window: Interval, occupied: Iterable[Interval]) -> List[Interval]:
    """
    Subtract occupied intervals from a work window, yielding free intervals.

    Only occupied intervals on the window's date are considered. Zero-length
    remainders are dropped.

    Example:
    Window: 08:00 - 12:00
    Occupied: [08:50-10:10]
    Result: [08:00-08:50, 10:10-12:00]
    """
    free: List[Interval] = []
    cursor = window.start

    same_day = sorted(
        (o for o in occupied if o.date == window.date),
        key=lambda o: o.start
    )

    for busy in same_day:
        if cursor >= window.end:
            break

        gap_end = min(busy.start, window.end)
        if gap_end > cursor:
            free.append(Interval(date=window.date, start=cursor, end=gap_end))

        cursor = max(cursor, busy.end)

    if cursor < window.end:
        free.append(Interval(date=window.date, start=cursor, end=window.end))

    return free


def round_up_to_grid(minutes: int, grid_minutes: int) -> int:
    """
    Round minutes-since-midnight up to the next multiple of the grid.

    A grid of 0 disables rounding. Values already on the grid are unchanged.
    """
    if grid_minutes == 0:
        return minutes

    remainder = minutes % grid_minutes
    if remainder == 0:
        return minutes
    return minutes + (grid_minutes - remainder)


def slice_slots(
    free: Interval,
    duration_minutes: int,
    grid_minutes: int = 0,
    min_gap_minutes: int = 0
) -> Iterator[TimeSlot]:
    """
    Cut a free interval into fixed-duration slots.

    Slot starts are rounded up to the grid, consecutive slots are at least
    ``min_gap_minutes`` apart, and the last slot never ends after
    ``free.end``. The sequence is finite because the cursor advances by at
    least ``duration_minutes`` on every step.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be greater than zero")

    cursor = round_up_to_grid(free.start, grid_minutes)

    while True:
        slot_end = cursor + duration_minutes
        if slot_end > free.end:
            return

        yield TimeSlot(date=free.date, start=cursor, end=slot_end)

        cursor = round_up_to_grid(cursor + duration_minutes + min_gap_minutes, grid_minutes)
