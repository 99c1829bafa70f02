"""
Core business logic for calculating free hearing slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from typing import Iterable, List

from pendulum import Date

from .intervals import expand_buffers, merge_intervals, slice_slots, subtract_occupied
from .models import Hearing, Interval, TimeSlot, WorkingCalendar

logger = logging.getLogger(__name__)


class SlotCalculator:
    """
    Calculates bookable hearing slots from existing hearings and the court calendar.

    Algorithm:
    1. Build work windows (morning/afternoon sessions) for the date range
    2. Turn existing hearings into occupied intervals, inflated by buffers
    3. Merge overlapping occupied intervals per day
    4. Subtract occupied time from each window to get free intervals
    5. Slice free intervals into grid-aligned slots of the requested duration
    6. Return slots ordered by date and start time
    """

    def __init__(self, calendar: WorkingCalendar):
        self.calendar = calendar

    def find_available_slots(
        self,
        date_start: Date,
        date_end: Date,
        hearings: Iterable[Hearing],
        duration_minutes: int,
        buffer_before_minutes: int = 10,
        buffer_after_minutes: int = 10,
        grid_minutes: int = 15,
        min_gap_minutes: int = 5
    ) -> List[TimeSlot]:
        """
        Find all free slots in the inclusive date range.

        Args:
            date_start: First day of the search
            date_end: Last day of the search
            hearings: Existing hearings already filtered by court
            duration_minutes: Length of each slot
            buffer_before_minutes: Time kept free before every hearing
            buffer_after_minutes: Time kept free after every hearing
            grid_minutes: Slot starts are rounded up to this grid (0 = off)
            min_gap_minutes: Minimum spacing between consecutive slots

        Returns:
            List of TimeSlot objects sorted by (date, start)
        """
        windows = self.calendar.build_windows(date_start, date_end)
        logger.debug("Built %d work windows", len(windows))

        if not windows:
            return []

        occupied = [hearing.interval for hearing in hearings]
        logger.debug("Found %d occupied intervals", len(occupied))

        merged = merge_intervals(
            expand_buffers(occupied, buffer_before_minutes, buffer_after_minutes)
        )
        logger.debug("After merging: %d occupied intervals", len(merged))

        free = self._free_intervals(windows, merged)
        logger.debug("Found %d free intervals", len(free))

        slots: List[TimeSlot] = []
        for interval in free:
            slots.extend(
                slice_slots(
                    interval,
                    duration_minutes=duration_minutes,
                    grid_minutes=grid_minutes,
                    min_gap_minutes=min_gap_minutes
                )
            )

        slots.sort(key=lambda s: (s.date, s.start))
        logger.debug("Calculated %d available slots", len(slots))
        return slots

    def _free_intervals(
        self,
        windows: List[Interval],
        occupied: List[Interval]
    ) -> List[Interval]:
        """
        Subtract occupied time from every window.

        Occupied intervals are bucketed by date first so each window only
        scans its own day.
        """
        by_day: dict = {}
        for interval in occupied:
            by_day.setdefault(interval.date, []).append(interval)

        free: List[Interval] = []
        for window in windows:
            free.extend(subtract_occupied(window, by_day.get(window.date, [])))

        return free
