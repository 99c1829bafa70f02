"""
Tests for slot calculator.
"""

import pendulum

from hearingslots.domain.models import WorkingCalendar, WorkSession
from hearingslots.domain.slot_calculator import SlotCalculator

from helpers import MONDAY, TUESDAY, hearing, t


def _starts(slots):
    return [s.to_dict()["start_time"][:5] for s in slots]


class TestSlotCalculator:
    """Tests for SlotCalculator."""

    def test_find_slots_no_hearings(self):
        """Test finding slots on an empty Monday."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=MONDAY,
            hearings=[],
            duration_minutes=60,
            buffer_before_minutes=0,
            buffer_after_minutes=0,
            grid_minutes=15,
            min_gap_minutes=5
        )

        # Morning 08:00-12:00 and afternoon 13:00-18:00
        assert _starts(slots) == ["08:00", "09:15", "10:30", "13:00", "14:15", "15:30", "16:45"]
        assert all(s.duration_minutes == 60 for s in slots)

    def test_find_slots_without_grid_or_gap(self):
        """Back-to-back hour slots: 4 in the morning, 5 in the afternoon."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=MONDAY,
            hearings=[],
            duration_minutes=60,
            grid_minutes=0,
            min_gap_minutes=0
        )

        assert len(slots) == 9

    def test_find_slots_with_hearing_and_buffers(self):
        """A 09:00-10:00 hearing blocks 08:50-10:10 with default buffers."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=MONDAY,
            hearings=[hearing(1, "09:00", "10:00")],
            duration_minutes=30
        )

        morning = [s for s in slots if s.start < t("12:00")]
        assert _starts(morning) == ["08:00", "10:15", "11:00"]

    def test_overlapping_hearings_are_merged(self):
        """Two overlapping hearings leave a single gap around them."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=MONDAY,
            hearings=[hearing(1, "13:00", "14:00"), hearing(2, "13:30", "17:30")],
            duration_minutes=30,
            buffer_before_minutes=0,
            buffer_after_minutes=0,
            grid_minutes=0,
            min_gap_minutes=0
        )

        afternoon = [s for s in slots if s.start >= t("13:00")]
        assert _starts(afternoon) == ["17:30"]

    def test_fully_booked_day(self):
        """No free slots when hearings fill both sessions."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=MONDAY,
            hearings=[hearing(1, "08:00", "12:00"), hearing(2, "13:00", "18:00")],
            duration_minutes=15
        )

        assert slots == []

    def test_exclude_weekends(self):
        """Test that weekends are excluded."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        # Search from Friday to Monday
        slots = calculator.find_available_slots(
            date_start=pendulum.date(2024, 11, 22),
            date_end=MONDAY,
            hearings=[],
            duration_minutes=240,
            buffer_before_minutes=0,
            buffer_after_minutes=0
        )

        # Friday and Monday: one morning slot and one afternoon slot each
        assert [s.date for s in slots] == [pendulum.date(2024, 11, 22)] * 2 + [MONDAY] * 2

    def test_slots_sorted_by_date_then_start(self):
        """Output is ordered by (date, start) across days and sessions."""
        calendar = WorkingCalendar(
            sessions=[
                WorkSession(name="afternoon", start=t("14:00"), end=t("15:00")),
                WorkSession(name="morning", start=t("09:00"), end=t("10:00")),
            ]
        )
        calculator = SlotCalculator(calendar=calendar)

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=TUESDAY,
            hearings=[hearing(1, "09:00", "09:30", day=TUESDAY)],
            duration_minutes=30,
            buffer_before_minutes=0,
            buffer_after_minutes=0,
            grid_minutes=0,
            min_gap_minutes=0
        )

        keys = [(s.date, s.start) for s in slots]
        assert keys == sorted(keys)
        assert [(s.date, s.start) for s in slots if s.date == TUESDAY] == [
            (TUESDAY, t("09:30")),
            (TUESDAY, t("14:00")),
            (TUESDAY, t("14:30")),
        ]

    def test_hearings_outside_windows_do_not_matter(self):
        """A lunch-time hearing with buffers only trims the session edges."""
        calculator = SlotCalculator(calendar=WorkingCalendar())

        slots = calculator.find_available_slots(
            date_start=MONDAY,
            date_end=MONDAY,
            hearings=[hearing(1, "12:00", "13:00")],
            duration_minutes=60,
            buffer_before_minutes=10,
            buffer_after_minutes=10,
            grid_minutes=0,
            min_gap_minutes=0
        )

        assert slots[0].start == t("08:00")
        assert max(s.end for s in slots if s.start < t("12:00")) <= t("11:50")
        assert min(s.start for s in slots if s.start >= t("12:00")) == t("13:10")
