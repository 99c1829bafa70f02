"""
Application services for hearing scheduling.

The service validates requests, fetches existing hearings via a source
adapter (one read per call) and delegates the interval arithmetic to the
domain-level ``SlotCalculator`` and ``find_conflicts``. Bookings run the
conflict check and the write inside one per-court critical section, so two
callers in this process cannot both pass the check for overlapping times.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Protocol

from pendulum import Date

from ..domain.conflicts import find_conflicts
from ..domain.exceptions import HearingConflictError, HearingNotFoundError, SchedulingError
from ..domain.models import ConflictQuery, Hearing, HearingId, SearchRequest, TimeSlot
from ..domain.slot_calculator import SlotCalculator
from ..domain.validation import SearchLimits, validate_conflict_query, validate_search_request

logger = logging.getLogger(__name__)


class HearingSourceProtocol(Protocol):
    """Protocol describing the single read the service needs from the registry."""

    def list_hearings(
        self,
        date_start: Date,
        date_end: Date,
        court_id: Optional[HearingId] = None,
    ) -> List[Hearing]:
        """Return hearings dated within [date_start, date_end], optionally for one court."""


class HearingStoreProtocol(HearingSourceProtocol, Protocol):
    """A hearing source that also accepts writes."""

    def get(self, hearing_id: HearingId) -> Optional[Hearing]:
        ...

    def add(self, hearing: Hearing) -> None:
        ...

    def replace(self, hearing: Hearing) -> None:
        ...


class HearingSchedulerService:
    """
    Orchestrates hearing retrieval, free-slot calculation and conflict checks.

    Dependency inversion toward a protocol makes it easy to plug in the JSON
    export, the registry API or an in-memory store in tests.
    """

    def __init__(
        self,
        hearing_source: HearingSourceProtocol,
        slot_calculator: SlotCalculator,
        limits: SearchLimits = SearchLimits(),
    ) -> None:
        self._hearing_source = hearing_source
        self._slot_calculator = slot_calculator
        self._limits = limits
        # one lock per court id, never pruned: courts are a small fixed set
        self._court_locks: Dict[str, threading.Lock] = {}
        self._court_locks_guard = threading.Lock()

    def find_free_slots(self, request: SearchRequest) -> List[TimeSlot]:
        """
        Validate the request, load occupied hearings once and compute free slots.

        Raises:
            InvalidRequestError: Before any read, if the request is invalid
            HearingSourceError: If the hearings cannot be loaded
        """
        logger.debug("Calculating free slots for %s", request)
        validate_search_request(request, self._limits)

        hearings = self._hearing_source.list_hearings(
            request.date_start,
            request.date_end,
            request.court_filter,
        )

        return self._slot_calculator.find_available_slots(
            date_start=request.date_start,
            date_end=request.date_end,
            hearings=hearings,
            duration_minutes=request.duration_minutes,
            buffer_before_minutes=request.buffer_before_minutes,
            buffer_after_minutes=request.buffer_after_minutes,
            grid_minutes=request.grid_minutes,
            min_gap_minutes=request.min_gap_minutes,
        )

    def check_conflicts(self, query: ConflictQuery) -> List[Hearing]:
        """
        Return existing hearings colliding with the proposed one.

        An empty list means no conflict. Conflicts are a normal result here;
        ``book`` and ``reschedule`` turn them into ``HearingConflictError``.
        """
        validate_conflict_query(query, self._limits)

        existing = self._hearing_source.list_hearings(query.date, query.date, query.court_id)
        conflicts = find_conflicts(query, existing)

        if conflicts:
            logger.warning(
                "%d conflict(s) for court %s on %s: %s",
                len(conflicts),
                query.court_id,
                query.date,
                ", ".join(str(h.id) for h in conflicts),
            )
        else:
            logger.debug("No conflicts for court %s on %s", query.court_id, query.date)

        return conflicts

    def book(self, hearing: Hearing) -> Hearing:
        """
        Store a new hearing unless it collides with an existing one.

        Raises:
            HearingConflictError: If the court is already busy at that time
        """
        store = self._require_store()

        with self._lock_for_court(hearing.court_id):
            conflicts = self.check_conflicts(ConflictQuery.for_hearing(hearing))
            if conflicts:
                raise HearingConflictError(conflicts)
            store.add(hearing)

        logger.info("Hearing booked - ID: %s, court: %s, %s", hearing.id, hearing.court_id, hearing.interval)
        return hearing

    def reschedule(self, hearing: Hearing) -> Hearing:
        """
        Replace an existing hearing, checking conflicts against all others.

        Raises:
            HearingNotFoundError: If no hearing with that id exists
            HearingConflictError: If the new time collides with another hearing
        """
        store = self._require_store()
        previous = store.get(hearing.id)
        if previous is None:
            raise HearingNotFoundError(f"Hearing not found with ID: {hearing.id}")

        # a court move must not race with bookings in either court
        courts = sorted({_court_key(previous.court_id), _court_key(hearing.court_id)})
        locks = [self._lock_for_court(court) for court in courts]

        for lock in locks:
            lock.acquire()
        try:
            conflicts = self.check_conflicts(ConflictQuery.for_hearing(hearing, exclude_self=True))
            if conflicts:
                raise HearingConflictError(conflicts)
            store.replace(hearing)
        finally:
            for lock in reversed(locks):
                lock.release()

        logger.info("Hearing rescheduled - ID: %s, %s", hearing.id, hearing.interval)
        return hearing

    def _require_store(self) -> HearingStoreProtocol:
        source = self._hearing_source
        if not all(hasattr(source, name) for name in ("get", "add", "replace")):
            raise SchedulingError(f"{type(source).__name__} is read-only and cannot store hearings")
        return source  # type: ignore[return-value]

    def _lock_for_court(self, court_id: HearingId) -> threading.Lock:
        key = _court_key(court_id)
        with self._court_locks_guard:
            lock = self._court_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._court_locks[key] = lock
            return lock


def _court_key(court_id: HearingId) -> str:
    """Normalize a court id the same way ``same_id`` compares ids."""
    return str(court_id).strip()
