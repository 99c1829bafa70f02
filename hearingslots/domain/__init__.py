"""
Domain layer - Pure business logic without external dependencies.
"""

from .conflicts import find_conflicts
from .exceptions import (
    ConfigError,
    HearingConflictError,
    HearingNotFoundError,
    HearingSourceError,
    InvalidRequestError,
    SchedulingError,
)
from .models import ConflictQuery, Hearing, Interval, SearchRequest, TimeSlot, WorkingCalendar, WorkSession
from .slot_calculator import SlotCalculator
from .validation import SearchLimits, validate_conflict_query, validate_search_request

__all__ = [
    "ConfigError",
    "ConflictQuery",
    "Hearing",
    "HearingConflictError",
    "HearingNotFoundError",
    "HearingSourceError",
    "Interval",
    "InvalidRequestError",
    "SchedulingError",
    "SearchLimits",
    "SearchRequest",
    "SlotCalculator",
    "TimeSlot",
    "WorkingCalendar",
    "WorkSession",
    "find_conflicts",
    "validate_conflict_query",
    "validate_search_request",
]
