"""
Validation of search requests and conflict queries.

All failures are raised as a single ``InvalidRequestError`` carrying a
user-facing message, before any hearing is read.
"""

from dataclasses import dataclass

from .exceptions import InvalidRequestError
from .models import ConflictQuery, SearchRequest


@dataclass(frozen=True)
class SearchLimits:
    """Inclusive bounds accepted for search parameters."""
    min_duration: int = 15
    max_duration: int = 480
    max_grid: int = 60
    max_buffer: int = 240

    def __post_init__(self):
        if not 0 < self.min_duration <= self.max_duration:
            raise ValueError("min_duration must be positive and not above max_duration")
        if self.max_grid < 0 or self.max_buffer < 0:
            raise ValueError("max_grid and max_buffer must not be negative")


def validate_search_request(request: SearchRequest, limits: SearchLimits = SearchLimits()) -> None:
    """
    Reject a search request that cannot be answered.

    Raises:
        InvalidRequestError: On the first failing rule
    """
    if request.date_start is None:
        raise InvalidRequestError("date_start is required")
    if request.date_end is None:
        raise InvalidRequestError("date_end is required")
    if request.duration_minutes is None:
        raise InvalidRequestError("duration_minutes is required")

    if request.date_start > request.date_end:
        raise InvalidRequestError("date_start must be on or before date_end")

    _check_duration(request.duration_minutes, limits)

    if not 0 <= request.grid_minutes <= limits.max_grid:
        raise InvalidRequestError(f"grid_minutes must be between 0 and {limits.max_grid}")

    for name in ("buffer_before_minutes", "buffer_after_minutes"):
        value = getattr(request, name)
        if not 0 <= value <= limits.max_buffer:
            raise InvalidRequestError(f"{name} must be between 0 and {limits.max_buffer}")

    if request.min_gap_minutes < 0:
        raise InvalidRequestError("min_gap_minutes must not be negative")


def validate_conflict_query(query: ConflictQuery, limits: SearchLimits = SearchLimits()) -> None:
    """Reject a conflict query with a missing court or an out-of-range duration."""
    if query.court_id is None or query.court_id == "":
        raise InvalidRequestError("court_id is required")
    _check_duration(query.duration_minutes, limits)


def _check_duration(duration_minutes: int, limits: SearchLimits) -> None:
    if not limits.min_duration <= duration_minutes <= limits.max_duration:
        raise InvalidRequestError(
            f"duration_minutes must be between {limits.min_duration} and {limits.max_duration}"
        )
