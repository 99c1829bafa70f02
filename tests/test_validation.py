"""
Tests for request validation.
"""

import pendulum
import pytest

from hearingslots.domain.exceptions import InvalidRequestError
from hearingslots.domain.models import ConflictQuery, SearchRequest
from hearingslots.domain.validation import SearchLimits, validate_conflict_query, validate_search_request

from helpers import MONDAY, TUESDAY, t


def _request(**overrides) -> SearchRequest:
    values = dict(date_start=MONDAY, date_end=TUESDAY, duration_minutes=60)
    values.update(overrides)
    return SearchRequest(**values)


class TestValidateSearchRequest:
    """Tests for validate_search_request."""

    def test_valid_request(self):
        validate_search_request(_request())

    def test_inverted_range(self):
        with pytest.raises(InvalidRequestError, match="date_start must be on or before date_end"):
            validate_search_request(_request(date_start=TUESDAY, date_end=MONDAY))

    def test_single_day_range(self):
        validate_search_request(_request(date_end=MONDAY))

    @pytest.mark.parametrize("missing", ["date_start", "date_end", "duration_minutes"])
    def test_missing_field_is_named(self, missing):
        with pytest.raises(InvalidRequestError, match=f"{missing} is required"):
            validate_search_request(_request(**{missing: None}))

    @pytest.mark.parametrize("duration, ok", [(14, False), (15, True), (480, True), (481, False)])
    def test_duration_bounds(self, duration, ok):
        if ok:
            validate_search_request(_request(duration_minutes=duration))
        else:
            with pytest.raises(InvalidRequestError, match="between 15 and 480"):
                validate_search_request(_request(duration_minutes=duration))

    @pytest.mark.parametrize("grid, ok", [(-1, False), (0, True), (60, True), (61, False)])
    def test_grid_bounds(self, grid, ok):
        if ok:
            validate_search_request(_request(grid_minutes=grid))
        else:
            with pytest.raises(InvalidRequestError, match="grid_minutes"):
                validate_search_request(_request(grid_minutes=grid))

    def test_buffer_bounds(self):
        with pytest.raises(InvalidRequestError, match="buffer_before_minutes"):
            validate_search_request(_request(buffer_before_minutes=-5))
        with pytest.raises(InvalidRequestError, match="buffer_after_minutes"):
            validate_search_request(_request(buffer_after_minutes=241))

    def test_negative_gap(self):
        with pytest.raises(InvalidRequestError, match="min_gap_minutes"):
            validate_search_request(_request(min_gap_minutes=-1))

    def test_custom_limits(self):
        limits = SearchLimits(min_duration=30, max_duration=120, max_grid=30, max_buffer=15)

        with pytest.raises(InvalidRequestError, match="between 30 and 120"):
            validate_search_request(_request(duration_minutes=20), limits)
        with pytest.raises(InvalidRequestError, match="between 0 and 30"):
            validate_search_request(_request(grid_minutes=45), limits)

    def test_invalid_limits(self):
        with pytest.raises(ValueError):
            SearchLimits(min_duration=100, max_duration=50)


class TestValidateConflictQuery:
    """Tests for validate_conflict_query."""

    def test_valid_query(self):
        validate_conflict_query(ConflictQuery(date=MONDAY, start=t("10:00"), duration_minutes=30, court_id=1))

    def test_court_is_required(self):
        with pytest.raises(InvalidRequestError, match="court_id is required"):
            validate_conflict_query(ConflictQuery(date=MONDAY, start=t("10:00"), duration_minutes=30, court_id=""))

    def test_duration_bounds(self):
        with pytest.raises(InvalidRequestError, match="duration_minutes"):
            validate_conflict_query(
                ConflictQuery(date=pendulum.date(2024, 11, 25), start=t("10:00"), duration_minutes=0, court_id=1)
            )
