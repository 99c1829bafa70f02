"""
Hearing source backed by a JSON export of the court registry.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from pendulum import Date

from ..domain.exceptions import HearingSourceError
from ..domain.models import Hearing, HearingId
from .records import parse_hearing_record, select_hearings

logger = logging.getLogger(__name__)


class JsonHearingSource:
    """
    Reads existing hearings from a JSON file.

    The file holds a list of hearing records (see ``parse_hearing_record``).
    It is re-read on every call so the search always sees the current export.
    """

    def __init__(self, path: Path):
        """
        Initialize the source.

        Args:
            path: Path to the JSON file with hearing records
        """
        self.path = Path(path)

    def _load_records(self) -> list:
        """Load raw records from the JSON file."""
        if not self.path.exists():
            raise HearingSourceError(f"Hearings file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise HearingSourceError(f"Could not read hearings from {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("data", [])
        if not isinstance(data, list):
            raise HearingSourceError(f"{self.path} must contain a list of hearings")

        return data

    def list_hearings(
        self,
        date_start: Date,
        date_end: Date,
        court_id: Optional[HearingId] = None
    ) -> List[Hearing]:
        """
        Load hearings dated within the inclusive range.

        Args:
            date_start: First day of the range
            date_end: Last day of the range
            court_id: Restrict to one court; None means all courts

        Returns:
            List of Hearing objects

        Raises:
            HearingSourceError: If the file is missing or malformed
        """
        hearings = [parse_hearing_record(record) for record in self._load_records()]
        selected = select_hearings(hearings, date_start, date_end, court_id)

        logger.debug(
            "Loaded %d of %d hearings from %s (court=%s)",
            len(selected), len(hearings), self.path, court_id
        )
        return selected
