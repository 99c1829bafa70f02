"""
Hearing source that reads from the court registry's REST API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pendulum import Date

from ..domain.exceptions import HearingSourceError
from ..domain.models import Hearing, HearingId
from .records import parse_hearing_record, select_hearings

logger = logging.getLogger(__name__)


class HttpHearingSource:
    """
    Client for the registry's hearing listing endpoint.

    Issues exactly one ``GET {base_url}/hearings`` per call. The request
    timeout is the only place where the search can block.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the registry client.

        Args:
            base_url: Root URL of the registry API
            timeout_seconds: Request timeout
            token: Optional bearer token
            session: Optional requests session (tests inject one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.headers = {"Accept": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def list_hearings(
        self,
        date_start: Date,
        date_end: Date,
        court_id: Optional[HearingId] = None
    ) -> List[Hearing]:
        """
        Fetch hearings dated within the inclusive range.

        Raises:
            HearingSourceError: If the API call fails or returns malformed data
        """
        url = f"{self.base_url}/hearings"
        params: Dict[str, Any] = {
            "date_start": date_start.isoformat(),
            "date_end": date_end.isoformat(),
        }
        if court_id is not None:
            params["court_id"] = court_id

        try:
            response = self.session.get(
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout_seconds
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise HearingSourceError(f"Failed to fetch hearings from {url}: {e}") from e
        except ValueError as e:
            raise HearingSourceError(f"Registry returned invalid JSON: {e}") from e

        return self._parse_response(data, date_start, date_end, court_id)

    def _parse_response(
        self,
        response_data: Any,
        date_start: Date,
        date_end: Date,
        court_id: Optional[HearingId]
    ) -> List[Hearing]:
        """
        Parse the listing into hearings.

        Response format, either bare or wrapped:
        [
            {"id": 7, "court_id": 1, "date": "25/11/2024",
             "start_time": "09:00:00", "end_time": "10:00:00",
             "process_number": "0001234-56.2024.8.26.0100"}
        ]
        or {"data": [...]}
        """
        records = response_data.get("data") if isinstance(response_data, dict) else response_data
        if not isinstance(records, list):
            raise HearingSourceError("Registry response does not contain a hearing list")

        hearings = [parse_hearing_record(record) for record in records]

        # only the requested range and court, even if the registry returns more
        selected = select_hearings(hearings, date_start, date_end, court_id)
        logger.debug("Fetched %d hearings (%d in range)", len(hearings), len(selected))
        return selected
