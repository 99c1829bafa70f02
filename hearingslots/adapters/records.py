"""
Conversion of raw hearing records (JSON objects) into domain hearings.
"""

from typing import Any, Dict, Iterable, List, Optional

from pendulum import Date

from ..domain.exceptions import HearingSourceError, InvalidRequestError
from ..domain.models import Hearing, HearingId, same_id
from ..domain.timefmt import MINUTES_PER_DAY, parse_date, parse_time


def parse_hearing_record(record: Dict[str, Any]) -> Hearing:
    """
    Build a Hearing from a registry record.

    Expected keys: ``id``, ``court_id``, ``date``, ``start_time`` and either
    ``end_time`` or ``duration_minutes``. ``process_number``, ``court_name``
    and ``judge_name`` are optional. An ``end_time`` of ``00:00`` after a
    later start means the hearing runs until midnight.

    Raises:
        HearingSourceError: If the record is malformed. Malformed rows are
            never skipped, otherwise the search would report false availability.
    """
    try:
        day = parse_date(record["date"], field="date")
        start = parse_time(record["start_time"], field="start_time")
        extra = {
            "process_number": str(record.get("process_number") or ""),
            "court_name": str(record.get("court_name") or ""),
            "judge_name": str(record.get("judge_name") or ""),
        }

        if not record.get("end_time"):
            return Hearing.from_duration(
                id=record["id"],
                date=day,
                start=start,
                duration_minutes=int(record["duration_minutes"]),
                court_id=record["court_id"],
                **extra,
            )

        end = parse_time(record["end_time"], field="end_time")
        if end == 0 and start > 0:
            end = MINUTES_PER_DAY

        return Hearing(id=record["id"], date=day, start=start, end=end, court_id=record["court_id"], **extra)
    except (AttributeError, KeyError, TypeError, ValueError, InvalidRequestError) as e:
        raise HearingSourceError(f"Malformed hearing record {record!r}: {e}") from e


def select_hearings(
    hearings: Iterable[Hearing],
    date_start: Date,
    date_end: Date,
    court_id: Optional[HearingId] = None
) -> List[Hearing]:
    """Keep hearings dated within [date_start, date_end], optionally for one court."""
    return [
        hearing
        for hearing in hearings
        if date_start <= hearing.date <= date_end
        and (court_id is None or same_id(hearing.court_id, court_id))
    ]
