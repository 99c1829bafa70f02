"""Conflict detection between a proposed hearing and existing ones."""

from __future__ import annotations

from typing import Iterable, List

from .intervals import overlaps
from .models import ConflictQuery, Hearing, same_id


def find_conflicts(query: ConflictQuery, existing_hearings: Iterable[Hearing]) -> List[Hearing]:
    """Return existing hearings that collide with the proposed one.

    Only hearings on the same date and in the same court are considered, and
    the hearing named by ``query.exclude_hearing_id`` never conflicts with
    itself.

    Overlap rule: conflict if new.start < existing.end AND existing.start < new.end.
    Exact boundary touches (end == start) are NOT considered conflicts.
    """
    candidate = query.interval
    return [
        hearing
        for hearing in existing_hearings
        if same_id(hearing.court_id, query.court_id)
        and not same_id(hearing.id, query.exclude_hearing_id)
        and overlaps(candidate, hearing.interval)
    ]
