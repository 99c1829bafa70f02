"""In-memory hearing store used for booking and tests."""

from __future__ import annotations

from typing import Iterable, List, Optional

from pendulum import Date

from ..domain.models import Hearing, HearingId
from .records import select_hearings


class InMemoryHearingStore:
    """Dict-backed store for Hearing instances, keyed by id."""

    def __init__(self, hearings: Iterable[Hearing] = ()) -> None:
        self._store: dict[str, Hearing] = {}
        for hearing in hearings:
            self.add(hearing)

    @staticmethod
    def _key(hearing_id: HearingId) -> str:
        return str(hearing_id).strip()

    def add(self, hearing: Hearing) -> None:
        key = self._key(hearing.id)
        if key in self._store:
            raise ValueError(f"Hearing {hearing.id} already exists")
        self._store[key] = hearing

    def replace(self, hearing: Hearing) -> None:
        self._store[self._key(hearing.id)] = hearing

    def get(self, hearing_id: HearingId) -> Hearing | None:
        return self._store.get(self._key(hearing_id))

    def list_all(self) -> List[Hearing]:
        return sorted(self._store.values(), key=lambda h: (h.date, h.start))

    def list_hearings(
        self,
        date_start: Date,
        date_end: Date,
        court_id: Optional[HearingId] = None,
    ) -> List[Hearing]:
        return select_hearings(self.list_all(), date_start, date_end, court_id)
