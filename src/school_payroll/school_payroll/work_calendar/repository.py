from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CalendarOverride


class CalendarOverrideRepository(Protocol):
    def list_range(self, *, school_id: str, start: date, end: date) -> Sequence[CalendarOverride]:
        raise NotImplementedError

    def get_for_date(self, *, school_id: str, day: date) -> Optional[CalendarOverride]:
        raise NotImplementedError

    def upsert(self, *, school_id: str, override: CalendarOverride) -> int:
        """Create or replace the override of override.override_date.

        Returns override_id.
        """

        raise NotImplementedError

    def delete(self, *, school_id: str, day: date) -> bool:
        raise NotImplementedError
