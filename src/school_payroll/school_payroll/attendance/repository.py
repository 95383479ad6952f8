from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_range(self, *, school_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        """All attendance records of the school with start <= work_date <= end."""

        raise NotImplementedError
