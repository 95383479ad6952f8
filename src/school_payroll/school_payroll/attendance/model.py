from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance on one date."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_out_time: Optional[time] = None
    late_minutes: int = 0
    overtime_minutes: int = 0
    worked_hours: Optional[Decimal] = None
