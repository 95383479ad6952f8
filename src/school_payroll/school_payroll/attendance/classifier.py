from __future__ import annotations

from typing import Optional

from ..core.enums import Presence
from ..work_calendar.model import ResolvedDayPolicy
from .model import AttendanceRecord


def classify_attendance(policy: ResolvedDayPolicy, record: Optional[AttendanceRecord]) -> Presence:
    """Decide how a day counts for pay.

    Off days win over any attendance record. On a work day, leave and excused
    statuses count as absent the same way an unexcused absence does.
    """
    if policy.is_off:
        return Presence.DAY_OFF
    if record is None:
        return Presence.NO_RECORD
    if record.status.counts_as_present:
        return Presence.PRESENT
    return Presence.ABSENT
