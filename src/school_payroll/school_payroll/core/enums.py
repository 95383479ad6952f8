from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status as stored for one employee and date."""

    PRESENT = "present"
    LATE = "late"
    ON_MISSION = "on_mission"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"
    EXCUSED = "excused"

    @property
    def counts_as_present(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ON_MISSION)


class Presence(str, Enum):
    """Pay-relevant classification of one employee on one date."""

    PRESENT = "present"
    ABSENT = "absent"
    NO_RECORD = "no_record"
    DAY_OFF = "day_off"

    @property
    def is_absent(self) -> bool:
        return self in (Presence.ABSENT, Presence.NO_RECORD)


class DayType(str, Enum):
    """Calendar override day types."""

    WORK = "work"
    HALF_DAY = "half_day"
    OFF_PAID = "off_paid"
    OFF_UNPAID = "off_unpaid"
    SPECIAL = "special"

    @staticmethod
    def denotes_off(tag: str) -> bool:
        return "off" in (tag or "").lower()


class DayPolicySource(str, Enum):
    CALENDAR = "calendar"
    WEEK_DEFAULT = "week_default"
    GLOBAL = "global"


class LineItemType(str, Enum):
    ALLOWANCE = "allowance"
    DEDUCTION = "deduction"


class SalaryStatus(str, Enum):
    DUE = "due"
    PAID = "paid"


class RunOutcome(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"
