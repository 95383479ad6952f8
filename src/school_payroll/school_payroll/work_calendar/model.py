from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import DayPolicySource, DayType


@dataclass(frozen=True)
class CalendarOverride:
    """Domain entity: a school's explicit rule for one calendar date."""

    override_date: date
    day_type: str = DayType.WORK.value
    pay_rate: Optional[Decimal] = None
    bonus_fixed: Optional[Decimal] = None
    custom_start_time: Optional[time] = None
    custom_end_time: Optional[time] = None
    note: Optional[str] = None
    override_id: Optional[int] = None

    @property
    def is_off(self) -> bool:
        return DayType.denotes_off(self.day_type)


@dataclass(frozen=True)
class ResolvedDayPolicy:
    """Effective rules for one date after merging override, weekday default and weekend layers.

    Derived per run, never stored.
    """

    day: date
    is_off: bool
    pay_rate: Decimal
    bonus: Decimal
    shift_start: time
    shift_end: time
    day_type: str
    source: DayPolicySource
