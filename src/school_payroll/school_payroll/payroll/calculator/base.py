from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from ...attendance.model import AttendanceRecord
from ...common.money import ZERO, round_money
from ...core.enums import LineItemType, Presence
from ...employees.model import EmployeeCompensationProfile
from ...hr_settings.model import PayrollSettings
from ...salaries.model import SalaryLineItem
from ...work_calendar.model import ResolvedDayPolicy


@dataclass(frozen=True)
class DayEffect:
    """Monetary effect of one calendar day for one employee (unrounded)."""

    day: date
    pay_rate: Decimal = Decimal("1.0")
    bonus: Decimal = ZERO
    rate_bonus: Decimal = ZERO
    absence: Decimal = ZERO
    lateness: Decimal = ZERO
    early_departure: Decimal = ZERO
    overtime: Decimal = ZERO

    def line_items(self) -> List[SalaryLineItem]:
        """Items that are itemized per day rather than summed over the month."""
        items: List[SalaryLineItem] = []
        if self.bonus > 0:
            items.append(
                SalaryLineItem(
                    item_type=LineItemType.ALLOWANCE,
                    name=f"Bonus for day {self.day.day}",
                    amount=round_money(self.bonus),
                    note="Calendar bonus",
                )
            )
        if self.rate_bonus > 0:
            items.append(
                SalaryLineItem(
                    item_type=LineItemType.ALLOWANCE,
                    name=f"Rate bonus for day {self.day.day}",
                    amount=round_money(self.rate_bonus),
                    note=f"Day paid at {self.pay_rate.normalize():f}x",
                )
            )
        return items


class DailyPayCalculator(ABC):
    """Calculator interface (Strategy Pattern for daily pay rules)."""

    @abstractmethod
    def day_effect(
        self,
        *,
        policy: ResolvedDayPolicy,
        presence: Presence,
        record: Optional[AttendanceRecord],
        employee: EmployeeCompensationProfile,
        settings: PayrollSettings,
    ) -> DayEffect:
        raise NotImplementedError
