from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from functools import reduce
from typing import Iterable, List, Mapping, Optional, Tuple

from ..attendance.classifier import classify_attendance
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iter_month_days
from ..common.money import ZERO, round_money
from ..core.enums import LineItemType, SalaryStatus
from ..employees.model import EmployeeCompensationProfile
from ..hr_settings.model import PayrollSettings
from ..salaries.model import SalaryLineItem, SalaryRecord
from ..work_calendar.model import CalendarOverride
from ..work_calendar.resolver import resolve_day_policy
from .calculator.base import DailyPayCalculator, DayEffect
from .calculator.standard_calculator import StandardDailyPayCalculator


@dataclass(frozen=True)
class MonthTotals:
    """Running month totals of the effects that are reported as one line each."""

    absence: Decimal = ZERO
    lateness: Decimal = ZERO
    early_departure: Decimal = ZERO
    overtime: Decimal = ZERO
    daily_items: Tuple[SalaryLineItem, ...] = ()

    def add(self, effect: DayEffect) -> "MonthTotals":
        return MonthTotals(
            absence=self.absence + effect.absence,
            lateness=self.lateness + effect.lateness,
            early_departure=self.early_departure + effect.early_departure,
            overtime=self.overtime + effect.overtime,
            daily_items=self.daily_items + tuple(effect.line_items()),
        )

    def summary_items(self) -> List[SalaryLineItem]:
        candidates = (
            (LineItemType.DEDUCTION, "Absence penalty", self.absence, "Absent on working days"),
            (LineItemType.DEDUCTION, "Lateness penalty", self.lateness, "Late arrivals this month"),
            (LineItemType.DEDUCTION, "Early departure", self.early_departure, "Left before the end of shift"),
            (LineItemType.ALLOWANCE, "Overtime", self.overtime, "Extra working hours"),
        )
        items = []
        for item_type, name, total, note in candidates:
            amount = round_money(total)
            if amount > 0:
                items.append(SalaryLineItem(item_type=item_type, name=name, amount=amount, note=note))
        return items


def compute_day_effects(
    employee: EmployeeCompensationProfile,
    month: str,
    *,
    overrides: Mapping[date, CalendarOverride],
    attendance: Mapping[date, AttendanceRecord],
    settings: PayrollSettings,
    calculator: Optional[DailyPayCalculator] = None,
) -> List[DayEffect]:
    calculator = calculator or StandardDailyPayCalculator()
    effects = []
    for day in iter_month_days(month):
        policy = resolve_day_policy(day, overrides, settings)
        record = attendance.get(day)
        presence = classify_attendance(policy, record)
        effects.append(
            calculator.day_effect(
                policy=policy,
                presence=presence,
                record=record,
                employee=employee,
                settings=settings,
            )
        )
    return effects


def build_salary_record(
    employee: EmployeeCompensationProfile,
    month: str,
    effects: Iterable[DayEffect],
) -> SalaryRecord:
    """Fold day effects into a due salary record with its ordered line items."""
    totals = reduce(MonthTotals.add, effects, MonthTotals())
    items = totals.daily_items + tuple(totals.summary_items())

    total_allowances = sum((i.amount for i in items if i.item_type == LineItemType.ALLOWANCE), ZERO)
    total_deductions = sum((i.amount for i in items if i.item_type == LineItemType.DEDUCTION), ZERO)
    base_salary = round_money(employee.base_salary)
    net_salary = max(ZERO, base_salary + total_allowances - total_deductions)

    return SalaryRecord(
        employee_id=employee.employee_id,
        month=month,
        base_salary=base_salary,
        total_allowances=round_money(total_allowances),
        total_deductions=round_money(total_deductions),
        net_salary=round_money(net_salary),
        status=SalaryStatus.DUE,
        items=items,
    )


def aggregate_month(
    employee: EmployeeCompensationProfile,
    month: str,
    *,
    overrides: Mapping[date, CalendarOverride],
    attendance: Mapping[date, AttendanceRecord],
    settings: PayrollSettings,
    calculator: Optional[DailyPayCalculator] = None,
) -> SalaryRecord:
    effects = compute_day_effects(
        employee,
        month,
        overrides=overrides,
        attendance=attendance,
        settings=settings,
        calculator=calculator,
    )
    return build_salary_record(employee, month, effects)
