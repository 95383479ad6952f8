from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import whole_minutes_between
from ...common.money import ZERO, to_decimal
from ...core.constants import OVERTIME_HOURS_TOLERANCE
from ...core.enums import Presence
from ...employees.model import EmployeeCompensationProfile
from ...hr_settings.model import PayrollSettings
from ...work_calendar.model import ResolvedDayPolicy
from .base import DailyPayCalculator, DayEffect

ONE = Decimal("1.0")
MINUTES_PER_HOUR = Decimal("60")


def standard_day_rate(base_salary: Decimal, settings: PayrollSettings) -> Decimal:
    return to_decimal(base_salary) / settings.working_days_per_month


def minute_rate(base_salary: Decimal, settings: PayrollSettings) -> Decimal:
    return standard_day_rate(base_salary, settings) / settings.working_hours_per_day / MINUTES_PER_HOUR


def minutes_cost(minutes: object, penalty_rate: Decimal, day_rate: Decimal, settings: PayrollSettings) -> Decimal:
    """minutes * minute rate * penalty rate, dividing last to keep exact cents exact."""
    return to_decimal(minutes) * penalty_rate * day_rate / (settings.working_hours_per_day * MINUTES_PER_HOUR)


def penalized_late_minutes(late_minutes: int, settings: PayrollSettings) -> int:
    """Past the maximum grace period all late minutes count; within it only those beyond the grace period."""
    if late_minutes > settings.max_grace_period:
        return late_minutes
    if late_minutes > settings.lateness_grace_period:
        return late_minutes - settings.lateness_grace_period
    return 0


def overtime_minutes(record: AttendanceRecord, settings: PayrollSettings) -> Decimal:
    """Recorded overtime, or overtime derived from worked hours when none was recorded."""
    recorded = Decimal(record.overtime_minutes or 0)
    if recorded:
        return recorded
    if record.worked_hours is None:
        return ZERO
    worked = to_decimal(record.worked_hours)
    if worked > settings.working_hours_per_day + OVERTIME_HOURS_TOLERANCE:
        return (worked - settings.working_hours_per_day) * MINUTES_PER_HOUR
    return ZERO


class StandardDailyPayCalculator(DailyPayCalculator):
    """Standard rules: calendar bonus, rate multiplier, absence, lateness, early departure, overtime.

    Every rule is evaluated independently; one day can trigger several.
    """

    def day_effect(
        self,
        *,
        policy: ResolvedDayPolicy,
        presence: Presence,
        record: Optional[AttendanceRecord],
        employee: EmployeeCompensationProfile,
        settings: PayrollSettings,
    ) -> DayEffect:
        day_rate = standard_day_rate(employee.base_salary, settings)

        bonus = policy.bonus if policy.bonus > 0 else ZERO

        rate_bonus = ZERO
        if policy.pay_rate > ONE and presence in (Presence.PRESENT, Presence.DAY_OFF):
            rate_bonus = day_rate * (policy.pay_rate - ONE)

        absence = day_rate * settings.absence_penalty_rate if presence.is_absent else ZERO

        lateness = early_departure = overtime = ZERO
        if presence == Presence.PRESENT and record is not None:
            lateness = self._lateness(record, day_rate, settings)
            early_departure = self._early_departure(record, policy, day_rate, settings)
            overtime = minutes_cost(overtime_minutes(record, settings), settings.overtime_rate, day_rate, settings)

        return DayEffect(
            day=policy.day,
            pay_rate=policy.pay_rate,
            bonus=bonus,
            rate_bonus=rate_bonus,
            absence=absence,
            lateness=lateness,
            early_departure=early_departure,
            overtime=overtime,
        )

    @staticmethod
    def _lateness(record: AttendanceRecord, day_rate: Decimal, settings: PayrollSettings) -> Decimal:
        if not record.late_minutes or record.late_minutes <= 0:
            return ZERO
        minutes = penalized_late_minutes(int(record.late_minutes), settings)
        return minutes_cost(minutes, settings.lateness_penalty_rate, day_rate, settings)

    @staticmethod
    def _early_departure(
        record: AttendanceRecord,
        policy: ResolvedDayPolicy,
        day_rate: Decimal,
        settings: PayrollSettings,
    ) -> Decimal:
        if record.check_out_time is None:
            return ZERO
        minutes_early = whole_minutes_between(record.check_out_time, policy.shift_end)
        if minutes_early <= max(settings.early_departure_grace_period, 0):
            return ZERO
        return minutes_cost(minutes_early, settings.early_departure_penalty_rate, day_rate, settings)
