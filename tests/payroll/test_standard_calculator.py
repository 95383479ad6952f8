from datetime import date, time
from decimal import Decimal

from src.school_payroll.school_payroll.attendance.model import AttendanceRecord
from src.school_payroll.school_payroll.core.enums import AttendanceStatus, DayPolicySource, Presence
from src.school_payroll.school_payroll.employees.model import EmployeeCompensationProfile
from src.school_payroll.school_payroll.hr_settings.model import PayrollSettings
from src.school_payroll.school_payroll.payroll.calculator.standard_calculator import (
    StandardDailyPayCalculator,
    minute_rate,
    penalized_late_minutes,
    standard_day_rate,
)
from src.school_payroll.school_payroll.work_calendar.model import ResolvedDayPolicy

DAY = date(2025, 3, 3)
EMPLOYEE = EmployeeCompensationProfile(employee_id=1, full_name="A", base_salary=Decimal("3000"))
SETTINGS = PayrollSettings.defaults()


def _policy(*, is_off=False, pay_rate="1.0", bonus="0", shift_end=time(15, 45)) -> ResolvedDayPolicy:
    return ResolvedDayPolicy(
        day=DAY,
        is_off=is_off,
        pay_rate=Decimal(pay_rate),
        bonus=Decimal(bonus),
        shift_start=time(8, 0),
        shift_end=shift_end,
        day_type="off_paid" if is_off else "work",
        source=DayPolicySource.CALENDAR,
    )


def _present(**kwargs) -> AttendanceRecord:
    return AttendanceRecord(employee_id=1, work_date=DAY, status=AttendanceStatus.PRESENT, **kwargs)


def _effect(policy, presence, record=None, settings=SETTINGS):
    return StandardDailyPayCalculator().day_effect(
        policy=policy,
        presence=presence,
        record=record,
        employee=EMPLOYEE,
        settings=settings,
    )


def test_rates_derive_from_base_salary():
    assert standard_day_rate(Decimal("3000"), SETTINGS) == Decimal("100")
    assert abs(minute_rate(Decimal("3000"), SETTINGS) * 480 - Decimal("100")) < Decimal("1e-20")


def test_penalized_minutes_respect_grace_and_max_grace():
    settings = PayrollSettings(lateness_grace_period=15, max_grace_period=30)

    assert penalized_late_minutes(10, settings) == 0
    assert penalized_late_minutes(15, settings) == 0
    assert penalized_late_minutes(20, settings) == 5
    assert penalized_late_minutes(30, settings) == 15
    # Beyond the maximum grace period every late minute counts.
    assert penalized_late_minutes(40, settings) == 40


def test_absence_costs_one_day_rate():
    effect = _effect(_policy(), Presence.NO_RECORD)

    assert effect.absence == Decimal("100")
    assert effect.lateness == effect.overtime == effect.early_departure == 0


def test_absence_penalty_rate_scales_deduction():
    settings = PayrollSettings(absence_penalty_rate=Decimal("2"))

    assert _effect(_policy(), Presence.ABSENT, settings=settings).absence == Decimal("200")


def test_fixed_bonus_applies_even_when_absent():
    effect = _effect(_policy(bonus="250"), Presence.NO_RECORD)

    assert effect.bonus == Decimal("250")
    assert effect.absence == Decimal("100")


def test_rate_multiplier_for_present_and_day_off_only():
    assert _effect(_policy(pay_rate="1.5"), Presence.PRESENT, _present()).rate_bonus == Decimal("50")
    assert _effect(_policy(is_off=True, pay_rate="2"), Presence.DAY_OFF).rate_bonus == Decimal("100")
    assert _effect(_policy(pay_rate="1.5"), Presence.NO_RECORD).rate_bonus == 0


def test_lateness_beyond_max_grace_is_fully_penalized():
    effect = _effect(_policy(), Presence.PRESENT, _present(late_minutes=40))

    # 40 minutes at 100 / 480 per minute.
    assert effect.lateness == Decimal("4000") / Decimal("480")


def test_early_departure_beyond_grace():
    effect = _effect(_policy(), Presence.PRESENT, _present(check_out_time=time(15, 0)))

    assert effect.early_departure == Decimal("9.375")


def test_early_departure_within_grace_or_after_shift_end_is_free():
    assert _effect(_policy(), Presence.PRESENT, _present(check_out_time=time(15, 35))).early_departure == 0
    assert _effect(_policy(), Presence.PRESENT, _present(check_out_time=time(17, 0))).early_departure == 0


def test_early_departure_uses_resolved_shift_end():
    policy = _policy(shift_end=time(12, 0))

    assert _effect(policy, Presence.PRESENT, _present(check_out_time=time(12, 0))).early_departure == 0
    assert _effect(policy, Presence.PRESENT, _present(check_out_time=time(11, 30))).early_departure == Decimal("6.25")


def test_recorded_overtime_minutes():
    effect = _effect(_policy(), Presence.PRESENT, _present(overtime_minutes=60))

    assert effect.overtime == Decimal("18.75")


def test_overtime_derived_from_worked_hours_when_not_recorded():
    derived = _effect(_policy(), Presence.PRESENT, _present(worked_hours=Decimal("9.5")))
    within_tolerance = _effect(_policy(), Presence.PRESENT, _present(worked_hours=Decimal("8.25")))

    assert derived.overtime == Decimal("28.125")
    assert within_tolerance.overtime == 0


def test_day_off_ignores_attendance_rules():
    record = _present(late_minutes=90, overtime_minutes=120, check_out_time=time(9, 0))

    effect = _effect(_policy(is_off=True), Presence.DAY_OFF, record)

    assert effect.absence == effect.lateness == effect.early_departure == effect.overtime == 0
