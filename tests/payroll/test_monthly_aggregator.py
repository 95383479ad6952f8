from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.school_payroll.school_payroll.attendance.model import AttendanceRecord
from src.school_payroll.school_payroll.common.datetime_utils import iter_month_days, weekday_index
from src.school_payroll.school_payroll.core.enums import AttendanceStatus, LineItemType, SalaryStatus
from src.school_payroll.school_payroll.employees.model import EmployeeCompensationProfile
from src.school_payroll.school_payroll.hr_settings.model import PayrollSettings
from src.school_payroll.school_payroll.payroll.aggregator import aggregate_month
from src.school_payroll.school_payroll.work_calendar.model import CalendarOverride
from src.school_payroll.school_payroll.work_calendar.resolver import index_overrides

MONTH = "2025-03"
EMPLOYEE = EmployeeCompensationProfile(employee_id=7, full_name="Amina Haddad", base_salary=Decimal("3000"))
SETTINGS = PayrollSettings(working_days_per_month=30, lateness_grace_period=15, max_grace_period=30)


def _full_presence(settings: PayrollSettings = SETTINGS) -> dict[date, AttendanceRecord]:
    """A present record on every default working day of March 2025."""
    return {
        day: AttendanceRecord(employee_id=EMPLOYEE.employee_id, work_date=day, status=AttendanceStatus.PRESENT)
        for day in iter_month_days(MONTH)
        if weekday_index(day) not in settings.weekend_days
    }


def _run(attendance, *, overrides=(), settings=SETTINGS, employee=EMPLOYEE):
    return aggregate_month(
        employee,
        MONTH,
        overrides=index_overrides(overrides),
        attendance=attendance,
        settings=settings,
    )


def test_full_attendance_pays_base_salary():
    record = _run(_full_presence())

    assert record.items == ()
    assert record.net_salary == Decimal("3000.00")
    assert record.status == SalaryStatus.DUE
    assert record.month == MONTH


def test_one_absence_deducts_one_day_rate():
    attendance = _full_presence()
    del attendance[date(2025, 3, 3)]

    record = _run(attendance)

    assert len(record.items) == 1
    item = record.items[0]
    assert item.item_type == LineItemType.DEDUCTION
    assert item.name == "Absence penalty"
    assert item.amount == Decimal("100.00")
    assert record.total_deductions == Decimal("100.00")
    assert record.net_salary == Decimal("2900.00")


def test_absences_accumulate_into_one_item():
    attendance = _full_presence()
    for d in (3, 4, 5):
        del attendance[date(2025, 3, d)]
    attendance[date(2025, 3, 6)] = replace(attendance[date(2025, 3, 6)], status=AttendanceStatus.ON_LEAVE)

    record = _run(attendance)

    assert [i.name for i in record.items] == ["Absence penalty"]
    assert record.items[0].amount == Decimal("400.00")


def test_lateness_past_max_grace_counts_every_minute():
    attendance = _full_presence()
    day = date(2025, 3, 4)
    attendance[day] = replace(attendance[day], status=AttendanceStatus.LATE, late_minutes=40)

    record = _run(attendance)

    # 40 * (3000 / 30 / 8 / 60) = 8.33, not (40 - 15) minutes.
    assert [(i.name, i.amount) for i in record.items] == [("Lateness penalty", Decimal("8.33"))]


def test_friday_work_override_with_rate_multiplier():
    friday = date(2025, 3, 7)
    attendance = _full_presence()
    attendance[friday] = AttendanceRecord(employee_id=EMPLOYEE.employee_id, work_date=friday, status=AttendanceStatus.PRESENT)
    override = CalendarOverride(override_id=1, override_date=friday, day_type="work", pay_rate=Decimal("1.5"))

    record = _run(attendance, overrides=[override])

    assert len(record.items) == 1
    item = record.items[0]
    assert item.item_type == LineItemType.ALLOWANCE
    assert item.name == "Rate bonus for day 7"
    assert item.amount == Decimal("50.00")
    assert record.total_deductions == 0
    assert record.net_salary == Decimal("3050.00")


def test_friday_work_override_without_attendance_is_an_absence():
    friday = date(2025, 3, 7)
    override = CalendarOverride(override_id=1, override_date=friday, day_type="work", pay_rate=Decimal("1.5"))

    record = _run(_full_presence(), overrides=[override])

    assert [(i.name, i.amount) for i in record.items] == [("Absence penalty", Decimal("100.00"))]


def test_paid_holiday_with_premium_and_bonus():
    holiday = date(2025, 3, 10)
    attendance = _full_presence()
    del attendance[holiday]
    override = CalendarOverride(
        override_id=1,
        override_date=holiday,
        day_type="off_paid",
        pay_rate=Decimal("2"),
        bonus_fixed=Decimal("200"),
    )

    record = _run(attendance, overrides=[override])

    assert [(i.name, i.amount) for i in record.items] == [
        ("Bonus for day 10", Decimal("200.00")),
        ("Rate bonus for day 10", Decimal("100.00")),
    ]
    assert record.total_allowances == Decimal("300.00")
    assert record.net_salary == Decimal("3300.00")


def test_item_order_daily_items_then_summaries():
    attendance = _full_presence()
    attendance[date(2025, 3, 4)] = replace(attendance[date(2025, 3, 4)], late_minutes=20)
    attendance[date(2025, 3, 5)] = replace(attendance[date(2025, 3, 5)], overtime_minutes=60)
    del attendance[date(2025, 3, 11)]
    overrides = [
        CalendarOverride(override_id=2, override_date=date(2025, 3, 20), day_type="special", bonus_fixed=Decimal("50")),
        CalendarOverride(override_id=1, override_date=date(2025, 3, 12), day_type="work", bonus_fixed=Decimal("25")),
    ]

    record = _run(attendance, overrides=overrides)

    assert [i.name for i in record.items] == [
        "Bonus for day 12",
        "Bonus for day 20",
        "Absence penalty",
        "Lateness penalty",
        "Overtime",
    ]
    allowances = sum(i.amount for i in record.items if i.item_type == LineItemType.ALLOWANCE)
    deductions = sum(i.amount for i in record.items if i.item_type == LineItemType.DEDUCTION)
    assert record.total_allowances == allowances
    assert record.total_deductions == deductions
    assert record.net_salary == Decimal("3000.00") + allowances - deductions


def test_net_salary_never_negative():
    settings = PayrollSettings(working_days_per_month=30, absence_penalty_rate=Decimal("5"))

    record = _run({}, settings=settings)

    assert record.total_deductions > record.base_salary
    assert record.net_salary == Decimal("0.00")


def test_more_late_minutes_never_lower_deductions():
    day = date(2025, 3, 4)
    previous_total = None
    previous_lateness = Decimal("0")

    for minutes in range(0, 121):
        attendance = _full_presence()
        attendance[day] = replace(attendance[day], status=AttendanceStatus.LATE, late_minutes=minutes)
        record = _run(attendance)

        lateness = sum((i.amount for i in record.items if i.name == "Lateness penalty"), Decimal("0"))
        assert lateness >= previous_lateness
        if previous_total is not None:
            assert record.total_deductions >= previous_total
        previous_lateness = lateness
        previous_total = record.total_deductions
