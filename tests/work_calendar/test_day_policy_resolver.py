from datetime import date, time, timedelta
from decimal import Decimal

from src.school_payroll.school_payroll.core.enums import DayPolicySource
from src.school_payroll.school_payroll.hr_settings.model import DaySetting, PayrollSettings
from src.school_payroll.school_payroll.work_calendar.model import CalendarOverride, ResolvedDayPolicy
from src.school_payroll.school_payroll.work_calendar.resolver import index_overrides, resolve_day_policy

# March 2025: the 1st is a Saturday, the 3rd a Monday, the 7th a Friday.
MONDAY = date(2025, 3, 3)
FRIDAY = date(2025, 3, 7)


def test_every_date_of_a_year_resolves_to_one_policy():
    settings = PayrollSettings(day_settings={"thursday": DaySetting(is_off=False, end_time=time(13, 0))})
    overrides = index_overrides([CalendarOverride(override_date=date(2024, 2, 29), day_type="off_paid")])

    day = date(2024, 1, 1)
    while day.year == 2024:
        policy = resolve_day_policy(day, overrides, settings)
        assert isinstance(policy, ResolvedDayPolicy)
        assert policy.day == day
        day += timedelta(days=1)


def test_global_weekend_marks_friday_and_saturday_off():
    settings = PayrollSettings.defaults()

    friday = resolve_day_policy(FRIDAY, {}, settings)
    saturday = resolve_day_policy(date(2025, 3, 8), {}, settings)
    monday = resolve_day_policy(MONDAY, {}, settings)

    assert friday.is_off and saturday.is_off
    assert not monday.is_off
    assert monday.source == DayPolicySource.GLOBAL
    assert monday.pay_rate == Decimal("1.0")
    assert monday.bonus == 0
    assert monday.shift_end == time(15, 45)


def test_weekday_default_beats_global_weekend():
    settings = PayrollSettings(day_settings={"friday": {"is_off": False, "end_time": "12:00"}})

    policy = resolve_day_policy(FRIDAY, {}, settings)

    assert policy.is_off is False
    assert policy.shift_end == time(12, 0)
    assert policy.source == DayPolicySource.WEEK_DEFAULT


def test_weekday_default_without_end_time_uses_official_end():
    settings = PayrollSettings(day_settings={"monday": DaySetting(is_off=True)})

    policy = resolve_day_policy(MONDAY, {}, settings)

    assert policy.is_off is True
    assert policy.shift_end == settings.official_end_time


def test_override_beats_weekday_default():
    settings = PayrollSettings(day_settings={"monday": DaySetting(is_off=True, end_time=time(12, 0))})
    override = CalendarOverride(
        override_date=MONDAY,
        day_type="work",
        pay_rate=Decimal("2"),
        bonus_fixed=Decimal("150"),
    )

    policy = resolve_day_policy(MONDAY, index_overrides([override]), settings)

    assert policy.is_off is False
    assert policy.pay_rate == Decimal("2")
    assert policy.bonus == Decimal("150")
    # The override decides alone; its missing end time falls back to the official one, not the weekday's.
    assert policy.shift_end == time(15, 45)
    assert policy.source == DayPolicySource.CALENDAR


def test_override_defaults_and_custom_end_time():
    override = CalendarOverride(override_date=FRIDAY, day_type="work", custom_end_time=time(11, 30))

    policy = resolve_day_policy(FRIDAY, index_overrides([override]), PayrollSettings.defaults())

    assert policy.is_off is False
    assert policy.pay_rate == Decimal("1.0")
    assert policy.bonus == 0
    assert policy.shift_end == time(11, 30)


def test_any_day_type_containing_off_is_an_off_day():
    for tag in ("off_paid", "off_unpaid", "paid-off"):
        override = CalendarOverride(override_date=MONDAY, day_type=tag)
        assert resolve_day_policy(MONDAY, index_overrides([override]), PayrollSettings.defaults()).is_off

    half_day = CalendarOverride(override_date=MONDAY, day_type="half_day")
    assert not resolve_day_policy(MONDAY, index_overrides([half_day]), PayrollSettings.defaults()).is_off


def test_duplicate_overrides_resolve_to_lowest_id():
    later = CalendarOverride(override_id=9, override_date=MONDAY, day_type="off_paid")
    earlier = CalendarOverride(override_id=3, override_date=MONDAY, day_type="work", pay_rate=Decimal("1.5"))

    indexed = index_overrides([later, earlier])

    assert indexed[MONDAY] is earlier
    assert index_overrides([earlier, later])[MONDAY] is earlier


def test_null_weekday_entry_falls_through_to_weekend():
    settings = PayrollSettings.from_mapping(
        {"day_settings": {"friday": None, "monday": "closed", "thursday": {"end_time": "12:00"}}}
    )

    friday = resolve_day_policy(FRIDAY, {}, settings)
    monday = resolve_day_policy(MONDAY, {}, settings)

    assert set(settings.day_settings) == {"thursday"}
    assert friday.is_off
    assert friday.source == DayPolicySource.GLOBAL
    assert not monday.is_off
    assert monday.source == DayPolicySource.GLOBAL


def test_weekday_default_start_time():
    settings = PayrollSettings(day_settings={"monday": {"start_time": "09:30", "end_time": "13:00"}})
    tuesday = date(2025, 3, 4)

    monday = resolve_day_policy(MONDAY, {}, settings)

    assert (monday.shift_start, monday.shift_end) == (time(9, 30), time(13, 0))
    assert resolve_day_policy(tuesday, {}, settings).shift_start == time(8, 0)
