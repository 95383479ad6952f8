from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Mapping

from ..common.datetime_utils import weekday_index, weekday_name
from ..common.money import ZERO
from ..core.enums import DayPolicySource, DayType
from ..hr_settings.model import PayrollSettings
from .model import CalendarOverride, ResolvedDayPolicy

ONE = Decimal("1.0")


def index_overrides(overrides: Iterable[CalendarOverride]) -> Dict[date, CalendarOverride]:
    """Map each date to the override that applies to it.

    Several overrides on one date should not exist; if they do, the lowest
    override_id wins (unsaved overrides without an id rank last, in input order).
    """
    ranked = sorted(
        enumerate(overrides),
        key=lambda pair: (pair[1].override_id is None, pair[1].override_id or 0, pair[0]),
    )
    by_date: Dict[date, CalendarOverride] = {}
    for _, override in ranked:
        by_date.setdefault(override.override_date, override)
    return by_date


def resolve_day_policy(
    day: date,
    overrides: Mapping[date, CalendarOverride],
    settings: PayrollSettings,
) -> ResolvedDayPolicy:
    """Resolve the day policy: date override > weekday default > global weekend.

    The first layer that has an entry for the date decides everything; lower
    layers are not consulted for the fields it leaves empty, except that
    missing times fall back to the official school hours.
    """
    override = overrides.get(day)
    if override is not None:
        return ResolvedDayPolicy(
            day=day,
            is_off=override.is_off,
            pay_rate=override.pay_rate if override.pay_rate is not None else ONE,
            bonus=override.bonus_fixed if override.bonus_fixed is not None else ZERO,
            shift_start=override.custom_start_time or settings.official_start_time,
            shift_end=override.custom_end_time or settings.official_end_time,
            day_type=override.day_type,
            source=DayPolicySource.CALENDAR,
        )

    day_setting = settings.day_settings.get(weekday_name(day))
    if day_setting is not None:
        return ResolvedDayPolicy(
            day=day,
            is_off=day_setting.is_off,
            pay_rate=ONE,
            bonus=ZERO,
            shift_start=day_setting.start_time or settings.official_start_time,
            shift_end=day_setting.end_time or settings.official_end_time,
            day_type=DayType.OFF_PAID.value if day_setting.is_off else DayType.WORK.value,
            source=DayPolicySource.WEEK_DEFAULT,
        )

    is_weekend = weekday_index(day) in settings.weekend_days
    return ResolvedDayPolicy(
        day=day,
        is_off=is_weekend,
        pay_rate=ONE,
        bonus=ZERO,
        shift_start=settings.official_start_time,
        shift_end=settings.official_end_time,
        day_type=DayType.OFF_PAID.value if is_weekend else DayType.WORK.value,
        source=DayPolicySource.GLOBAL,
    )
