from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_negative
from ..core.enums import DayType
from ..core.exceptions import NotFoundError, ValidationError
from ..hr_settings.model import PayrollSettings
from ..hr_settings.repository import PayrollSettingsRepository
from .model import CalendarOverride, ResolvedDayPolicy
from .repository import CalendarOverrideRepository
from .resolver import index_overrides, resolve_day_policy


class CalendarService:
    """Manage a school's calendar overrides and explain how a date resolves."""

    def __init__(
        self,
        overrides: CalendarOverrideRepository,
        settings: PayrollSettingsRepository,
        *,
        school_id: str,
    ):
        self._overrides = overrides
        self._settings = settings
        self._school_id = school_id

    def list_range(self, *, start: date, end: date) -> Sequence[CalendarOverride]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._overrides.list_range(school_id=self._school_id, start=start, end=end)

    def save_override(self, override: CalendarOverride) -> int:
        try:
            day_type = DayType(override.day_type)
        except ValueError:
            allowed = ", ".join(t.value for t in DayType)
            raise ValidationError(f"Unknown day type {override.day_type!r} (allowed: {allowed})") from None

        pay_rate = require_non_negative(override.pay_rate, "pay_rate") if override.pay_rate is not None else None
        bonus = require_non_negative(override.bonus_fixed, "bonus_fixed") if override.bonus_fixed is not None else None
        if (
            override.custom_start_time
            and override.custom_end_time
            and override.custom_end_time <= override.custom_start_time
        ):
            raise ValidationError("Custom end time must be after custom start time")

        note = override.note.strip() if override.note else None
        cleaned = replace(override, day_type=day_type.value, pay_rate=pay_rate, bonus_fixed=bonus, note=note or None)
        return self._overrides.upsert(school_id=self._school_id, override=cleaned)

    def delete_override(self, day: date) -> None:
        if not self._overrides.delete(school_id=self._school_id, day=day):
            raise NotFoundError(f"No calendar override on {day.isoformat()}")

    def describe_day(self, day: date) -> ResolvedDayPolicy:
        settings = self._load_settings()
        override: Optional[CalendarOverride] = self._overrides.get_for_date(school_id=self._school_id, day=day)
        return resolve_day_policy(day, index_overrides([override] if override else []), settings)

    def _load_settings(self) -> PayrollSettings:
        return self._settings.get_for_school(school_id=self._school_id) or PayrollSettings.defaults()
