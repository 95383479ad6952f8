from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import time
from decimal import Decimal
from typing import Any, Dict, FrozenSet, Mapping, Optional

from ..common.datetime_utils import parse_time_of_day
from ..common.money import to_decimal
from ..common.validators import require_positive
from ..core import constants as c
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DaySetting:
    """Per-weekday default: whether the weekday is off and its shift times."""

    is_off: bool = False
    end_time: Optional[time] = None
    start_time: Optional[time] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DaySetting":
        return cls(
            is_off=bool(data.get("is_off", False)),
            end_time=parse_time_of_day(data.get("end_time")),
            start_time=parse_time_of_day(data.get("start_time")),
        )


def _normalize_day_settings(raw: Mapping[str, Any]) -> Dict[str, DaySetting]:
    """Lowercase weekday keys; null or non-object entries mean "no weekday default"."""
    normalized: Dict[str, DaySetting] = {}
    for key, value in (raw or {}).items():
        if isinstance(value, DaySetting):
            normalized[str(key).lower()] = value
        elif isinstance(value, Mapping):
            normalized[str(key).lower()] = DaySetting.from_mapping(value)
    return normalized


_DECIMAL_FIELDS = (
    "absence_penalty_rate",
    "lateness_penalty_rate",
    "early_departure_penalty_rate",
    "overtime_rate",
    "working_hours_per_day",
    "working_days_per_month",
)
_MINUTE_FIELDS = ("lateness_grace_period", "max_grace_period", "early_departure_grace_period")


@dataclass(frozen=True)
class PayrollSettings:
    """School-wide payroll rules.

    Field defaults are the rules applied when a school never saved settings.
    `weekend_days` uses Sunday = 0 ... Saturday = 6; `day_settings` is keyed
    by lowercase English weekday name and takes precedence over
    `weekend_days` for the weekdays it lists.
    """

    absence_penalty_rate: Decimal = c.DEFAULT_ABSENCE_PENALTY_RATE
    lateness_penalty_rate: Decimal = c.DEFAULT_LATENESS_PENALTY_RATE
    early_departure_penalty_rate: Decimal = c.DEFAULT_EARLY_DEPARTURE_PENALTY_RATE
    overtime_rate: Decimal = c.DEFAULT_OVERTIME_RATE
    lateness_grace_period: int = c.DEFAULT_LATENESS_GRACE_MINUTES
    max_grace_period: int = c.DEFAULT_MAX_GRACE_MINUTES
    early_departure_grace_period: int = c.DEFAULT_EARLY_DEPARTURE_GRACE_MINUTES
    official_start_time: time = c.DEFAULT_OFFICIAL_START_TIME
    official_end_time: time = c.DEFAULT_OFFICIAL_END_TIME
    working_hours_per_day: Decimal = c.DEFAULT_WORKING_HOURS_PER_DAY
    working_days_per_month: Decimal = c.DEFAULT_WORKING_DAYS_PER_MONTH
    weekend_days: FrozenSet[int] = c.DEFAULT_WEEKEND_DAYS
    day_settings: Mapping[str, DaySetting] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__.
        for name in _DECIMAL_FIELDS:
            object.__setattr__(self, name, to_decimal(getattr(self, name), field_name=name))
        for name in _MINUTE_FIELDS:
            object.__setattr__(self, name, int(getattr(self, name)))
        for name in ("official_start_time", "official_end_time"):
            object.__setattr__(self, name, parse_time_of_day(getattr(self, name)))
        object.__setattr__(self, "weekend_days", frozenset(int(d) for d in self.weekend_days))
        object.__setattr__(self, "day_settings", _normalize_day_settings(self.day_settings))

        require_positive(self.working_hours_per_day, "working_hours_per_day")
        require_positive(self.working_days_per_month, "working_days_per_month")
        if any(d < 0 or d > 6 for d in self.weekend_days):
            raise ValidationError("weekend_days must be weekday indices between 0 (Sunday) and 6 (Saturday)")

    @classmethod
    def defaults(cls) -> "PayrollSettings":
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PayrollSettings":
        """Build settings from a loosely typed mapping; missing or null keys keep their defaults."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})
