from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json, fetchone, normalize_mysql_time
from .model import PayrollSettings
from .repository import PayrollSettingsRepository


class MySQLPayrollSettingsRepository(PayrollSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_school(self, *, school_id: str) -> Optional[PayrollSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT absence_penalty_rate, lateness_penalty_rate, early_departure_penalty_rate,
                       overtime_rate, lateness_grace_period_minutes, max_grace_period_minutes,
                       early_departure_grace_minutes, official_start_time, official_end_time,
                       working_hours_per_day, working_days_per_month, weekend_days, day_settings
                FROM hr_system_settings
                WHERE school_id=%s
                """,
                (school_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PayrollSettings.from_mapping(
                {
                    "absence_penalty_rate": r.get("absence_penalty_rate"),
                    "lateness_penalty_rate": r.get("lateness_penalty_rate"),
                    "early_departure_penalty_rate": r.get("early_departure_penalty_rate"),
                    "overtime_rate": r.get("overtime_rate"),
                    "lateness_grace_period": r.get("lateness_grace_period_minutes"),
                    "max_grace_period": r.get("max_grace_period_minutes"),
                    "early_departure_grace_period": r.get("early_departure_grace_minutes"),
                    "official_start_time": normalize_mysql_time(r.get("official_start_time")),
                    "official_end_time": normalize_mysql_time(r.get("official_end_time")),
                    "working_hours_per_day": r.get("working_hours_per_day"),
                    "working_days_per_month": r.get("working_days_per_month"),
                    "weekend_days": decode_json(r.get("weekend_days"), None),
                    "day_settings": decode_json(r.get("day_settings"), None),
                }
            )
