from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, optional_decimal
from .model import CalendarOverride
from .repository import CalendarOverrideRepository

_COLUMNS = """
    override_id, override_date, day_type, pay_rate, bonus_fixed,
    custom_start_time, custom_end_time, note
"""


def _to_override(r: Dict[str, Any]) -> CalendarOverride:
    return CalendarOverride(
        override_id=int(r["override_id"]),
        override_date=r["override_date"],
        day_type=r["day_type"],
        pay_rate=optional_decimal(r.get("pay_rate")),
        bonus_fixed=optional_decimal(r.get("bonus_fixed")),
        custom_start_time=normalize_mysql_time(r.get("custom_start_time")),
        custom_end_time=normalize_mysql_time(r.get("custom_end_time")),
        note=r.get("note"),
    )


class MySQLCalendarOverrideRepository(CalendarOverrideRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, school_id: str, start: date, end: date) -> Sequence[CalendarOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM hr_calendar_overrides
                WHERE school_id=%s AND override_date BETWEEN %s AND %s
                ORDER BY override_date ASC, override_id ASC
                """,
                (school_id, start, end),
            )
            return [_to_override(r) for r in fetchall(cur)]

    def get_for_date(self, *, school_id: str, day: date) -> Optional[CalendarOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM hr_calendar_overrides
                WHERE school_id=%s AND override_date=%s
                ORDER BY override_id ASC
                LIMIT 1
                """,
                (school_id, day),
            )
            r = fetchone(cur)
            return _to_override(r) if r else None

    def upsert(self, *, school_id: str, override: CalendarOverride) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO hr_calendar_overrides(
                    school_id, override_date, day_type, pay_rate, bonus_fixed,
                    custom_start_time, custom_end_time, note
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    day_type=VALUES(day_type),
                    pay_rate=VALUES(pay_rate),
                    bonus_fixed=VALUES(bonus_fixed),
                    custom_start_time=VALUES(custom_start_time),
                    custom_end_time=VALUES(custom_end_time),
                    note=VALUES(note)
                """,
                (
                    school_id,
                    override.override_date,
                    override.day_type,
                    override.pay_rate,
                    override.bonus_fixed,
                    override.custom_start_time,
                    override.custom_end_time,
                    override.note,
                ),
            )

            # On update lastrowid can be 0; look the id up by its unique key.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT override_id FROM hr_calendar_overrides WHERE school_id=%s AND override_date=%s",
                (school_id, override.override_date),
            )
            r = fetchone(cur)
            return int(r["override_id"]) if r else 0

    def delete(self, *, school_id: str, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM hr_calendar_overrides WHERE school_id=%s AND override_date=%s",
                (school_id, day),
            )
            return cur.rowcount > 0
