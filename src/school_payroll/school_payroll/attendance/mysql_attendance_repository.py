from __future__ import annotations

import logging
from datetime import date
from typing import Any, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time, optional_decimal
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_attendance_status(raw: Any) -> AttendanceStatus:
    """Statuses outside the known set are not presence; they pay like an absence."""
    try:
        return AttendanceStatus(str(raw or "").strip().lower())
    except ValueError:
        logger.warning("Unknown attendance status %r, counted as absent", raw)
        return AttendanceStatus.ABSENT


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, school_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, status, check_out_time,
                       late_minutes, overtime_minutes, worked_hours
                FROM employee_attendance
                WHERE school_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY employee_id, work_date
                """,
                (school_id, start, end),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    status=parse_attendance_status(r.get("status")),
                    check_out_time=normalize_mysql_time(r.get("check_out_time")),
                    late_minutes=int(r.get("late_minutes") or 0),
                    overtime_minutes=int(r.get("overtime_minutes") or 0),
                    worked_hours=optional_decimal(r.get("worked_hours")),
                )
                for r in rows
            ]
