from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.money import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeCompensationProfile
from .repository import EmployeeRepository


def _to_profile(row: Dict[str, Any]) -> EmployeeCompensationProfile:
    return EmployeeCompensationProfile(
        employee_id=int(row["employee_id"]),
        full_name=row["full_name"],
        base_salary=to_decimal(row["base_salary"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, *, school_id: str) -> Sequence[EmployeeCompensationProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, base_salary, is_active
                FROM employees
                WHERE school_id=%s AND is_active=1
                ORDER BY employee_id
                """,
                (school_id,),
            )
            return [_to_profile(r) for r in fetchall(cur)]

    def get_by_id(self, *, school_id: str, employee_id: int) -> Optional[EmployeeCompensationProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, base_salary, is_active
                FROM employees
                WHERE school_id=%s AND employee_id=%s
                """,
                (school_id, int(employee_id)),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None
