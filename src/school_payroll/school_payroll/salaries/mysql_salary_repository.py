from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import LineItemType, SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryLineItem, SalaryRecord
from .repository import SalaryRepository

_SALARY_COLUMNS = """
    salary_id, employee_id, month, base_salary, total_allowances, total_deductions,
    net_salary, status, payment_date, payment_method
"""


def _to_item(r: Dict[str, Any]) -> SalaryLineItem:
    return SalaryLineItem(
        item_type=LineItemType(r["item_type"]),
        name=r["item_name"],
        amount=to_decimal(r["amount"]),
        note=r.get("notes") or "",
    )


def _to_record(r: Dict[str, Any], items: List[SalaryLineItem]) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        month=r["month"],
        base_salary=to_decimal(r["base_salary"]),
        total_allowances=to_decimal(r["total_allowances"]),
        total_deductions=to_decimal(r["total_deductions"]),
        net_salary=to_decimal(r["net_salary"]),
        status=SalaryStatus(r["status"]),
        payment_date=r.get("payment_date"),
        payment_method=r.get("payment_method"),
        items=tuple(items),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists_for(self, *, employee_id: int, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM salaries WHERE employee_id=%s AND month=%s LIMIT 1",
                (int(employee_id), month),
            )
            return fetchone(cur) is not None

    def create_with_items(self, *, school_id: str, record: SalaryRecord) -> int:
        # One transaction: a failing item insert rolls the salary row back too.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(
                    school_id, employee_id, month, base_salary, total_allowances,
                    total_deductions, net_salary, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    school_id,
                    int(record.employee_id),
                    record.month,
                    record.base_salary,
                    record.total_allowances,
                    record.total_deductions,
                    record.net_salary,
                    record.status.value,
                ),
            )
            salary_id = int(cur.lastrowid)

            if record.items:
                cur.executemany(
                    """
                    INSERT INTO salary_items(salary_id, position, item_type, item_name, amount, notes)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (salary_id, position, item.item_type.value, item.name, item.amount, item.note or None)
                        for position, item in enumerate(record.items)
                    ],
                )
            return salary_id

    def get_by_id(self, *, school_id: str, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SALARY_COLUMNS} FROM salaries WHERE school_id=%s AND salary_id=%s",
                (school_id, int(salary_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            items = self._load_items(cur, [int(r["salary_id"])])
            return _to_record(r, items.get(int(r["salary_id"]), []))

    def list_month(self, *, school_id: str, month: str) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SALARY_COLUMNS}
                FROM salaries
                WHERE school_id=%s AND month=%s
                ORDER BY employee_id ASC
                """,
                (school_id, month),
            )
            rows = fetchall(cur)
            items = self._load_items(cur, [int(r["salary_id"]) for r in rows])
            return [_to_record(r, items.get(int(r["salary_id"]), [])) for r in rows]

    def mark_paid(self, *, school_id: str, salary_id: int, payment_date: date, payment_method: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salaries
                SET status=%s, payment_date=%s, payment_method=%s
                WHERE school_id=%s AND salary_id=%s AND status=%s
                """,
                (
                    SalaryStatus.PAID.value,
                    payment_date,
                    payment_method,
                    school_id,
                    int(salary_id),
                    SalaryStatus.DUE.value,
                ),
            )
            return cur.rowcount > 0

    def record_expense(
        self,
        *,
        school_id: str,
        salary_id: int,
        transaction_date: date,
        amount: Decimal,
        description: str,
        payment_method: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO general_transactions(
                    school_id, transaction_date, transaction_type, amount, description,
                    reference_type, reference_id, payment_method
                )
                VALUES(%s,%s,'expense',%s,%s,'salary',%s,%s)
                """,
                (school_id, transaction_date, amount, description, int(salary_id), payment_method),
            )
            return int(cur.lastrowid)

    @staticmethod
    def _load_items(cur, salary_ids: List[int]) -> Dict[int, List[SalaryLineItem]]:
        out: Dict[int, List[SalaryLineItem]] = defaultdict(list)
        if not salary_ids:
            return out
        placeholders = ",".join(["%s"] * len(salary_ids))
        cur.execute(
            f"""
            SELECT salary_id, item_type, item_name, amount, notes
            FROM salary_items
            WHERE salary_id IN ({placeholders})
            ORDER BY salary_id ASC, position ASC, item_id ASC
            """,
            tuple(salary_ids),
        )
        for r in fetchall(cur):
            out[int(r["salary_id"])].append(_to_item(r))
        return out
