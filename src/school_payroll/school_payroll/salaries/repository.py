from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import SalaryRecord


class SalaryRepository(Protocol):
    def exists_for(self, *, employee_id: int, month: str) -> bool:
        raise NotImplementedError

    def create_with_items(self, *, school_id: str, record: SalaryRecord) -> int:
        """Persist the salary row and its line items together.

        Returns salary_id.
        """

        raise NotImplementedError

    def get_by_id(self, *, school_id: str, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_month(self, *, school_id: str, month: str) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def mark_paid(self, *, school_id: str, salary_id: int, payment_date: date, payment_method: str) -> bool:
        """Transition a due salary to paid. Returns False when nothing was updated."""

        raise NotImplementedError

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
        """Add the paid salary to the school's general ledger as an expense."""

        raise NotImplementedError
