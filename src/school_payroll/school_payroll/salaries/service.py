from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..common.datetime_utils import parse_month
from ..common.validators import require_non_empty
from ..core.enums import SalaryStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalaryService:
    def __init__(self, salaries: SalaryRepository, *, school_id: str):
        self._salaries = salaries
        self._school_id = school_id

    def list_month(self, month: str) -> Sequence[SalaryRecord]:
        parse_month(month)
        return self._salaries.list_month(school_id=self._school_id, month=month)

    def pay_salary(self, salary_id: int, *, payment_date: date, payment_method: str) -> SalaryRecord:
        """Mark a due salary as paid and book its net amount as an expense.

        The ledger entry is best effort: when it fails the salary stays paid
        and the failure is only logged.
        """
        payment_method = require_non_empty(payment_method, "payment_method")

        salary = self._salaries.get_by_id(school_id=self._school_id, salary_id=int(salary_id))
        if salary is None:
            raise NotFoundError(f"Salary {salary_id} not found")
        if salary.status == SalaryStatus.PAID:
            raise ValidationError(f"Salary {salary_id} is already paid")

        updated = self._salaries.mark_paid(
            school_id=self._school_id,
            salary_id=int(salary_id),
            payment_date=payment_date,
            payment_method=payment_method,
        )
        if not updated:
            raise ValidationError(f"Salary {salary_id} could not be marked as paid")

        try:
            self._salaries.record_expense(
                school_id=self._school_id,
                salary_id=int(salary_id),
                transaction_date=payment_date,
                amount=salary.net_salary,
                description=f"Salary of employee {salary.employee_id} - {salary.month}",
                payment_method=payment_method,
            )
        except Exception:
            logger.warning("Salary %s paid but the ledger entry could not be recorded", salary_id, exc_info=True)

        logger.info("Salary %s paid on %s via %s", salary_id, payment_date.isoformat(), payment_method)
        return self._salaries.get_by_id(school_id=self._school_id, salary_id=int(salary_id)) or salary
