from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

import pytest

from src.school_payroll.school_payroll.core.enums import LineItemType, SalaryStatus
from src.school_payroll.school_payroll.core.exceptions import NotFoundError, ValidationError
from src.school_payroll.school_payroll.salaries.model import SalaryLineItem, SalaryRecord
from src.school_payroll.school_payroll.salaries.service import SalaryService


class InMemorySalaryRepo:
    def __init__(self, records: List[SalaryRecord], *, ledger_fails: bool = False):
        self.records: Dict[int, SalaryRecord] = {r.salary_id: r for r in records}
        self.ledger: List[dict] = []
        self.ledger_fails = ledger_fails

    def get_by_id(self, *, school_id: str, salary_id: int) -> Optional[SalaryRecord]:
        return self.records.get(salary_id)

    def list_month(self, *, school_id: str, month: str):
        return [r for r in self.records.values() if r.month == month]

    def mark_paid(self, *, school_id: str, salary_id: int, payment_date: date, payment_method: str) -> bool:
        record = self.records.get(salary_id)
        if record is None or record.status != SalaryStatus.DUE:
            return False
        self.records[salary_id] = replace(
            record,
            status=SalaryStatus.PAID,
            payment_date=payment_date,
            payment_method=payment_method,
        )
        return True

    def record_expense(self, *, school_id, salary_id, transaction_date, amount, description, payment_method) -> int:
        if self.ledger_fails:
            raise RuntimeError("ledger unavailable")
        self.ledger.append({"salary_id": salary_id, "amount": amount, "description": description})
        return len(self.ledger)


def _salary(salary_id: int = 1, *, status: SalaryStatus = SalaryStatus.DUE, month: str = "2025-03") -> SalaryRecord:
    return SalaryRecord(
        salary_id=salary_id,
        employee_id=10 + salary_id,
        month=month,
        base_salary=Decimal("3000.00"),
        total_allowances=Decimal("0.00"),
        total_deductions=Decimal("100.00"),
        net_salary=Decimal("2900.00"),
        status=status,
        items=(SalaryLineItem(LineItemType.DEDUCTION, "Absence penalty", Decimal("100.00")),),
    )


def test_pay_due_salary_marks_paid_and_books_expense():
    repo = InMemorySalaryRepo([_salary()])
    svc = SalaryService(repo, school_id="s1")

    paid = svc.pay_salary(1, payment_date=date(2025, 4, 1), payment_method="bank_transfer")

    assert paid.status == SalaryStatus.PAID
    assert paid.payment_date == date(2025, 4, 1)
    assert paid.payment_method == "bank_transfer"
    assert repo.ledger == [
        {"salary_id": 1, "amount": Decimal("2900.00"), "description": "Salary of employee 11 - 2025-03"}
    ]


def test_pay_twice_is_rejected():
    repo = InMemorySalaryRepo([_salary(status=SalaryStatus.PAID)])
    svc = SalaryService(repo, school_id="s1")

    with pytest.raises(ValidationError):
        svc.pay_salary(1, payment_date=date(2025, 4, 1), payment_method="cash")
    assert repo.ledger == []


def test_pay_unknown_salary():
    svc = SalaryService(InMemorySalaryRepo([]), school_id="s1")

    with pytest.raises(NotFoundError):
        svc.pay_salary(42, payment_date=date(2025, 4, 1), payment_method="cash")


def test_payment_method_is_required():
    svc = SalaryService(InMemorySalaryRepo([_salary()]), school_id="s1")

    with pytest.raises(ValidationError):
        svc.pay_salary(1, payment_date=date(2025, 4, 1), payment_method="  ")


def test_ledger_failure_keeps_salary_paid(caplog):
    repo = InMemorySalaryRepo([_salary()], ledger_fails=True)
    svc = SalaryService(repo, school_id="s1")

    with caplog.at_level("WARNING"):
        paid = svc.pay_salary(1, payment_date=date(2025, 4, 1), payment_method="cash")

    assert paid.status == SalaryStatus.PAID
    assert repo.records[1].status == SalaryStatus.PAID
    assert "ledger entry could not be recorded" in caplog.text


def test_list_month_filters_and_validates():
    repo = InMemorySalaryRepo([_salary(1), _salary(2, month="2025-04")])
    svc = SalaryService(repo, school_id="s1")

    assert [r.salary_id for r in svc.list_month("2025-03")] == [1]
    with pytest.raises(ValidationError):
        svc.list_month("March")
