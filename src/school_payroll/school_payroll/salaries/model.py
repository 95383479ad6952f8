from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from ..core.enums import LineItemType, SalaryStatus


@dataclass(frozen=True)
class SalaryLineItem:
    """One allowance or deduction composing a salary record."""

    item_type: LineItemType
    name: str
    amount: Decimal
    note: str = ""

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.item_type == LineItemType.ALLOWANCE else -self.amount


@dataclass(frozen=True)
class SalaryRecord:
    """Domain entity: one employee's salary for one month (YYYY-MM)."""

    employee_id: int
    month: str
    base_salary: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    status: SalaryStatus = SalaryStatus.DUE
    items: Tuple[SalaryLineItem, ...] = field(default_factory=tuple)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    salary_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "salary_id": self.salary_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "base_salary": str(self.base_salary),
            "total_allowances": str(self.total_allowances),
            "total_deductions": str(self.total_deductions),
            "net_salary": str(self.net_salary),
            "status": self.status.value,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "payment_method": self.payment_method,
            "items": [
                {"item_type": i.item_type.value, "name": i.name, "amount": str(i.amount), "note": i.note}
                for i in self.items
            ],
        }
