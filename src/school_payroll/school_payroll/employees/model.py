from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class EmployeeCompensationProfile:
    """Domain entity: the part of an HR roster entry that payroll reads.

    Note: Plain data object, no database access.
    """

    employee_id: int
    full_name: str
    base_salary: Decimal
    is_active: bool = True
