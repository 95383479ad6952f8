from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeCompensationProfile


class EmployeeRepository(Protocol):
    """Repository interface for the employee roster.

    Note (DIP): payroll services depend on this interface, not on a concrete database.
    """

    def list_active(self, *, school_id: str) -> Sequence[EmployeeCompensationProfile]:
        raise NotImplementedError

    def get_by_id(self, *, school_id: str, employee_id: int) -> Optional[EmployeeCompensationProfile]:
        raise NotImplementedError
