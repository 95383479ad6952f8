from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..core.enums import RunOutcome
from ..core.exceptions import NotFoundError, PayrollRunError, SetupError
from ..employees.model import EmployeeCompensationProfile
from ..employees.repository import EmployeeRepository
from ..hr_settings.model import PayrollSettings
from ..hr_settings.repository import PayrollSettingsRepository
from ..salaries.model import SalaryRecord
from ..salaries.repository import SalaryRepository
from ..work_calendar.model import CalendarOverride
from ..work_calendar.repository import CalendarOverrideRepository
from ..work_calendar.resolver import index_overrides
from .aggregator import aggregate_month
from .calculator.base import DailyPayCalculator
from .calculator.standard_calculator import StandardDailyPayCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeRunOutcome:
    employee_id: int
    outcome: RunOutcome
    salary_id: Optional[int] = None
    net_salary: Optional[Decimal] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class PayrollRunResult:
    """What happened to every employee of one payroll run."""

    month: str
    outcomes: Tuple[EmployeeRunOutcome, ...] = ()
    cancelled: bool = False

    def _count(self, outcome: RunOutcome) -> int:
        return sum(1 for o in self.outcomes if o.outcome == outcome)

    @property
    def created_count(self) -> int:
        return self._count(RunOutcome.CREATED)

    @property
    def skipped_count(self) -> int:
        return self._count(RunOutcome.SKIPPED)

    @property
    def failed_count(self) -> int:
        return self._count(RunOutcome.FAILED)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "created": self.created_count,
            "skipped": self.skipped_count,
            "failed": self.failed_count,
            "cancelled": self.cancelled,
            "employees": [
                {
                    "employee_id": o.employee_id,
                    "outcome": o.outcome.value,
                    "salary_id": o.salary_id,
                    "net_salary": str(o.net_salary) if o.net_salary is not None else None,
                    "reason": o.reason,
                }
                for o in self.outcomes
            ],
        }


@dataclass(frozen=True)
class PayrollSnapshot:
    """Everything a run reads, fetched once before the first employee is processed."""

    month: str
    settings: PayrollSettings
    overrides: Mapping[date, CalendarOverride]
    attendance: Mapping[int, Mapping[date, AttendanceRecord]] = field(default_factory=dict)

    def attendance_for(self, employee_id: int) -> Mapping[date, AttendanceRecord]:
        return self.attendance.get(employee_id, {})


def index_attendance(records: Sequence[AttendanceRecord]) -> Dict[int, Dict[date, AttendanceRecord]]:
    by_employee: Dict[int, Dict[date, AttendanceRecord]] = defaultdict(dict)
    for record in records:
        by_employee[record.employee_id].setdefault(record.work_date, record)
    return dict(by_employee)


class PayrollRunService:
    """Monthly salary generation for every active employee of one school."""

    def __init__(
        self,
        employees: EmployeeRepository,
        settings: PayrollSettingsRepository,
        overrides: CalendarOverrideRepository,
        attendance: AttendanceRepository,
        salaries: SalaryRepository,
        *,
        school_id: Optional[str],
        calculator: Optional[DailyPayCalculator] = None,
    ):
        self._employees = employees
        self._settings = settings
        self._overrides = overrides
        self._attendance = attendance
        self._salaries = salaries
        self._school_id = school_id
        self._calculator = calculator or StandardDailyPayCalculator()

    def generate_monthly_salaries(
        self,
        month: str,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> PayrollRunResult:
        """Create the salary of every active employee that has none for `month` yet.

        Re-running a month only creates the missing salaries. A failing
        employee is logged and reported in the result; the run goes on.
        Cancellation is checked between employees.
        """
        school_id = self._require_school()
        month_bounds(month)

        try:
            roster = list(self._employees.list_active(school_id=school_id))
        except Exception as exc:
            raise SetupError(f"Could not load the employee roster of school {school_id}") from exc
        snapshot = self._take_snapshot(month)

        logger.info("Payroll run %s for school %s: %d active employees", month, school_id, len(roster))

        outcomes = []
        cancelled = False
        for employee in roster:
            if cancel_event is not None and cancel_event.is_set():
                cancelled = True
                logger.warning("Payroll run %s cancelled after %d employees", month, len(outcomes))
                break
            outcomes.append(self._process_employee(employee, snapshot))

        result = PayrollRunResult(month=month, outcomes=tuple(outcomes), cancelled=cancelled)
        logger.info(
            "Payroll run %s done: created=%d skipped=%d failed=%d",
            month,
            result.created_count,
            result.skipped_count,
            result.failed_count,
        )

        if result.failed_count and not result.created_count:
            raise PayrollRunError(f"Payroll run {month} failed for every processed employee", result=result)
        return result

    def preview_employee(self, employee_id: int, month: str) -> SalaryRecord:
        """Compute one employee's salary for `month` without saving it."""
        school_id = self._require_school()
        month_bounds(month)

        employee = self._employees.get_by_id(school_id=school_id, employee_id=int(employee_id))
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")

        snapshot = self._take_snapshot(month)
        return self._compute(employee, snapshot)

    def _require_school(self) -> str:
        if not self._school_id:
            raise SetupError("No school selected for the payroll run")
        return self._school_id

    def _take_snapshot(self, month: str) -> PayrollSnapshot:
        school_id = self._require_school()
        start, end = month_bounds(month)
        try:
            settings = self._settings.get_for_school(school_id=school_id)
            overrides = self._overrides.list_range(school_id=school_id, start=start, end=end)
            attendance = self._attendance.list_range(school_id=school_id, start=start, end=end)
        except Exception as exc:
            raise SetupError(f"Could not load payroll data of school {school_id} for {month}") from exc

        if settings is None:
            logger.info("School %s has no payroll settings, using defaults", school_id)
            settings = PayrollSettings.defaults()

        return PayrollSnapshot(
            month=month,
            settings=settings,
            overrides=index_overrides(overrides),
            attendance=index_attendance(attendance),
        )

    def _compute(self, employee: EmployeeCompensationProfile, snapshot: PayrollSnapshot) -> SalaryRecord:
        return aggregate_month(
            employee,
            snapshot.month,
            overrides=snapshot.overrides,
            attendance=snapshot.attendance_for(employee.employee_id),
            settings=snapshot.settings,
            calculator=self._calculator,
        )

    def _process_employee(self, employee: EmployeeCompensationProfile, snapshot: PayrollSnapshot) -> EmployeeRunOutcome:
        employee_id = employee.employee_id
        try:
            if self._salaries.exists_for(employee_id=employee_id, month=snapshot.month):
                logger.debug("Employee %s already has a salary for %s", employee_id, snapshot.month)
                return EmployeeRunOutcome(employee_id=employee_id, outcome=RunOutcome.SKIPPED)

            record = self._compute(employee, snapshot)
            salary_id = self._salaries.create_with_items(school_id=self._school_id, record=record)
        except Exception as exc:
            logger.exception("Could not generate the %s salary of employee %s", snapshot.month, employee_id)
            return EmployeeRunOutcome(
                employee_id=employee_id,
                outcome=RunOutcome.FAILED,
                reason=f"{type(exc).__name__}: {exc}",
            )

        return EmployeeRunOutcome(
            employee_id=employee_id,
            outcome=RunOutcome.CREATED,
            salary_id=salary_id,
            net_salary=record.net_salary,
        )
