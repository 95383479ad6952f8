from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .hr_settings.mysql_settings_repository import MySQLPayrollSettingsRepository
from .payroll.service import PayrollRunService
from .salaries.mysql_salary_repository import MySQLSalaryRepository
from .salaries.service import SalaryService
from .work_calendar.mysql_override_repository import MySQLCalendarOverrideRepository
from .work_calendar.service import CalendarService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    school_id: Optional[str]

    employees_repo: MySQLEmployeeRepository
    settings_repo: MySQLPayrollSettingsRepository
    overrides_repo: MySQLCalendarOverrideRepository
    attendance_repo: MySQLAttendanceRepository
    salaries_repo: MySQLSalaryRepository

    payroll_service: PayrollRunService
    salary_service: SalaryService
    calendar_service: CalendarService


def build_container(*, db_config: dict, school_id: Optional[str]) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    settings_repo = MySQLPayrollSettingsRepository(conn)
    overrides_repo = MySQLCalendarOverrideRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    salaries_repo = MySQLSalaryRepository(conn)

    payroll_service = PayrollRunService(
        employees_repo,
        settings_repo,
        overrides_repo,
        attendance_repo,
        salaries_repo,
        school_id=school_id,
    )
    salary_service = SalaryService(salaries_repo, school_id=school_id or "")
    calendar_service = CalendarService(overrides_repo, settings_repo, school_id=school_id or "")

    return Container(
        conn=conn,
        school_id=school_id,
        employees_repo=employees_repo,
        settings_repo=settings_repo,
        overrides_repo=overrides_repo,
        attendance_repo=attendance_repo,
        salaries_repo=salaries_repo,
        payroll_service=payroll_service,
        salary_service=salary_service,
        calendar_service=calendar_service,
    )
