"""Example: run a month's payroll through the service layer (no Flask).

Controllers stay thin; the payroll rules live in services and can be used directly.
"""

import importlib
import sys

from config import get_settings_module

from src.school_payroll.school_payroll.container import build_container


def main(month: str) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, school_id=getattr(settings, "SCHOOL_ID", None))

    result = container.payroll_service.generate_monthly_salaries(month)
    print(result.to_dict())

    for salary in container.salary_service.list_month(month):
        print(salary.employee_id, salary.net_salary, [(i.name, str(i.amount)) for i in salary.items])


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "2025-03")
