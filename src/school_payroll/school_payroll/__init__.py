"""School Payroll package.

Monthly salary generation for school staff, organized by feature modules
(employees, attendance, work_calendar, hr_settings, salaries, payroll) with
thin Flask controllers over service/repository layers.
"""
