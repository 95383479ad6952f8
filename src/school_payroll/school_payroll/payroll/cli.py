from __future__ import annotations

import click
from flask import Flask

from ..core.exceptions import PayrollRunError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.cli.group("payroll")
    def payroll_group():
        """Monthly payroll commands."""

    @payroll_group.command("generate")
    @click.argument("month")
    def generate(month: str):
        """Generate the missing salaries of MONTH (YYYY-MM)."""
        try:
            result = container.payroll_service.generate_monthly_salaries(month)
        except PayrollRunError as e:
            raise click.ClickException(str(e))

        click.echo(
            f"{result.month}: created={result.created_count} "
            f"skipped={result.skipped_count} failed={result.failed_count}"
        )
        for outcome in result.outcomes:
            if outcome.reason:
                click.echo(f"  employee {outcome.employee_id}: {outcome.reason}", err=True)
