"""WSGI / Flask CLI entry point: `flask --app app run` or `flask --app app payroll generate 2025-03`."""

from src.school_payroll.school_payroll.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
