from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, PayrollRunError, SetupError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/runs", methods=["POST"], endpoint="api_payroll_run")
    def api_payroll_run():
        payload = request.get_json(silent=True) or {}
        month = str(payload.get("month") or request.form.get("month") or "")
        try:
            result = container.payroll_service.generate_monthly_salaries(month)
            return jsonify({"success": True, **result.to_dict()})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except SetupError as e:
            return jsonify({"success": False, "message": str(e)}), 503
        except PayrollRunError as e:
            body = {"success": False, "message": str(e)}
            if e.result is not None:
                body.update(e.result.to_dict())
            return jsonify(body), 500

    @app.route("/api/payroll/preview/<int:employee_id>", methods=["GET"], endpoint="api_payroll_preview")
    def api_payroll_preview(employee_id: int):
        month = request.args.get("month") or ""
        try:
            record = container.payroll_service.preview_employee(employee_id, month)
            return jsonify({"success": True, "salary": record.to_dict()})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except SetupError as e:
            return jsonify({"success": False, "message": str(e)}), 503
