from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/salaries", methods=["GET"], endpoint="api_salaries")
    def api_salaries():
        try:
            records = container.salary_service.list_month(request.args.get("month") or "")
            return jsonify({"success": True, "salaries": [r.to_dict() for r in records]})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/salaries/<int:salary_id>/pay", methods=["POST"], endpoint="api_salary_pay")
    def api_salary_pay(salary_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            record = container.salary_service.pay_salary(
                salary_id,
                payment_date=parse_iso_date(str(payload.get("payment_date") or "")),
                payment_method=str(payload.get("payment_method") or ""),
            )
            return jsonify({"success": True, "salary": record.to_dict()})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
