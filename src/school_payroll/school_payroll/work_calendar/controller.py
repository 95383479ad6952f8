from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_time_of_day
from ..common.money import to_decimal
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import CalendarOverride, ResolvedDayPolicy


def _override_to_dict(o: CalendarOverride) -> dict:
    return {
        "override_id": o.override_id,
        "date": o.override_date.isoformat(),
        "day_type": o.day_type,
        "pay_rate": str(o.pay_rate) if o.pay_rate is not None else None,
        "bonus_fixed": str(o.bonus_fixed) if o.bonus_fixed is not None else None,
        "custom_start_time": o.custom_start_time.strftime("%H:%M") if o.custom_start_time else None,
        "custom_end_time": o.custom_end_time.strftime("%H:%M") if o.custom_end_time else None,
        "note": o.note or "",
    }


def _policy_to_dict(p: ResolvedDayPolicy) -> dict:
    return {
        "date": p.day.isoformat(),
        "is_off": p.is_off,
        "day_type": p.day_type,
        "pay_rate": str(p.pay_rate),
        "bonus": str(p.bonus),
        "start": p.shift_start.strftime("%H:%M"),
        "end": p.shift_end.strftime("%H:%M"),
        "source": p.source.value,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendar/overrides", methods=["GET"], endpoint="api_calendar_overrides")
    def api_calendar_overrides():
        try:
            today = date.today()
            start = parse_iso_date(request.args.get("start") or today.replace(day=1).isoformat())
            end = parse_iso_date(request.args.get("end") or (start + timedelta(days=31)).isoformat())
            overrides = container.calendar_service.list_range(start=start, end=end)
            return jsonify({"success": True, "overrides": [_override_to_dict(o) for o in overrides]})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/calendar/overrides", methods=["PUT"], endpoint="api_calendar_override_save")
    def api_calendar_override_save():
        payload = request.get_json(silent=True) or {}
        try:
            override = CalendarOverride(
                override_date=parse_iso_date(str(payload.get("date") or "")),
                day_type=str(payload.get("day_type") or "work"),
                pay_rate=to_decimal(payload["pay_rate"], field_name="pay_rate") if payload.get("pay_rate") is not None else None,
                bonus_fixed=to_decimal(payload["bonus_fixed"], field_name="bonus_fixed") if payload.get("bonus_fixed") is not None else None,
                custom_start_time=parse_time_of_day(payload.get("custom_start_time")),
                custom_end_time=parse_time_of_day(payload.get("custom_end_time")),
                note=payload.get("note"),
            )
            override_id = container.calendar_service.save_override(override)
            return jsonify({"success": True, "override_id": override_id})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/calendar/overrides/<day>", methods=["DELETE"], endpoint="api_calendar_override_delete")
    def api_calendar_override_delete(day: str):
        try:
            container.calendar_service.delete_override(parse_iso_date(day))
            return jsonify({"success": True})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404

    @app.route("/api/calendar/days/<day>", methods=["GET"], endpoint="api_calendar_day")
    def api_calendar_day(day: str):
        try:
            policy = container.calendar_service.describe_day(parse_iso_date(day))
            return jsonify({"success": True, "day": _policy_to_dict(policy)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
