from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_HISTORY_PAGE_SIZE
from ..core.enums import AuthMethod
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _date_arg(name: str, *, required: bool = False):
        value = request.args.get(name)
        if not value:
            if required:
                raise ValidationError(f"Query parameter '{name}' is required")
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Query parameter '{name}' must be YYYY-MM-DD") from None

    def _int_arg(name: str, default=None):
        value = request.args.get(name)
        if value is None or value == "":
            return default
        if not value.isdigit():
            raise ValidationError(f"Query parameter '{name}' must be a positive integer")
        return int(value)

    @app.route("/api/devices/<device_mac>/events", methods=["POST"], endpoint="device_event")
    def device_event(device_mac: str):
        payload = request.get_json(silent=True) or {}
        try:
            auth_method = AuthMethod(payload.get("auth_method"))
        except ValueError:
            raise ValidationError("auth_method must be 'fingerprint' or 'card'") from None
        credential = payload.get("credential")
        if credential in (None, ""):
            raise ValidationError("credential is required")

        result = container.event_handler.handle(device_mac, auth_method, credential)
        return jsonify({"type": result.type.value, "message": result.message, "data": result.record.to_dict()})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        page = container.report_service.list_history(
            page=_int_arg("page", 1),
            limit=_int_arg("limit", DEFAULT_HISTORY_PAGE_SIZE),
            start=_date_arg("startDate"),
            end=_date_arg("endDate"),
            user_id=_int_arg("userId"),
            search=request.args.get("search"),
        )
        return jsonify(page.to_dict())

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary():
        summary = container.report_service.summarize(
            start=_date_arg("startDate", required=True),
            end=_date_arg("endDate", required=True),
            user_id=_int_arg("userId"),
        )
        return jsonify(summary.to_dict())

    @app.route("/api/activity/recent", methods=["GET"], endpoint="recent_activity")
    def recent_activity():
        items = container.activity_feed.recent(_int_arg("limit"))
        return jsonify([a.to_dict() for a in items])
