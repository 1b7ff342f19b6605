from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users/<int:user_id>/work-schedule", methods=["PUT"], endpoint="assign_work_schedule")
    def assign_work_schedule(user_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            schedule_id = int(payload.get("workScheduleId"))
        except (TypeError, ValueError):
            raise ValidationError("workScheduleId is required") from None

        user = container.user_service.assign_work_schedule(user_id, schedule_id)
        return jsonify(asdict(user))

    @app.route("/api/users/<int:user_id>/work-schedule", methods=["DELETE"], endpoint="remove_work_schedule")
    def remove_work_schedule(user_id: int):
        user = container.user_service.remove_work_schedule(user_id)
        return jsonify(asdict(user))
