from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/devices", methods=["POST"], endpoint="create_device")
    def create_device():
        payload = request.get_json(silent=True) or {}
        device = container.verification_service.register_device(
            device_mac=payload.get("deviceMac") or "",
            description=payload.get("description") or "",
        )
        return (
            jsonify({"device_id": device.device_id, "deviceMac": device.device_mac, "description": device.description}),
            201,
        )

    @app.route("/api/devices/<device_mac>/verification", methods=["POST"], endpoint="device_verification")
    def device_verification(device_mac: str):
        payload = request.get_json(silent=True) or {}
        accepted = container.verification_service.handle_verification_response(device_mac, bool(payload.get("verified")))
        return jsonify({"accepted": accepted}), (200 if accepted else 404)
