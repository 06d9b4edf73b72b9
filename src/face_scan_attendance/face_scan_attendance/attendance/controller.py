from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request

from ..core.enums import FailureReason
from ..container import Container
from .outcome import Outcome

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def register(app: Flask, container: Container) -> None:
    def _respond(outcome: Outcome):
        response = jsonify(outcome.to_payload())
        response.status_code = outcome.http_status
        response.headers.update(CORS_HEADERS)
        return response

    @app.route("/api/face-scan-attendance", methods=["POST", "OPTIONS"], endpoint="face_scan_attendance")
    def face_scan_attendance():
        if request.method == "OPTIONS":
            return Response(status=200, headers=CORS_HEADERS)

        try:
            body = request.get_json(silent=True)
            if not isinstance(body, dict):
                body = {}

            lighting_ok = body.get("lightingOk")
            if not isinstance(lighting_ok, bool):
                lighting_ok = None

            logger.info("Received face scan attendance request")
            outcome = container.face_scan_service.verify_and_mark(
                body.get("capturedImage"),
                lighting_ok=lighting_ok,
            )
        except Exception:
            logger.exception("Unexpected error during face scan attendance")
            outcome = Outcome.failed(FailureReason.SERVER_ERROR)

        return _respond(outcome)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})
