from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request.get_json(silent=True) or {}
        try:
            result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
            return jsonify(result.to_dict()), 200
        except ValidationError as e:
            return jsonify({"success": False, "error": "validation", "message": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"success": False, "error": "unauthenticated", "message": str(e)}), 401
        except Exception:
            logger.exception("Login failed")
            return jsonify({"success": False, "error": "operation_failed", "message": "Internal server error"}), 500
