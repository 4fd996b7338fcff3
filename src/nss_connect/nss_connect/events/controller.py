from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import make_auth_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.token_service)

    @app.route("/api/events/active", methods=["GET"], endpoint="api_events_active")
    @auth_required()
    def api_events_active(current_user):
        return jsonify(container.event_service.list_active()), 200
