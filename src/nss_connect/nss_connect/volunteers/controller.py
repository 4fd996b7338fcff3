from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import make_auth_required
from ..core.enums import MODIFY_HOURS_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.token_service)

    @app.route("/api/volunteers/<int:volunteer_id>/stats", methods=["GET"], endpoint="api_volunteer_stats")
    @auth_required()
    def api_volunteer_stats(current_user, volunteer_id: int):
        summary = container.volunteer_query_service.get_summary(volunteer_id)
        return jsonify(summary.to_dict()), 200

    @app.route("/api/volunteers/<int:volunteer_id>/hours-log", methods=["GET"], endpoint="api_volunteer_hours_log")
    @auth_required(*MODIFY_HOURS_ROLES)
    def api_volunteer_hours_log(current_user, volunteer_id: int):
        entries = container.volunteer_query_service.get_hours_log(volunteer_id)
        return jsonify([e.to_dict() for e in entries]), 200
