from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.guards import make_auth_required
from ..core.enums import MARK_ATTENDANCE_ROLES, MODIFY_HOURS_ROLES, Role
from ..core.exceptions import AuthorizationError, LedgerTransactionError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth_required = make_auth_required(container.token_service)

    def _validation_failed(e: ValidationError):
        return jsonify({"success": False, "error": "validation", "message": str(e)}), 400

    def _operation_failed():
        # Nothing was written; the same request can be resubmitted unchanged.
        return (
            jsonify(
                {
                    "success": False,
                    "error": "operation_failed",
                    "message": "Operation failed, please retry",
                    "retryable": True,
                }
            ),
            500,
        )

    @app.route("/api/attendance/mentor-volunteers", methods=["GET"], endpoint="api_mentor_volunteers")
    @auth_required(Role.MENTOR)
    def api_mentor_volunteers(current_user):
        roster = container.volunteer_query_service.get_roster(current_user.user_id)
        return jsonify([r.to_dict() for r in roster]), 200

    @app.route("/api/attendance/mark-bulk", methods=["POST"], endpoint="api_mark_bulk")
    @auth_required(*MARK_ATTENDANCE_ROLES)
    def api_mark_bulk(current_user):
        data = request.get_json(silent=True) or {}
        try:
            result = container.ledger_service.mark_bulk_attendance(
                marker=current_user,
                event_id=data.get("eventId"),
                records=data.get("attendanceRecords"),
            )
            return jsonify(result.to_dict()), 200
        except ValidationError as e:
            return _validation_failed(e)
        except AuthorizationError as e:
            return jsonify({"success": False, "error": "forbidden", "message": str(e)}), 403
        except LedgerTransactionError:
            return _operation_failed()
        except Exception:
            logger.exception("Unexpected error marking attendance")
            return _operation_failed()

    @app.route("/api/attendance/history/<int:volunteer_id>", methods=["GET"], endpoint="api_attendance_history")
    @auth_required()
    def api_attendance_history(current_user, volunteer_id: int):
        history = container.volunteer_query_service.get_history(volunteer_id)
        return jsonify([h.to_dict() for h in history]), 200

    @app.route("/api/attendance/modify-hours", methods=["POST"], endpoint="api_modify_hours")
    @auth_required(*MODIFY_HOURS_ROLES)
    def api_modify_hours(current_user):
        data = request.get_json(silent=True) or {}
        try:
            result = container.ledger_service.modify_hours(
                editor=current_user,
                volunteer_id=data.get("volunteerId"),
                event_id=data.get("eventId"),
                new_hours=data.get("newHours"),
                reason=data.get("reason", ""),
            )
            return jsonify(result.to_dict()), 200
        except ValidationError as e:
            return _validation_failed(e)
        except AuthorizationError as e:
            return jsonify({"success": False, "error": "forbidden", "message": str(e)}), 403
        except LedgerTransactionError:
            return _operation_failed()
        except Exception:
            logger.exception("Unexpected error modifying hours")
            return _operation_failed()
