from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .tokens import TokenService

logger = logging.getLogger(__name__)


def bearer_token(header: Optional[str]) -> str:
    if not header:
        return ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def make_auth_required(tokens: TokenService):
    """Build the `auth_required(*roles)` decorator bound to a token service.

    The decorated view receives the verified `RequestUser` as its first argument.
    With no roles given, any authenticated user passes.
    """

    def auth_required(*roles: Role):
        allowed = frozenset(roles)

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                try:
                    user = tokens.verify(bearer_token(request.headers.get("Authorization")))
                except AuthenticationError as e:
                    return jsonify({"success": False, "error": "unauthenticated", "message": str(e)}), 401

                if allowed and user.role not in allowed:
                    logger.info("Denied %s for user %s (role=%s)", request.path, user.user_id, user.role.value)
                    return (
                        jsonify(
                            {
                                "success": False,
                                "error": "forbidden",
                                "message": "Access denied. Insufficient permissions.",
                            }
                        ),
                        403,
                    )

                return view(user, *args, **kwargs)

            return wrapper

        return decorator

    return auth_required
