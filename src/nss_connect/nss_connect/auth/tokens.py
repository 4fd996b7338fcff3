from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .context import RequestUser


class TokenService:
    """Issue and verify HS256 bearer tokens."""

    def __init__(self, secret: str, *, algorithm: str = "HS256", expire_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expire_hours = int(expire_hours)

    def issue(self, user: RequestUser, *, now: Optional[datetime] = None) -> str:
        now = now or now_utc()
        claims = {
            "sub": str(user.user_id),
            "role": user.role.value,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(hours=self._expire_hours),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> RequestUser:
        if not token:
            raise AuthenticationError("Access denied. No token provided.")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token expired.")
        except JWTError:
            raise AuthenticationError("Invalid token.")

        try:
            return RequestUser(
                user_id=int(payload["sub"]),
                role=Role(payload["role"]),
                email=str(payload.get("email") or ""),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token.")
