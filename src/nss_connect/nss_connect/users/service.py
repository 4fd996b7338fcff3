from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..auth.context import RequestUser
from ..auth.tokens import TokenService
from ..common.validators import require_non_empty
from ..core.enums import Role, profile_table_for
from ..core.exceptions import AuthenticationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user_id: int
    email: str
    name: str
    role: Role
    roll_number: Optional[str]
    wing_name: Optional[str]
    profile_id: Optional[int]

    def to_dict(self) -> dict:
        user = {
            "userId": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "rollNumber": self.roll_number,
            "wingName": self.wing_name,
        }
        if self.profile_id is not None:
            user[_PROFILE_KEYS[self.role]] = self.profile_id
        return {"token": self.token, "user": user}


_PROFILE_KEYS = {
    Role.VOLUNTEER: "volunteerId",
    Role.MENTOR: "mentorId",
    Role.GENERAL_SECRETARY: "gensecId",
}


class AuthService:
    """Use case: authenticate a user and issue a bearer token."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str) -> LoginResult:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        profile_id = self._users.get_profile_id(user_id=user.user_id, role=user.role)
        if profile_id is None:
            logger.warning("User %s has no %s profile row", user.user_id, profile_table_for(user.role).table)

        token = self._tokens.issue(RequestUser(user_id=user.user_id, role=user.role, email=user.email))
        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return LoginResult(
            token=token,
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            role=user.role,
            roll_number=user.roll_number,
            wing_name=user.wing_name,
            profile_id=profile_id,
        )
