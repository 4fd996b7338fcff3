from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_profile_id(self, *, user_id: int, role: Role) -> Optional[int]:
        """Id of the role-specific profile row (volunteer_id, mentor_id, gensec_id)."""

        raise NotImplementedError
