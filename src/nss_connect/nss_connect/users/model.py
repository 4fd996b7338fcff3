from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account.

    Plain data object, no DB access. Registration is handled elsewhere; this
    service only reads users.
    """

    user_id: int
    email: str
    name: str
    password_hash: str
    role: Role
    roll_number: Optional[str] = None
    wing_name: Optional[str] = None
