from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class RequestUser:
    """Verified caller identity, passed explicitly into every protected handler."""

    user_id: int
    role: Role
    email: str
