from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import Role, profile_table_for
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        roll_number=row.get("roll_number"),
        wing_name=row.get("wing_name"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, name, password_hash, role, roll_number, wing_name
                FROM users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_profile_id(self, *, user_id: int, role: Role) -> Optional[int]:
        profile = profile_table_for(role)
        with db_cursor(self._conn_factory) as (_, cur):
            # Table/column names come from the closed Role mapping, never from input.
            cur.execute(
                f"SELECT {profile.id_column} AS profile_id FROM {profile.table} WHERE user_id=%s",
                (int(user_id),),
            )
            row = fetchone(cur)
            return int(row["profile_id"]) if row else None
