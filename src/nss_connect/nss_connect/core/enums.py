from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    VOLUNTEER = "volunteer"
    MENTOR = "mentor"
    GENERAL_SECRETARY = "general_secretary"


class AttendanceStatus(str, Enum):
    """Attendance type stored in the `attendance_types` lookup table."""

    PRESENT = "present"
    ABSENT = "absent"
    EXCUSED = "excused"

    @property
    def type_id(self) -> int:
        return _STATUS_TYPE_IDS[self]

    @classmethod
    def from_type_id(cls, type_id: int) -> "AttendanceStatus":
        for status, tid in _STATUS_TYPE_IDS.items():
            if tid == int(type_id):
                return status
        raise ValueError(f"Unknown attendance type id: {type_id!r}")


_STATUS_TYPE_IDS = {
    AttendanceStatus.PRESENT: 1,
    AttendanceStatus.ABSENT: 2,
    AttendanceStatus.EXCUSED: 3,
}


@dataclass(frozen=True)
class ProfileTable:
    table: str
    id_column: str


_PROFILE_TABLES = {
    Role.VOLUNTEER: ProfileTable(table="volunteers", id_column="volunteer_id"),
    Role.MENTOR: ProfileTable(table="mentors", id_column="mentor_id"),
    Role.GENERAL_SECRETARY: ProfileTable(table="general_secretaries", id_column="gensec_id"),
}


def profile_table_for(role: Role) -> ProfileTable:
    """Side table holding the role-specific profile row for a user."""
    return _PROFILE_TABLES[role]


MARK_ATTENDANCE_ROLES = frozenset({Role.MENTOR})
MODIFY_HOURS_ROLES = frozenset({Role.MENTOR, Role.GENERAL_SECRETARY})
