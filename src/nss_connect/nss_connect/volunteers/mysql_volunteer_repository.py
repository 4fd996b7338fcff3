from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import HoursModification
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import AttendanceHistoryRow, RosterEntry, VolunteerSummary
from .repository import VolunteerQueryRepository


class MySQLVolunteerQueryRepository(VolunteerQueryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_history(self, volunteer_id: int, *, limit: int) -> Sequence[AttendanceHistoryRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.attendance_id, a.event_id, e.event_name, e.event_date,
                       a.hours_given, at.type_name, u.name AS marked_by_name, a.marked_at
                FROM attendance a
                JOIN events e ON e.event_id = a.event_id
                JOIN attendance_types at ON at.type_id = a.attendance_type_id
                JOIN users u ON u.user_id = a.marked_by
                WHERE a.volunteer_id=%s
                ORDER BY e.event_date DESC, a.attendance_id DESC
                LIMIT %s
                """,
                (int(volunteer_id), int(limit)),
            )
            return [
                AttendanceHistoryRow(
                    attendance_id=int(r["attendance_id"]),
                    event_id=int(r["event_id"]),
                    event_name=r["event_name"],
                    event_date=r["event_date"],
                    hours_given=to_decimal(r["hours_given"]),
                    status=AttendanceStatus(r["type_name"]),
                    marked_by_name=r["marked_by_name"],
                    marked_at=r["marked_at"],
                )
                for r in fetchall(cur)
            ]

    def get_roster(self, mentor_user_id: int) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT v.volunteer_id, u.name, u.roll_number, u.wing_name,
                       v.total_hours, v.events_attended
                FROM volunteers v
                JOIN users u ON u.user_id = v.user_id
                JOIN mentors m ON m.mentor_id = v.mentor_id
                WHERE m.user_id=%s
                ORDER BY u.name ASC, v.volunteer_id ASC
                """,
                (int(mentor_user_id),),
            )
            return [
                RosterEntry(
                    volunteer_id=int(r["volunteer_id"]),
                    name=r["name"],
                    roll_number=r.get("roll_number"),
                    wing_name=r.get("wing_name"),
                    total_hours=to_decimal(r["total_hours"]),
                    events_attended=int(r["events_attended"]),
                )
                for r in fetchall(cur)
            ]

    def get_summary(self, volunteer_id: int) -> Optional[VolunteerSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT volunteer_id, total_hours, events_attended FROM volunteers WHERE volunteer_id=%s",
                (int(volunteer_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return VolunteerSummary(
                volunteer_id=int(r["volunteer_id"]),
                events_attended=int(r["events_attended"]),
                total_hours=to_decimal(r["total_hours"]),
            )

    def get_hours_log(self, volunteer_id: int, *, limit: int) -> Sequence[HoursModification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT l.log_id, l.volunteer_id, l.event_id, e.event_name,
                       l.modified_by, u.name AS modified_by_name,
                       l.old_hours, l.new_hours, l.modification_date, l.reason
                FROM hours_modification_log l
                JOIN events e ON e.event_id = l.event_id
                JOIN users u ON u.user_id = l.modified_by
                WHERE l.volunteer_id=%s
                ORDER BY l.log_id ASC
                LIMIT %s
                """,
                (int(volunteer_id), int(limit)),
            )
            return [
                HoursModification(
                    log_id=int(r["log_id"]),
                    volunteer_id=int(r["volunteer_id"]),
                    event_id=int(r["event_id"]),
                    modified_by=int(r["modified_by"]),
                    old_hours=to_decimal(r["old_hours"]),
                    new_hours=to_decimal(r["new_hours"]),
                    modified_at=r["modification_date"],
                    reason=r["reason"],
                    modified_by_name=r.get("modified_by_name"),
                    event_name=r.get("event_name"),
                )
                for r in fetchall(cur)
            ]
