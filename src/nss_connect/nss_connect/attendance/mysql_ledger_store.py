from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_transaction, fetchone, to_decimal
from ..events.model import Event
from ..events.mysql_event_repository import row_to_event
from .model import AttendanceRecord, VolunteerTotals
from .repository import LedgerStore, LedgerTransaction


class MySQLLedgerTransaction(LedgerTransaction):
    def __init__(self, cur):
        self._cur = cur

    def find_event(self, event_id: int) -> Optional[Event]:
        self._cur.execute(
            """
            SELECT event_id, event_name, event_date, duration_hours, location, is_active
            FROM events
            WHERE event_id=%s
            """,
            (int(event_id),),
        )
        row = fetchone(self._cur)
        return row_to_event(row) if row else None

    def lock_volunteer(self, volunteer_id: int) -> Optional[VolunteerTotals]:
        self._cur.execute(
            """
            SELECT volunteer_id, total_hours, events_attended
            FROM volunteers
            WHERE volunteer_id=%s
            FOR UPDATE
            """,
            (int(volunteer_id),),
        )
        row = fetchone(self._cur)
        if not row:
            return None
        return VolunteerTotals(
            volunteer_id=int(row["volunteer_id"]),
            total_hours=to_decimal(row["total_hours"]),
            events_attended=int(row["events_attended"]),
        )

    def find_attendance(self, *, volunteer_id: int, event_id: int) -> Optional[AttendanceRecord]:
        self._cur.execute(
            """
            SELECT attendance_id, volunteer_id, event_id, marked_by, marked_at, hours_given, attendance_type_id
            FROM attendance
            WHERE volunteer_id=%s AND event_id=%s
            FOR UPDATE
            """,
            (int(volunteer_id), int(event_id)),
        )
        r = fetchone(self._cur)
        if not r:
            return None
        return AttendanceRecord(
            attendance_id=int(r["attendance_id"]),
            volunteer_id=int(r["volunteer_id"]),
            event_id=int(r["event_id"]),
            marked_by=int(r["marked_by"]),
            marked_at=r["marked_at"],
            hours_given=to_decimal(r["hours_given"]),
            status=AttendanceStatus.from_type_id(r["attendance_type_id"]),
        )

    def insert_attendance(
        self,
        *,
        volunteer_id: int,
        event_id: int,
        marked_by: int,
        marked_at: datetime,
        hours_given: Decimal,
        status: AttendanceStatus,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO attendance(volunteer_id, event_id, marked_by, marked_at, hours_given, attendance_type_id)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (int(volunteer_id), int(event_id), int(marked_by), marked_at, hours_given, status.type_id),
        )
        return int(self._cur.lastrowid)

    def set_hours_given(self, *, attendance_id: int, hours_given: Decimal) -> None:
        self._cur.execute(
            "UPDATE attendance SET hours_given=%s WHERE attendance_id=%s",
            (hours_given, int(attendance_id)),
        )

    def apply_volunteer_delta(self, *, volunteer_id: int, hours: Decimal, events: int) -> None:
        self._cur.execute(
            """
            UPDATE volunteers
            SET total_hours = total_hours + %s, events_attended = events_attended + %s
            WHERE volunteer_id=%s
            """,
            (hours, int(events), int(volunteer_id)),
        )

    def append_hours_log(
        self,
        *,
        volunteer_id: int,
        event_id: int,
        modified_by: int,
        old_hours: Decimal,
        new_hours: Decimal,
        modified_at: datetime,
        reason: str,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO hours_modification_log
                (volunteer_id, event_id, modified_by, old_hours, new_hours, modification_date, reason)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            (int(volunteer_id), int(event_id), int(modified_by), old_hours, new_hours, modified_at, reason),
        )
        return int(self._cur.lastrowid)


class MySQLLedgerStore(LedgerStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[MySQLLedgerTransaction]:
        with db_transaction(self._conn_factory) as (_, cur):
            yield MySQLLedgerTransaction(cur)
