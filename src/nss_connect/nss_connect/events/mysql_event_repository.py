from __future__ import annotations

from typing import Any, Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal
from .model import Event
from .repository import EventRepository


def row_to_event(row: Dict[str, Any]) -> Event:
    duration = row.get("duration_hours")
    return Event(
        event_id=int(row["event_id"]),
        event_name=row["event_name"],
        event_date=row["event_date"],
        duration_hours=to_decimal(duration) if duration is not None else None,
        location=row.get("location"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, event_name, event_date, duration_hours, location, is_active
                FROM events
                WHERE is_active=1
                ORDER BY event_date DESC, event_id DESC
                """
            )
            return [row_to_event(r) for r in fetchall(cur)]
