from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model: one attendance record joined with event and marker names."""

    attendance_id: int
    event_id: int
    event_name: str
    event_date: date
    hours_given: Decimal
    status: AttendanceStatus
    marked_by_name: str
    marked_at: datetime

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "event_id": self.event_id,
            "event_name": self.event_name,
            "event_date": self.event_date.strftime("%Y-%m-%d"),
            "hours_given": float(self.hours_given),
            "attendance_status": self.status.value,
            "marked_by_name": self.marked_by_name,
            "marked_at": self.marked_at.strftime("%Y-%m-%d %H:%M:%S"),
        }


@dataclass(frozen=True)
class RosterEntry:
    volunteer_id: int
    name: str
    roll_number: Optional[str]
    wing_name: Optional[str]
    total_hours: Decimal
    events_attended: int

    def to_dict(self) -> dict:
        return {
            "volunteer_id": self.volunteer_id,
            "name": self.name,
            "roll_number": self.roll_number,
            "wing_name": self.wing_name,
            "total_hours": float(self.total_hours),
            "events_attended": self.events_attended,
        }


@dataclass(frozen=True)
class VolunteerSummary:
    """Aggregates as stored on the volunteer row (not recomputed)."""

    volunteer_id: int
    events_attended: int
    total_hours: Decimal

    def to_dict(self) -> dict:
        return {
            "volunteer_id": self.volunteer_id,
            "events_attended": self.events_attended,
            "total_hours": float(self.total_hours),
        }
