from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceMark:
    """One entry of a bulk marking request."""

    volunteer_id: int
    is_present: bool


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a volunteer's presence/absence at an event.

    At most one record exists per (volunteer_id, event_id).
    """

    attendance_id: int
    volunteer_id: int
    event_id: int
    marked_by: int
    marked_at: datetime
    hours_given: Decimal
    status: AttendanceStatus


@dataclass(frozen=True)
class VolunteerTotals:
    """Denormalized aggregate stored on the volunteer row."""

    volunteer_id: int
    total_hours: Decimal
    events_attended: int


@dataclass(frozen=True)
class HoursModification:
    """Append-only audit entry for a manual hours correction."""

    log_id: int
    volunteer_id: int
    event_id: int
    modified_by: int
    old_hours: Decimal
    new_hours: Decimal
    modified_at: datetime
    reason: str
    modified_by_name: Optional[str] = None
    event_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "log_id": self.log_id,
            "volunteer_id": self.volunteer_id,
            "event_id": self.event_id,
            "event_name": self.event_name,
            "modified_by": self.modified_by,
            "modified_by_name": self.modified_by_name,
            "old_hours": float(self.old_hours),
            "new_hours": float(self.new_hours),
            "modification_date": self.modified_at.strftime("%Y-%m-%d %H:%M:%S"),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class BulkAttendanceResult:
    event_id: int
    event_hours: Decimal
    attendance_ids: list[int] = field(default_factory=list)
    present_count: int = 0

    @property
    def records_created(self) -> int:
        return len(self.attendance_ids)

    @property
    def hours_awarded(self) -> Decimal:
        return self.event_hours * self.present_count

    def to_dict(self) -> dict:
        return {
            "success": True,
            "message": "Attendance marked successfully",
            "eventId": self.event_id,
            "recordsCreated": self.records_created,
            "presentCount": self.present_count,
            "hoursAwarded": float(self.hours_awarded),
        }


@dataclass(frozen=True)
class HoursCorrectionResult:
    volunteer_id: int
    event_id: int
    old_hours: Decimal
    new_hours: Decimal
    total_hours: Decimal
    log_id: int

    def to_dict(self) -> dict:
        return {
            "success": True,
            "message": "Hours modified successfully",
            "volunteerId": self.volunteer_id,
            "eventId": self.event_id,
            "oldHours": float(self.old_hours),
            "newHours": float(self.new_hours),
            "totalHours": float(self.total_hours),
            "logId": self.log_id,
        }
