from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Sequence, Union

from ..auth.context import RequestUser
from ..common.datetime_utils import now_local
from ..common.validators import (
    parse_hours,
    require_bool,
    require_distinct,
    require_non_empty,
    require_positive_int,
)
from ..core.enums import MARK_ATTENDANCE_ROLES, MODIFY_HOURS_ROLES, AttendanceStatus
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    DuplicateAttendanceError,
    LedgerTransactionError,
    ValidationError,
)
from .model import AttendanceMark, BulkAttendanceResult, HoursCorrectionResult
from .repository import LedgerStore

logger = logging.getLogger(__name__)

MarkInput = Union[AttendanceMark, Mapping[str, Any]]


def parse_marks(records: Any) -> list[AttendanceMark]:
    """Validate a bulk marking payload into an ordered list of marks."""

    if not isinstance(records, (list, tuple)) or not records:
        raise ValidationError("Attendance records are required")

    marks: list[AttendanceMark] = []
    for idx, raw in enumerate(records):
        if isinstance(raw, AttendanceMark):
            mark = raw
        elif isinstance(raw, Mapping):
            mark = AttendanceMark(
                volunteer_id=require_positive_int(raw.get("volunteerId"), f"records[{idx}].volunteerId"),
                is_present=require_bool(raw.get("isPresent"), f"records[{idx}].isPresent"),
            )
        else:
            raise ValidationError(f"records[{idx}] is not an object")
        marks.append(mark)

    require_distinct((m.volunteer_id for m in marks), "volunteer id in batch")
    return marks


class LedgerService:
    """Attendance-and-hours ledger.

    Every write path runs inside one `LedgerStore.transaction()`: attendance rows,
    the volunteer aggregate and the modification log are committed together or not
    at all.
    """

    def __init__(self, store: LedgerStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def mark_bulk_attendance(
        self,
        *,
        marker: RequestUser,
        event_id: Any,
        records: Sequence[MarkInput],
    ) -> BulkAttendanceResult:
        if marker.role not in MARK_ATTENDANCE_ROLES:
            raise AuthorizationError("Only mentors can mark attendance")

        event_id = require_positive_int(event_id, "Event id")
        marks = parse_marks(records)

        try:
            with self._store.transaction() as tx:
                event = tx.find_event(event_id)
                if event is None:
                    raise ValidationError(f"Event {event_id} does not exist")

                event_hours = event.duration_hours
                if event_hours is None:
                    # Missing duration never blocks marking; present volunteers get 0 hours.
                    logger.warning("Event %s has no duration; awarding 0 hours", event_id)
                    event_hours = Decimal("0")

                # Validate the whole batch before the first write. Rows are locked in
                # ascending volunteer id so overlapping batches cannot deadlock.
                for volunteer_id in sorted(m.volunteer_id for m in marks):
                    if tx.lock_volunteer(volunteer_id) is None:
                        raise ValidationError(f"Volunteer {volunteer_id} does not exist")
                    if tx.find_attendance(volunteer_id=volunteer_id, event_id=event_id):
                        raise DuplicateAttendanceError(
                            f"Attendance for volunteer {volunteer_id} at event {event_id} is already marked"
                        )

                marked_at = self._clock()
                attendance_ids: list[int] = []
                present_count = 0
                for mark in marks:
                    hours = event_hours if mark.is_present else Decimal("0")
                    attendance_ids.append(
                        tx.insert_attendance(
                            volunteer_id=mark.volunteer_id,
                            event_id=event_id,
                            marked_by=marker.user_id,
                            marked_at=marked_at,
                            hours_given=hours,
                            status=AttendanceStatus.PRESENT if mark.is_present else AttendanceStatus.ABSENT,
                        )
                    )
                    if mark.is_present:
                        tx.apply_volunteer_delta(volunteer_id=mark.volunteer_id, hours=hours, events=1)
                        present_count += 1
        except DomainError:
            raise
        except Exception as e:
            logger.exception("Bulk attendance for event %s rolled back", event_id)
            raise LedgerTransactionError("Marking attendance failed") from e

        result = BulkAttendanceResult(
            event_id=event_id,
            event_hours=event_hours,
            attendance_ids=attendance_ids,
            present_count=present_count,
        )
        logger.info(
            "Marked %s records for event %s by user %s (%s present, %s h each)",
            result.records_created,
            event_id,
            marker.user_id,
            present_count,
            event_hours,
        )
        return result

    def modify_hours(
        self,
        *,
        editor: RequestUser,
        volunteer_id: Any,
        event_id: Any,
        new_hours: Any,
        reason: str,
    ) -> HoursCorrectionResult:
        if editor.role not in MODIFY_HOURS_ROLES:
            raise AuthorizationError("Only mentors and the general secretary can modify hours")

        volunteer_id = require_positive_int(volunteer_id, "Volunteer id")
        event_id = require_positive_int(event_id, "Event id")
        new_hours = parse_hours(new_hours, "New hours")
        reason = require_non_empty(reason, "Reason")

        try:
            with self._store.transaction() as tx:
                totals = tx.lock_volunteer(volunteer_id)
                if totals is None:
                    raise ValidationError(f"Volunteer {volunteer_id} does not exist")
                if tx.find_event(event_id) is None:
                    raise ValidationError(f"Event {event_id} does not exist")

                record = tx.find_attendance(volunteer_id=volunteer_id, event_id=event_id)
                if record is None:
                    logger.warning(
                        "No attendance record for volunteer %s at event %s; treating old hours as 0",
                        volunteer_id,
                        event_id,
                    )
                    old_hours = Decimal("0")
                else:
                    old_hours = record.hours_given

                delta = new_hours - old_hours
                new_total = totals.total_hours + delta
                if new_total < 0:
                    raise ValidationError(
                        f"Edit would make total hours negative ({totals.total_hours} + {delta})"
                    )

                if record is not None:
                    tx.set_hours_given(attendance_id=record.attendance_id, hours_given=new_hours)
                tx.apply_volunteer_delta(volunteer_id=volunteer_id, hours=delta, events=0)
                log_id = tx.append_hours_log(
                    volunteer_id=volunteer_id,
                    event_id=event_id,
                    modified_by=editor.user_id,
                    old_hours=old_hours,
                    new_hours=new_hours,
                    modified_at=self._clock(),
                    reason=reason,
                )
        except DomainError:
            raise
        except Exception as e:
            logger.exception("Hours correction for volunteer %s event %s rolled back", volunteer_id, event_id)
            raise LedgerTransactionError("Modifying hours failed") from e

        logger.info(
            "User %s changed hours for volunteer %s at event %s: %s -> %s",
            editor.user_id,
            volunteer_id,
            event_id,
            old_hours,
            new_hours,
        )
        return HoursCorrectionResult(
            volunteer_id=volunteer_id,
            event_id=event_id,
            old_hours=old_hours,
            new_hours=new_hours,
            total_hours=new_total,
            log_id=log_id,
        )
