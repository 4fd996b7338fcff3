from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ContextManager, Optional, Protocol

from ..core.enums import AttendanceStatus
from ..events.model import Event
from .model import AttendanceRecord, VolunteerTotals


class LedgerTransaction(Protocol):
    """Handle for reads and writes inside one ledger unit of work.

    Only valid inside `LedgerStore.transaction()`; every write through it is
    committed or rolled back together.
    """

    def find_event(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def lock_volunteer(self, volunteer_id: int) -> Optional[VolunteerTotals]:
        """Read the volunteer aggregate and hold it for update until the transaction ends."""

        raise NotImplementedError

    def find_attendance(self, *, volunteer_id: int, event_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_hours_given(self, *, attendance_id: int, hours_given: Decimal) -> None:
        raise NotImplementedError

    def apply_volunteer_delta(self, *, volunteer_id: int, hours: Decimal, events: int) -> None:
        raise NotImplementedError

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
        raise NotImplementedError


class LedgerStore(Protocol):
    def transaction(self) -> ContextManager[LedgerTransaction]:
        raise NotImplementedError
