from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import HoursModification
from .model import AttendanceHistoryRow, RosterEntry, VolunteerSummary


class VolunteerQueryRepository(Protocol):
    """Read-only projections for dashboards."""

    def get_history(self, volunteer_id: int, *, limit: int) -> Sequence[AttendanceHistoryRow]:
        """Newest event date first."""

        raise NotImplementedError

    def get_roster(self, mentor_user_id: int) -> Sequence[RosterEntry]:
        """Volunteers supervised by the mentor, ordered by name."""

        raise NotImplementedError

    def get_summary(self, volunteer_id: int) -> Optional[VolunteerSummary]:
        raise NotImplementedError

    def get_hours_log(self, volunteer_id: int, *, limit: int) -> Sequence[HoursModification]:
        """Oldest entry first."""

        raise NotImplementedError
