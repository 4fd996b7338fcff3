from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from ..attendance.model import HoursModification
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LOG_LIMIT
from .model import AttendanceHistoryRow, RosterEntry, VolunteerSummary
from .repository import VolunteerQueryRepository

logger = logging.getLogger(__name__)


class VolunteerQueryService:
    """Read-only projections consumed by the dashboards.

    Lookups never fail the caller: unknown ids and storage errors produce an
    empty result so a dashboard still renders.
    """

    def __init__(self, queries: VolunteerQueryRepository):
        self._queries = queries

    def get_history(self, volunteer_id: Any, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AttendanceHistoryRow]:
        try:
            return list(self._queries.get_history(int(volunteer_id), limit=int(limit)))
        except Exception:
            logger.exception("Failed to load attendance history for volunteer %r", volunteer_id)
            return []

    def get_roster(self, mentor_user_id: Any) -> list[RosterEntry]:
        try:
            return list(self._queries.get_roster(int(mentor_user_id)))
        except Exception:
            logger.exception("Failed to load roster for mentor user %r", mentor_user_id)
            return []

    def get_summary(self, volunteer_id: Any) -> VolunteerSummary:
        try:
            summary = self._queries.get_summary(int(volunteer_id))
        except Exception:
            logger.exception("Failed to load summary for volunteer %r", volunteer_id)
            summary = None
        if summary is None:
            return VolunteerSummary(volunteer_id=_safe_int(volunteer_id), events_attended=0, total_hours=Decimal("0"))
        return summary

    def get_hours_log(self, volunteer_id: Any, *, limit: int = DEFAULT_LOG_LIMIT) -> list[HoursModification]:
        try:
            return list(self._queries.get_hours_log(int(volunteer_id), limit=int(limit)))
        except Exception:
            logger.exception("Failed to load hours log for volunteer %r", volunteer_id)
            return []


def _safe_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
