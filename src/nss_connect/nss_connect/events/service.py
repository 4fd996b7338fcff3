from __future__ import annotations

import logging

from .repository import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    """Read-only event listings for the attendance marking form."""

    def __init__(self, events: EventRepository):
        self._events = events

    def list_active(self) -> list[dict]:
        try:
            return [e.to_dict() for e in self._events.list_active()]
        except Exception:
            logger.exception("Failed to list active events")
            return []
