from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Event:
    """Domain entity: a scheduled activity worth a fixed number of hours."""

    event_id: int
    event_name: str
    event_date: date
    duration_hours: Optional[Decimal]
    location: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "event_date": self.event_date.strftime("%Y-%m-%d"),
            "duration_hours": float(self.duration_hours) if self.duration_hours is not None else None,
            "location": self.location,
        }
