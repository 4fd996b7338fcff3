from __future__ import annotations

from typing import Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def list_active(self) -> Sequence[Event]:
        raise NotImplementedError
