"""Tracker implementation for creating TraceEvents."""

import uuid
from datetime import datetime, timezone
from typing import Protocol

from ..models import TraceEvent
from ..storage import IStorage


class ITracker(Protocol):
    """Records TraceEvents for each decision taken during a turn."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and save to Storage."""
        ...


class Tracker:
    """Creates TraceEvents via direct track() calls."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and save to Storage."""
        trace_event = TraceEvent(
            id=str(uuid.uuid4()),
            event_type=event_type,
            actor=actor,
            data=data,
            timestamp=datetime.now(timezone.utc),
        )
        await self._storage.save_trace_event(trace_event)


class NullTracker:
    """Tracker that drops every event."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        return
