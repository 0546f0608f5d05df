"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event recorded while handling a turn."""

    id: str
    event_type: str  # e.g. "turn_received", "flow_started"
    actor: str  # component that recorded it
    data: dict
    timestamp: datetime
