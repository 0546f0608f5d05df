"""Core data models for Baby Bot."""

from .activities import Activity, ActivityType
from .dialog import DialogInstance, DialogState, DialogTurnResult, DialogTurnStatus
from .messages import Message
from .profile import BIRTHDATE_FORMAT, UserProfile
from .resolution import DateTimeResolution
from .tracing import TraceEvent

__all__ = [
    # Activities
    "Activity",
    "ActivityType",
    # Dialog
    "DialogInstance",
    "DialogState",
    "DialogTurnResult",
    "DialogTurnStatus",
    "DateTimeResolution",
    # Profile
    "BIRTHDATE_FORMAT",
    "UserProfile",
    # Transcript / tracing
    "Message",
    "TraceEvent",
]
