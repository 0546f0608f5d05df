"""Baby Bot: a waterfall profile bot."""

from .app import Application, IApplication
from .bot import WELCOME_TEXT, ProfileBot, send_welcome_message
from .dialogs import (
    CONFIRM_FLOW_ID,
    SHORT_FLOW_ID,
    DialogSet,
    UserDetailsFlows,
    WaterfallDialog,
)
from .models import (
    Activity,
    ActivityType,
    DateTimeResolution,
    DialogState,
    DialogTurnStatus,
    Message,
    TraceEvent,
    UserProfile,
)
from .questions import QuestionFile, QuestionFileError, load_questions
from .state import BotAccessors, ConversationState, UserState
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .turn_context import TurnContext

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Bot
    "ProfileBot",
    "WELCOME_TEXT",
    "send_welcome_message",
    "TurnContext",
    # Dialogs
    "CONFIRM_FLOW_ID",
    "SHORT_FLOW_ID",
    "DialogSet",
    "UserDetailsFlows",
    "WaterfallDialog",
    # Models
    "Activity",
    "ActivityType",
    "DateTimeResolution",
    "DialogState",
    "DialogTurnStatus",
    "Message",
    "TraceEvent",
    "UserProfile",
    # Questions
    "QuestionFile",
    "QuestionFileError",
    "load_questions",
    # State / storage
    "BotAccessors",
    "ConversationState",
    "UserState",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
]
