"""Bot state module."""

from .accessors import BotAccessors
from .bot_state import BotState, ConversationState, StatePropertyAccessor, UserState

__all__ = [
    "BotAccessors",
    "BotState",
    "ConversationState",
    "StatePropertyAccessor",
    "UserState",
]
