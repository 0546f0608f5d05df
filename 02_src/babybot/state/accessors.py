"""State property accessors shared by the bot and its flows."""

from ..models import DialogState, UserProfile
from .bot_state import ConversationState, StatePropertyAccessor, UserState


class BotAccessors:
    """Holds both state scopes and the named properties stored in them.

    Created once at startup and passed to the bot and the flows.
    """

    DIALOG_STATE_NAME = "BotAccessors.DialogState"
    USER_PROFILE_NAME = "BotAccessors.UserProfile"

    def __init__(self, conversation_state: ConversationState, user_state: UserState):
        if conversation_state is None:
            raise ValueError("conversation_state is required")
        if user_state is None:
            raise ValueError("user_state is required")

        self.conversation_state = conversation_state
        self.user_state = user_state

        self.dialog_state: StatePropertyAccessor = conversation_state.create_property(
            self.DIALOG_STATE_NAME, DialogState
        )
        self.user_profile: StatePropertyAccessor = user_state.create_property(
            self.USER_PROFILE_NAME, UserProfile
        )
