"""Turn dispatcher: routes each inbound activity."""

from .config import DEFAULT_FLOW_ID, DEFAULT_TRIGGER
from .dialogs import DialogSet
from .logging_config import get_logger, log_context
from .models import ActivityType, DialogTurnStatus
from .state import BotAccessors
from .tracker import ITracker, NullTracker
from .turn_context import TurnContext

logger = get_logger(__name__)

WELCOME_TEXT = (
    "Welcome to EchoBot. This bot will introduce multiple turns using prompts.  "
    "Type anything to get started."
)


async def send_welcome_message(turn_context: TurnContext) -> int:
    """Greet every newly added member except the bot itself.

    Returns the number of greetings sent.
    """
    activity = turn_context.activity
    sent = 0
    for member_id in activity.members_added:
        if member_id != activity.recipient_id:
            await turn_context.send_activity(activity.create_reply(WELCOME_TEXT))
            sent += 1
    return sent


class ProfileBot:
    """Resumes a suspended flow, starts one on the trigger, or echoes."""

    def __init__(
        self,
        accessors: BotAccessors,
        dialogs: DialogSet,
        flow_id: str = DEFAULT_FLOW_ID,
        trigger_text: str = DEFAULT_TRIGGER,
        tracker: ITracker | None = None,
    ):
        if accessors is None:
            raise ValueError("accessors is required")
        if dialogs is None:
            raise ValueError("dialogs is required")
        if dialogs.find(flow_id) is None:
            raise ValueError(f"Flow '{flow_id}' is not registered")

        self._accessors = accessors
        self._dialogs = dialogs
        self._flow_id = flow_id
        self._trigger_text = trigger_text
        self._tracker = tracker or NullTracker()

    @property
    def flow_id(self) -> str:
        return self._flow_id

    async def on_turn(self, turn_context: TurnContext) -> None:
        """Handle one inbound activity, then flush both state scopes."""
        if turn_context is None:
            raise ValueError("turn_context is required")
        activity = turn_context.activity
        if activity is None:
            raise ValueError("turn_context.activity is required")

        context = {
            "conversation_id": activity.conversation_id,
            "activity_type": activity.type,
        }
        logger.info("Turn received", extra=log_context(**context))
        await self._tracker.track("turn_received", "bot", dict(context))

        if activity.type == ActivityType.MESSAGE.value:
            await self._on_message(turn_context)
        elif activity.type == ActivityType.CONVERSATION_UPDATE.value:
            if activity.members_added:
                sent = await send_welcome_message(turn_context)
                await self._tracker.track(
                    "welcome_sent", "bot", {**context, "count": sent}
                )
        else:
            await turn_context.send_activity(f"{activity.type} event detected")
            await self._tracker.track("event_noticed", "bot", dict(context))

        await self._accessors.conversation_state.save_changes(turn_context, False)
        await self._accessors.user_state.save_changes(turn_context, False)
        await self._tracker.track("state_saved", "bot", dict(context))

    async def _on_message(self, turn_context: TurnContext) -> None:
        activity = turn_context.activity
        text = activity.text or ""
        dialog_context = await self._dialogs.create_context(turn_context)
        active = dialog_context.active
        results = await dialog_context.continue_dialog()

        if results.status != DialogTurnStatus.EMPTY:
            await self._tracker.track(
                "flow_resumed",
                "bot",
                {
                    "conversation_id": activity.conversation_id,
                    "flow_id": active.flow_id,
                    "status": results.status.value,
                },
            )
            return

        if text == self._trigger_text:
            await dialog_context.begin_dialog(self._flow_id)
            await self._tracker.track(
                "flow_started",
                "bot",
                {"conversation_id": activity.conversation_id, "flow_id": self._flow_id},
            )
        else:
            await turn_context.send_activity(f"You said {text}.")
            await self._tracker.track(
                "echo_sent",
                "bot",
                {"conversation_id": activity.conversation_id, "text": text},
            )
