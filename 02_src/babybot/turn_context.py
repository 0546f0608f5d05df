"""Per-turn context handed to the bot."""

from typing import Any

from .logging_config import get_logger, log_context
from .models import Activity, ActivityType

logger = get_logger(__name__)


class TurnContext:
    """Wraps one inbound activity and collects the replies sent for it.

    ``turn_state`` is a scratch dict that lives for the duration of the turn;
    bot state scopes cache their loaded records there.
    """

    def __init__(self, activity: Activity | None):
        self.activity = activity
        self.responses: list[Activity] = []
        self.turn_state: dict[str, Any] = {}

    async def send_activity(self, activity_or_text: Activity | str) -> Activity:
        """Send a reply. Plain strings become message replies to the sender."""
        if self.activity is None:
            raise RuntimeError("Cannot send without an inbound activity")

        if isinstance(activity_or_text, str):
            reply = self.activity.create_reply(activity_or_text)
        else:
            reply = activity_or_text

        self.responses.append(reply)
        logger.debug(
            "Reply queued",
            extra=log_context(
                conversation_id=reply.conversation_id,
                type=reply.type,
                text=reply.text,
            ),
        )
        return reply

    @property
    def reply_texts(self) -> list[str]:
        """Texts of all message replies sent so far."""
        return [
            r.text or ""
            for r in self.responses
            if r.type == ActivityType.MESSAGE.value
        ]
