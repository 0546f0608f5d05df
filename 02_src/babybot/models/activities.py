"""Inbound and outbound activity models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ActivityType(str, Enum):
    """Activity kinds the bot reacts to explicitly."""

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"


@dataclass
class Activity:
    """A single event exchanged with a channel.

    ``type`` is a plain string: channels may send kinds the bot does not know
    about (typing, endOfConversation, ...), and those are still reported back.
    """

    type: str
    conversation_id: str
    from_id: str
    recipient_id: str
    text: str | None = None
    members_added: list[str] = field(default_factory=list)
    channel_id: str = "http"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    reply_to_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def create_reply(self, text: str) -> "Activity":
        """Build a message addressed back to the sender of this activity."""
        return Activity(
            type=ActivityType.MESSAGE.value,
            conversation_id=self.conversation_id,
            from_id=self.recipient_id,
            recipient_id=self.from_id,
            text=text,
            channel_id=self.channel_id,
            reply_to_id=self.id,
        )
