"""Messaging API routes."""

from pydantic import BaseModel, ConfigDict, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...config import DEFAULT_CHANNEL_ID
from ...models import Activity


class ActivityRequest(BaseModel):
    """Inbound activity as posted by a channel."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "message"
    text: str | None = None
    conversation_id: str = Field(alias="conversationId")
    from_id: str = Field(alias="fromId")
    recipient_id: str = Field(alias="recipientId")
    members_added: list[str] = Field(default_factory=list, alias="membersAdded")
    channel_id: str = Field(DEFAULT_CHANNEL_ID, alias="channelId")

    def to_activity(self) -> Activity:
        return Activity(
            type=self.type,
            text=self.text,
            conversation_id=self.conversation_id,
            from_id=self.from_id,
            recipient_id=self.recipient_id,
            members_added=list(self.members_added),
            channel_id=self.channel_id,
        )


class ReplyResponse(BaseModel):
    """One outbound reply."""

    type: str
    text: str | None


class TurnResponse(BaseModel):
    """Replies produced by one turn."""

    replies: list[ReplyResponse]


def create_messaging_router(app: IApplication) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=TurnResponse)
    async def post_activity(request: ActivityRequest) -> dict:
        """Run one turn for the posted activity."""
        try:
            replies = await app.process_activity(request.to_activity())
            return {"replies": [{"type": r.type, "text": r.text} for r in replies]}
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
