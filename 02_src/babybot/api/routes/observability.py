"""Observability API routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication


class TraceEventResponse(BaseModel):
    """Response model for trace event."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


class MessageResponse(BaseModel):
    """Response model for one transcript line."""

    id: str
    role: str
    content: str
    activity_type: str
    timestamp: datetime


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        actor: str | None = Query(None, description="Filter by actor"),
    ) -> list[dict]:
        """Get trace events with optional filters."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(
                    status_code=400, detail="Invalid after timestamp format"
                )

        try:
            events = await app.storage.get_trace_events(
                after=after_dt,
                event_types=[event_type] if event_type else None,
                actor=actor,
                limit=limit,
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [
            {
                "id": e.id,
                "event_type": e.event_type,
                "actor": e.actor,
                "data": e.data,
                "timestamp": e.timestamp.isoformat(),
            }
            for e in events
        ]

    @router.get(
        "/conversations/{conversation_id}/messages",
        response_model=list[MessageResponse],
    )
    async def get_transcript(conversation_id: str) -> list[dict]:
        """Get the transcript of one conversation, oldest first."""
        try:
            messages = await app.storage.get_messages(conversation_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [
            {
                "id": m.id,
                "role": m.role,
                "content": m.content,
                "activity_type": m.activity_type,
                "timestamp": m.timestamp.isoformat(),
            }
            for m in messages
        ]

    return router
