"""SQLite storage implementation."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import Message, TraceEvent


class IStorage(Protocol):
    """Persistent storage for bot state, transcripts and traces (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # State records
    async def read(self, keys: list[str]) -> dict[str, dict]:
        """Read state records; missing keys are absent from the result."""
        ...

    async def write(self, changes: dict[str, dict]) -> None:
        """Write state records (last write wins)."""
        ...

    async def delete(self, keys: list[str]) -> None:
        """Delete state records."""
        ...

    # Transcript
    async def save_message(self, message: Message) -> None:
        """Append a message to the transcript."""
        ...

    async def get_messages(
        self, conversation_id: str, after: datetime | None = None
    ) -> list[Message]:
        """Get transcript for a conversation, optionally after a timestamp."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


def _parse_timestamp(raw: str) -> datetime:
    ts = datetime.fromisoformat(raw)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # State records
    async def read(self, keys: list[str]) -> dict[str, dict]:
        """Read state records; missing keys are absent from the result."""
        conn = self._require_conn()
        if not keys:
            return {}

        placeholders = ",".join("?" * len(keys))
        cursor = await conn.execute(
            f"SELECT key, data FROM state_records WHERE key IN ({placeholders})",
            list(keys),
        )
        rows = await cursor.fetchall()
        return {row[0]: json.loads(row[1]) for row in rows}

    async def write(self, changes: dict[str, dict]) -> None:
        """Write state records (last write wins)."""
        conn = self._require_conn()
        if not changes:
            return

        await conn.executemany(
            """
            INSERT OR REPLACE INTO state_records (key, data, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            """,
            [(key, json.dumps(data)) for key, data in changes.items()],
        )
        await conn.commit()

    async def delete(self, keys: list[str]) -> None:
        """Delete state records."""
        conn = self._require_conn()
        if not keys:
            return

        placeholders = ",".join("?" * len(keys))
        await conn.execute(
            f"DELETE FROM state_records WHERE key IN ({placeholders})",
            list(keys),
        )
        await conn.commit()

    # Transcript
    async def save_message(self, message: Message) -> None:
        """Append a message to the transcript."""
        conn = self._require_conn()

        if not message.id:
            message.id = str(uuid.uuid4())

        await conn.execute(
            """
            INSERT INTO messages
            (id, conversation_id, role, content, activity_type, timestamp)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                message.id,
                message.conversation_id,
                message.role,
                message.content,
                message.activity_type,
                message.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_messages(
        self, conversation_id: str, after: datetime | None = None
    ) -> list[Message]:
        """Get transcript for a conversation, optionally after a timestamp."""
        conn = self._require_conn()

        if after:
            cursor = await conn.execute(
                """
                SELECT id, conversation_id, role, content, activity_type, timestamp
                FROM messages
                WHERE conversation_id = ? AND timestamp > ?
                ORDER BY timestamp ASC, rowid ASC
                """,
                (conversation_id, after.isoformat()),
            )
        else:
            cursor = await conn.execute(
                """
                SELECT id, conversation_id, role, content, activity_type, timestamp
                FROM messages
                WHERE conversation_id = ?
                ORDER BY timestamp ASC, rowid ASC
                """,
                (conversation_id,),
            )

        rows = await cursor.fetchall()
        return [
            Message(
                id=row[0],
                conversation_id=row[1],
                role=row[2],
                content=row[3],
                activity_type=row[4],
                timestamp=_parse_timestamp(row[5]),
            )
            for row in rows
        ]

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, default=str),
                event.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        conn = self._require_conn()

        conditions = []
        params: list = []

        if after:
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=_parse_timestamp(row[4]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        for table in ("state_records", "messages", "trace_events"):
            await conn.execute(f"DELETE FROM {table}")

        await conn.commit()
