"""Application bootstrap and lifecycle management."""

import asyncio
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from .bot import ProfileBot
from .config import get_flow_id, get_trigger_text, resolve_db_path, resolve_questions_path
from .dialogs import DialogSet, UserDetailsFlows
from .logging_config import get_logger, log_context
from .models import Activity, Message
from .questions import QuestionFile, load_questions
from .state import BotAccessors, ConversationState, UserState
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .turn_context import TurnContext

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...

    async def process_activity(self, activity: Activity) -> list[Activity]:
        """Run one turn and return the replies it produced."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        questions_path: str | Path | None = None,
        flow_id: str | None = None,
        trigger_text: str | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._questions_path = resolve_questions_path(questions_path)
        self._flow_id = flow_id
        self._trigger_text = trigger_text or get_trigger_text()

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._questions: QuestionFile | None = None
        self._accessors: BotAccessors | None = None
        self._bot: ProfileBot | None = None

        # One lock per conversation so its turns run one at a time
        self._turn_locks: dict[str, asyncio.Lock] = {}

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Question file first: a malformed file must stop startup early
        if self._questions_path is not None:
            self._questions = load_questions(self._questions_path)

        # 2. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 3. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 4. State scopes and accessors (depend on Storage)
        self._accessors = BotAccessors(
            ConversationState(self._storage), UserState(self._storage)
        )

        # 5. Flows (depend on accessors and questions)
        dialogs = DialogSet(self._accessors.dialog_state)
        flows = UserDetailsFlows(self._accessors, self._questions)
        flows.register(dialogs)

        # 6. Bot
        if self._flow_id is None:
            self._flow_id = (
                self._questions.flow_id if self._questions is not None else get_flow_id()
            )
        if self._flow_id not in flows.flow_ids:
            raise ValueError(
                f"Unknown flow '{self._flow_id}', expected one of {flows.flow_ids}"
            )
        self._bot = ProfileBot(
            accessors=self._accessors,
            dialogs=dialogs,
            flow_id=self._flow_id,
            trigger_text=self._trigger_text,
            tracker=self._tracker,
        )
        logger.info(
            "Bot ready",
            extra=log_context(flow_id=self._flow_id, trigger=self._trigger_text),
        )

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        self._bot = None
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    async def process_activity(self, activity: Activity) -> list[Activity]:
        """Run one turn and return the replies it produced."""
        if activity is None:
            raise ValueError("activity is required")

        lock = self._turn_locks.setdefault(activity.conversation_id, asyncio.Lock())
        async with lock:
            return await self._run_turn(activity)

    async def _run_turn(self, activity: Activity) -> list[Activity]:
        turn_context = TurnContext(activity)

        if activity.text is not None:
            await self.storage.save_message(
                Message(
                    id=str(uuid.uuid4()),
                    conversation_id=activity.conversation_id,
                    role="user",
                    content=activity.text,
                    timestamp=activity.timestamp,
                    activity_type=activity.type,
                )
            )

        await self.bot.on_turn(turn_context)

        for reply in turn_context.responses:
            await self.storage.save_message(
                Message(
                    id=reply.id,
                    conversation_id=reply.conversation_id,
                    role="bot",
                    content=reply.text or "",
                    timestamp=datetime.now(timezone.utc),
                    activity_type=reply.type,
                )
            )

        return turn_context.responses

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def bot(self) -> ProfileBot:
        """Get bot instance."""
        if not self._bot:
            raise RuntimeError("Application not started")
        return self._bot

    @property
    def questions(self) -> QuestionFile | None:
        return self._questions
