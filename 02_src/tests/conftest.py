"""Pytest configuration and fixtures."""

import sys
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

BOT_ID = "bot"
TODAY = date(2024, 3, 1)


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from babybot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker backed by storage."""
    from babybot.tracker import Tracker

    return Tracker(storage)


@pytest.fixture
def accessors(storage):
    """Create both state scopes and their accessors."""
    from babybot.state import BotAccessors, ConversationState, UserState

    return BotAccessors(ConversationState(storage), UserState(storage))


@pytest.fixture
def questions():
    """Question file with two prompts."""
    from babybot.questions import QuestionFile

    return QuestionFile.model_validate(
        {
            "flowId": "userDetailsQuestions",
            "questions": [
                {"text": "What should I call you?"},
                {"text": "When is your birthday?"},
            ],
        }
    )


@pytest.fixture
def dialogs(accessors, questions):
    """DialogSet with every user detail flow registered."""
    from babybot.dialogs import DialogSet, UserDetailsFlows

    ds = DialogSet(accessors.dialog_state)
    UserDetailsFlows(accessors, questions, today=lambda: TODAY).register(ds)
    return ds


@pytest.fixture
def make_bot(accessors, dialogs, tracker):
    """Factory for ProfileBot starting a given flow."""
    from babybot.bot import ProfileBot
    from babybot.dialogs import CONFIRM_FLOW_ID

    def _make(flow_id: str = CONFIRM_FLOW_ID, trigger_text: str = "Hallo"):
        return ProfileBot(
            accessors=accessors,
            dialogs=dialogs,
            flow_id=flow_id,
            trigger_text=trigger_text,
            tracker=tracker,
        )

    return _make


@pytest.fixture
def bot(make_bot):
    """ProfileBot running the five-step flow."""
    return make_bot()


@pytest.fixture
def activity():
    """Factory for inbound activities."""
    from babybot.models import Activity

    def _make(
        text: str | None = None,
        type: str = "message",
        conversation_id: str = "conv1",
        from_id: str = "user1",
        members_added: list[str] | None = None,
    ):
        return Activity(
            type=type,
            text=text,
            conversation_id=conversation_id,
            from_id=from_id,
            recipient_id=BOT_ID,
            members_added=members_added or [],
        )

    return _make


@pytest.fixture
def send(activity):
    """Run one message turn against a bot and return the reply texts."""
    from babybot.turn_context import TurnContext

    async def _send(bot, text: str, **kwargs) -> list[str]:
        ctx = TurnContext(activity(text, **kwargs))
        await bot.on_turn(ctx)
        return ctx.reply_texts

    return _send
