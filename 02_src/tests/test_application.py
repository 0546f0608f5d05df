"""Tests for Application."""

import asyncio
import json

import pytest

from babybot.app import Application
from babybot.bot import WELCOME_TEXT
from babybot.dialogs import CONFIRM_FLOW_ID, SHORT_FLOW_ID
from babybot.dialogs.user_details import ASK_BIRTHDATE_TEXT, NAME_TEXT
from babybot.models import Activity
from babybot.questions import QuestionFileError


def _message(text, conversation_id="conv1", from_id="user1"):
    return Activity(
        type="message",
        text=text,
        conversation_id=conversation_id,
        from_id=from_id,
        recipient_id="bot",
    )


@pytest.fixture
async def app():
    application = Application(db_path=":memory:", questions_path="")
    await application.start()
    yield application
    await application.stop()


class TestApplicationStart:
    """Tests for Application.start()."""

    async def test_start_initializes_components(self, app):
        assert app._storage is not None
        assert app._tracker is not None
        assert app._accessors is not None
        assert app._bot is not None
        assert app.bot.flow_id == CONFIRM_FLOW_ID

    async def test_properties_before_start_raise(self):
        application = Application(db_path=":memory:", questions_path="")
        with pytest.raises(RuntimeError):
            application.storage
        with pytest.raises(RuntimeError):
            application.bot

    async def test_flow_from_env(self, monkeypatch):
        monkeypatch.setenv("BOT_FLOW", SHORT_FLOW_ID)
        application = Application(db_path=":memory:", questions_path="")
        await application.start()
        try:
            assert application.bot.flow_id == SHORT_FLOW_ID
        finally:
            await application.stop()

    async def test_unknown_flow_fails_startup(self):
        application = Application(db_path=":memory:", questions_path="", flow_id="nope")
        with pytest.raises(ValueError, match="expected one of"):
            await application.start()
        await application.stop()

    async def test_question_file_selects_flow(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(
            json.dumps(
                {"flowId": "fromFile", "questions": [{"text": "Who?"}, {"text": "When?"}]}
            ),
            encoding="utf-8",
        )
        application = Application(db_path=":memory:", questions_path=path)
        await application.start()
        try:
            assert application.bot.flow_id == "fromFile"
            replies = await application.process_activity(_message("Hallo"))
            assert [r.text for r in replies] == ["Who?"]
        finally:
            await application.stop()

    async def test_malformed_question_file_fails_startup(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps({"flowId": "x", "questions": []}), encoding="utf-8")

        application = Application(db_path=":memory:", questions_path=path)
        with pytest.raises(QuestionFileError):
            await application.start()
        assert application._storage is None


class TestProcessActivity:
    async def test_none_activity_raises(self, app):
        with pytest.raises(ValueError):
            await app.process_activity(None)

    async def test_echo(self, app):
        replies = await app.process_activity(_message("hi"))
        assert [r.text for r in replies] == ["You said hi."]
        assert replies[0].recipient_id == "user1"

    async def test_end_to_end_profile_run(self, app):
        texts = []
        for text in ["Hallo", "Sam", "yes", "1990-05-17", "yes", "bye"]:
            replies = await app.process_activity(_message(text))
            texts.append([r.text for r in replies])

        assert texts[0] == [NAME_TEXT]
        assert texts[4] == ["I have your name as Sam and birthdate as 1990/05/17."]
        assert texts[5] == ["You said bye."]

    async def test_concurrent_turns_in_one_conversation_run_in_order(self, app):
        first, second = await asyncio.gather(
            app.process_activity(_message("Hallo")),
            app.process_activity(_message("Hallo")),
        )

        # The second "Hallo" answers the name prompt instead of restarting
        assert [r.text for r in first] == [NAME_TEXT]
        assert [r.text for r in second] == ["Thanks Hallo.", ASK_BIRTHDATE_TEXT]

    async def test_concurrent_conversations_are_independent(self, app):
        replies = await asyncio.gather(
            app.process_activity(_message("Hallo", conversation_id="a")),
            app.process_activity(_message("Hallo", conversation_id="b")),
        )

        assert [[r.text for r in turn] for turn in replies] == [[NAME_TEXT], [NAME_TEXT]]

    async def test_transcript_is_recorded(self, app):
        await app.process_activity(_message("hi"))

        messages = await app.storage.get_messages("conv1")
        assert [(m.role, m.content) for m in messages] == [
            ("user", "hi"),
            ("bot", "You said hi."),
        ]

    async def test_welcome(self, app):
        replies = await app.process_activity(
            Activity(
                type="conversationUpdate",
                conversation_id="conv1",
                from_id="user1",
                recipient_id="bot",
                members_added=["user1", "bot"],
            )
        )
        assert [r.text for r in replies] == [WELCOME_TEXT]


class TestApplicationReset:
    async def test_reset_clears_state(self, app):
        await app.process_activity(_message("Hallo"))
        await app.reset()

        # Flow state is gone, so the reply is echoed
        replies = await app.process_activity(_message("Sam"))
        assert [r.text for r in replies] == ["You said Sam."]
