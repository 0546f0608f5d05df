"""Tests for bot state scopes and property accessors."""

from datetime import date

import pytest

from babybot.models import Activity, DialogState, UserProfile
from babybot.state import BotAccessors, ConversationState, UserState
from babybot.turn_context import TurnContext


def _ctx(conversation_id="conv1", from_id="user1", channel_id="http"):
    return TurnContext(
        Activity(
            type="message",
            conversation_id=conversation_id,
            from_id=from_id,
            recipient_id="bot",
            channel_id=channel_id,
        )
    )


class TestStorageKeys:
    def test_conversation_key(self, storage):
        assert ConversationState(storage).get_storage_key(_ctx()) == "http/conversations/conv1"

    def test_user_key(self, storage):
        assert UserState(storage).get_storage_key(_ctx()) == "http/users/user1"

    def test_missing_ids_raise(self, storage):
        with pytest.raises(ValueError):
            ConversationState(storage).get_storage_key(_ctx(conversation_id=""))
        with pytest.raises(ValueError):
            UserState(storage).get_storage_key(_ctx(from_id=""))


class TestSaveChanges:
    """Load at turn start, save at turn end, only if dirty."""

    async def test_unchanged_state_is_not_written(self, storage):
        state = UserState(storage)
        ctx = _ctx()
        await state.load(ctx)
        await state.save_changes(ctx)

        assert await storage.read(["http/users/user1"]) == {}

    async def test_changed_state_is_written(self, storage):
        state = UserState(storage)
        prop = state.create_property("profile", UserProfile)
        ctx = _ctx()

        profile = await prop.get(ctx, UserProfile)
        profile.name = "Sam"
        await state.save_changes(ctx)

        stored = await storage.read(["http/users/user1"])
        assert stored["http/users/user1"]["profile"] == {"name": "Sam", "birthdate": None}

    async def test_force_writes_unchanged_state(self, storage):
        state = ConversationState(storage)
        ctx = _ctx()
        await state.load(ctx)
        await state.save_changes(ctx, force=True)

        assert await storage.read(["http/conversations/conv1"]) == {
            "http/conversations/conv1": {}
        }

    async def test_save_without_load_is_noop(self, storage):
        await UserState(storage).save_changes(_ctx())
        assert await storage.read(["http/users/user1"]) == {}

    async def test_none_context_raises(self, storage):
        with pytest.raises(ValueError):
            await UserState(storage).save_changes(None)

    async def test_value_survives_across_turns(self, storage):
        state = UserState(storage)
        prop = state.create_property("profile", UserProfile)

        ctx1 = _ctx()
        profile = await prop.get(ctx1, UserProfile)
        profile.birthdate = date(1990, 5, 17)
        await state.save_changes(ctx1)

        ctx2 = _ctx()
        restored = await prop.get(ctx2)
        assert isinstance(restored, UserProfile)
        assert restored.birthdate == date(1990, 5, 17)

    async def test_second_save_in_same_turn_is_skipped(self, storage):
        state = UserState(storage)
        prop = state.create_property("profile", UserProfile)
        ctx = _ctx()
        await prop.get(ctx, UserProfile)
        await state.save_changes(ctx)

        # Another writer changes the record; an unchanged turn must not clobber it
        await storage.write({"http/users/user1": {"profile": {"name": "Other"}}})
        await state.save_changes(ctx)

        stored = await storage.read(["http/users/user1"])
        assert stored["http/users/user1"]["profile"]["name"] == "Other"


class TestStatePropertyAccessor:
    async def test_get_without_default_returns_none(self, storage):
        prop = UserState(storage).create_property("profile", UserProfile)
        assert await prop.get(_ctx()) is None

    async def test_set_and_delete(self, storage):
        state = ConversationState(storage)
        prop = state.create_property("dialog", DialogState)
        ctx = _ctx()

        await prop.set(ctx, DialogState())
        assert isinstance(await prop.get(ctx), DialogState)

        await prop.delete(ctx)
        assert await prop.get(ctx) is None

    def test_empty_name_rejected(self, storage):
        with pytest.raises(ValueError):
            UserState(storage).create_property("")


class TestBotAccessors:
    def test_requires_both_scopes(self, storage):
        with pytest.raises(ValueError):
            BotAccessors(None, UserState(storage))
        with pytest.raises(ValueError):
            BotAccessors(ConversationState(storage), None)

    def test_exposes_properties(self, accessors):
        assert accessors.dialog_state.name == BotAccessors.DIALOG_STATE_NAME
        assert accessors.user_profile.name == BotAccessors.USER_PROFILE_NAME
