"""Conversation and user scoped state backed by Storage."""

import copy
import json
from typing import Any, Callable, TypeVar

from ..logging_config import get_logger, log_context
from ..storage import IStorage
from ..turn_context import TurnContext

logger = get_logger(__name__)

T = TypeVar("T")


class _CachedState:
    """Record loaded for one turn plus the fingerprint it was loaded with."""

    def __init__(self, state: dict[str, Any], fingerprint: str):
        self.state = state
        self.fingerprint = fingerprint


def _to_plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def _fingerprint(state: dict[str, Any]) -> str:
    plain = {name: _to_plain(value) for name, value in state.items()}
    return json.dumps(plain, sort_keys=True, default=str)


class BotState:
    """A storage scope loaded at the start of a turn and saved at its end."""

    def __init__(self, storage: IStorage, scope_name: str):
        self._storage = storage
        self._scope_name = scope_name

    @property
    def scope_name(self) -> str:
        return self._scope_name

    def get_storage_key(self, turn_context: TurnContext) -> str:
        raise NotImplementedError

    def create_property(self, name: str, model: Any = None) -> "StatePropertyAccessor":
        """Create a named accessor; ``model`` rebuilds values via from_dict()."""
        if not name:
            raise ValueError("Property name is required")
        return StatePropertyAccessor(self, name, model)

    def _cached(self, turn_context: TurnContext) -> _CachedState | None:
        return turn_context.turn_state.get(self._scope_name)

    async def load(self, turn_context: TurnContext, force: bool = False) -> None:
        """Load the scope's record into the turn, unless already loaded."""
        if turn_context is None:
            raise ValueError("turn_context is required")

        if self._cached(turn_context) is not None and not force:
            return

        key = self.get_storage_key(turn_context)
        items = await self._storage.read([key])
        state = copy.deepcopy(items.get(key, {}))
        turn_context.turn_state[self._scope_name] = _CachedState(
            state, _fingerprint(state)
        )

    async def save_changes(
        self, turn_context: TurnContext, force: bool = False
    ) -> None:
        """Write the scope's record if it changed since it was loaded."""
        if turn_context is None:
            raise ValueError("turn_context is required")

        cached = self._cached(turn_context)
        if cached is None:
            return

        fingerprint = _fingerprint(cached.state)
        if not force and fingerprint == cached.fingerprint:
            return

        key = self.get_storage_key(turn_context)
        plain = {name: _to_plain(value) for name, value in cached.state.items()}
        await self._storage.write({key: plain})
        cached.fingerprint = fingerprint
        logger.debug(
            "State saved",
            extra=log_context(scope=self._scope_name, key=key),
        )

    async def _get_value(self, turn_context: TurnContext, name: str) -> Any:
        await self.load(turn_context)
        return self._cached(turn_context).state.get(name)

    async def _set_value(self, turn_context: TurnContext, name: str, value: Any) -> None:
        await self.load(turn_context)
        self._cached(turn_context).state[name] = value

    async def _delete_value(self, turn_context: TurnContext, name: str) -> None:
        await self.load(turn_context)
        self._cached(turn_context).state.pop(name, None)


class ConversationState(BotState):
    """State shared by everyone in one conversation."""

    def __init__(self, storage: IStorage):
        super().__init__(storage, "ConversationState")

    def get_storage_key(self, turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if activity is None or not activity.conversation_id:
            raise ValueError("ConversationState requires activity.conversation_id")
        return f"{activity.channel_id}/conversations/{activity.conversation_id}"


class UserState(BotState):
    """State belonging to the user who sent the activity."""

    def __init__(self, storage: IStorage):
        super().__init__(storage, "UserState")

    def get_storage_key(self, turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if activity is None or not activity.from_id:
            raise ValueError("UserState requires activity.from_id")
        return f"{activity.channel_id}/users/{activity.from_id}"


class StatePropertyAccessor:
    """Typed access to one named property within a BotState scope."""

    def __init__(self, state: BotState, name: str, model: Any = None):
        self._state = state
        self._name = name
        self._model = model

    @property
    def name(self) -> str:
        return self._name

    async def get(
        self,
        turn_context: TurnContext,
        default_factory: Callable[[], T] | None = None,
    ) -> T | None:
        """Return the property, creating it with ``default_factory`` if absent."""
        value = await self._state._get_value(turn_context, self._name)

        if value is None:
            if default_factory is None:
                return None
            value = default_factory()
            await self._state._set_value(turn_context, self._name, value)
        elif isinstance(value, dict) and self._model is not None:
            value = self._model.from_dict(value)
            await self._state._set_value(turn_context, self._name, value)

        return value

    async def set(self, turn_context: TurnContext, value: Any) -> None:
        await self._state._set_value(turn_context, self._name, value)

    async def delete(self, turn_context: TurnContext) -> None:
        await self._state._delete_value(turn_context, self._name)
