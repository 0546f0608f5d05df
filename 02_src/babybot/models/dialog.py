"""Dialog-related data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DialogTurnStatus(str, Enum):
    """Outcome of running the dialog stack for one turn."""

    EMPTY = "empty"
    WAITING = "waiting"
    COMPLETE = "complete"


@dataclass
class DialogTurnResult:
    """Status plus the value a completed flow produced."""

    status: DialogTurnStatus
    result: Any = None


@dataclass
class DialogInstance:
    """A flow suspended at a prompt, waiting for the user's reply."""

    flow_id: str
    step_index: int
    prompt_id: str
    prompt: str
    retry_prompt: str | None = None
    values: dict = field(default_factory=dict)


@dataclass
class DialogState:
    """Persistent per-conversation dialog state.

    Stored as a tagged record: ``{"status": "empty"}`` when no flow is
    running, or ``{"status": "waiting", ...}`` with the suspended instance.
    """

    active: DialogInstance | None = None

    @property
    def is_empty(self) -> bool:
        return self.active is None

    def to_dict(self) -> dict:
        if self.active is None:
            return {"status": DialogTurnStatus.EMPTY.value}
        return {
            "status": DialogTurnStatus.WAITING.value,
            "flow_id": self.active.flow_id,
            "step_index": self.active.step_index,
            "prompt_id": self.active.prompt_id,
            "prompt": self.active.prompt,
            "retry_prompt": self.active.retry_prompt,
            "values": self.active.values,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DialogState":
        status = DialogTurnStatus(data.get("status", DialogTurnStatus.EMPTY.value))
        if status != DialogTurnStatus.WAITING:
            return cls()
        return cls(
            active=DialogInstance(
                flow_id=data["flow_id"],
                step_index=data["step_index"],
                prompt_id=data["prompt_id"],
                prompt=data["prompt"],
                retry_prompt=data.get("retry_prompt"),
                values=dict(data.get("values") or {}),
            )
        )
