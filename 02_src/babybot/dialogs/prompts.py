"""Prompt dialogs: ask a question, then recognise the reply."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from ..turn_context import TurnContext
from .recognizers import recognize_boolean, recognize_datetime


@dataclass
class PromptOptions:
    """Text sent when prompting, and when the reply is not understood."""

    prompt: str
    retry_prompt: str | None = None


@dataclass
class PromptRecognizerResult:
    succeeded: bool
    value: Any = None


class Prompt:
    """Base prompt. Subclasses implement ``recognize``."""

    def __init__(self, dialog_id: str):
        if not dialog_id:
            raise ValueError("dialog_id is required")
        self.id = dialog_id

    def recognize(self, turn_context: TurnContext) -> PromptRecognizerResult:
        raise NotImplementedError


class TextPrompt(Prompt):
    """Accepts any non-blank reply."""

    def recognize(self, turn_context: TurnContext) -> PromptRecognizerResult:
        text = (turn_context.activity.text or "").strip()
        if not text:
            return PromptRecognizerResult(False)
        return PromptRecognizerResult(True, text)


class ConfirmPrompt(Prompt):
    """Accepts yes/no replies and yields a bool."""

    def recognize(self, turn_context: TurnContext) -> PromptRecognizerResult:
        value = recognize_boolean(turn_context.activity.text)
        if value is None:
            return PromptRecognizerResult(False)
        return PromptRecognizerResult(True, value)


class DateTimePrompt(Prompt):
    """Accepts replies containing a date; yields a list of DateTimeResolution."""

    def __init__(self, dialog_id: str, today: Callable[[], date] = date.today):
        super().__init__(dialog_id)
        self._today = today

    def recognize(self, turn_context: TurnContext) -> PromptRecognizerResult:
        resolutions = recognize_datetime(turn_context.activity.text, self._today())
        if not resolutions:
            return PromptRecognizerResult(False)
        return PromptRecognizerResult(True, resolutions)
