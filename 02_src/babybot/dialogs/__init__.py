"""Dialogs module."""

from .prompts import (
    ConfirmPrompt,
    DateTimePrompt,
    Prompt,
    PromptOptions,
    PromptRecognizerResult,
    TextPrompt,
)
from .recognizers import first_resolution_date, recognize_boolean, recognize_datetime
from .user_details import CONFIRM_FLOW_ID, SHORT_FLOW_ID, UserDetailsFlows
from .waterfall import DialogContext, DialogSet, WaterfallDialog, WaterfallStepContext

__all__ = [
    "CONFIRM_FLOW_ID",
    "SHORT_FLOW_ID",
    "ConfirmPrompt",
    "DateTimePrompt",
    "DialogContext",
    "DialogSet",
    "Prompt",
    "PromptOptions",
    "PromptRecognizerResult",
    "TextPrompt",
    "UserDetailsFlows",
    "WaterfallDialog",
    "WaterfallStepContext",
    "first_resolution_date",
    "recognize_boolean",
    "recognize_datetime",
]
