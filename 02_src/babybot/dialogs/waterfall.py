"""Waterfall dialogs: named linear flows of steps."""

from typing import Any, Awaitable, Callable

from ..logging_config import get_logger, log_context
from ..models import DialogInstance, DialogState, DialogTurnResult, DialogTurnStatus
from ..state import StatePropertyAccessor
from ..turn_context import TurnContext
from .prompts import Prompt, PromptOptions

logger = get_logger(__name__)


WaterfallStep = Callable[["WaterfallStepContext"], Awaitable[DialogTurnResult]]


class WaterfallDialog:
    """An ordered list of steps identified by a flow id."""

    def __init__(self, dialog_id: str, steps: list[WaterfallStep] | None = None):
        if not dialog_id:
            raise ValueError("dialog_id is required")
        self.id = dialog_id
        self.steps: list[WaterfallStep] = list(steps or [])

    def add_step(self, step: WaterfallStep) -> "WaterfallDialog":
        self.steps.append(step)
        return self


class DialogSet:
    """Registry of flows and prompts sharing one dialog state property."""

    def __init__(self, dialog_state: StatePropertyAccessor):
        if dialog_state is None:
            raise ValueError("dialog_state accessor is required")
        self._dialog_state = dialog_state
        self._dialogs: dict[str, WaterfallDialog | Prompt] = {}

    def add(self, dialog: WaterfallDialog | Prompt) -> "DialogSet":
        if dialog.id in self._dialogs:
            raise ValueError(f"Dialog '{dialog.id}' is already registered")
        self._dialogs[dialog.id] = dialog
        return self

    def find(self, dialog_id: str) -> WaterfallDialog | Prompt | None:
        return self._dialogs.get(dialog_id)

    async def create_context(self, turn_context: TurnContext) -> "DialogContext":
        state = await self._dialog_state.get(turn_context, DialogState)
        return DialogContext(self, turn_context, state)


class DialogContext:
    """Runs flows for one turn against the conversation's DialogState."""

    def __init__(self, dialogs: DialogSet, turn_context: TurnContext, state: DialogState):
        self.dialogs = dialogs
        self.context = turn_context
        self.state = state

    @property
    def active(self) -> DialogInstance | None:
        return self.state.active

    def _find_flow(self, flow_id: str) -> WaterfallDialog:
        flow = self.dialogs.find(flow_id)
        if not isinstance(flow, WaterfallDialog):
            raise KeyError(f"Unknown flow '{flow_id}'")
        return flow

    async def begin_dialog(self, flow_id: str, options: Any = None) -> DialogTurnResult:
        """Start ``flow_id`` at its first step."""
        if self.state.active is not None:
            raise RuntimeError(
                f"Flow '{self.state.active.flow_id}' is already in progress"
            )
        flow = self._find_flow(flow_id)
        logger.info(
            "Beginning flow %s",
            flow_id,
            extra=log_context(conversation_id=self.context.activity.conversation_id),
        )
        values = {"options": options} if options is not None else {}
        return await self._run_step(flow, 0, None, values)

    async def continue_dialog(self) -> DialogTurnResult:
        """Feed the current reply to the suspended flow, if there is one."""
        active = self.state.active
        if active is None:
            return DialogTurnResult(DialogTurnStatus.EMPTY)

        flow = self.dialogs.find(active.flow_id)
        prompt = self.dialogs.find(active.prompt_id)
        if not isinstance(flow, WaterfallDialog) or not isinstance(prompt, Prompt):
            # Saved by a build that registered different flows; drop it
            logger.warning(
                "Discarding suspended flow %s at prompt %s: no longer registered",
                active.flow_id,
                active.prompt_id,
                extra=log_context(conversation_id=self.context.activity.conversation_id),
            )
            self.state.active = None
            return DialogTurnResult(DialogTurnStatus.EMPTY)

        recognized = prompt.recognize(self.context)
        if not recognized.succeeded:
            logger.debug("Reply not recognized by prompt %s", active.prompt_id)
            await self.context.send_activity(active.retry_prompt or active.prompt)
            return DialogTurnResult(DialogTurnStatus.WAITING)

        return await self._run_step(
            flow, active.step_index + 1, recognized.value, active.values
        )

    async def _run_step(
        self, flow: WaterfallDialog, index: int, result: Any, values: dict
    ) -> DialogTurnResult:
        if index >= len(flow.steps):
            return self.end_dialog(result)

        step_context = WaterfallStepContext(self, flow, index, result, values)
        return await flow.steps[index](step_context)

    async def prompt(
        self,
        flow: WaterfallDialog,
        index: int,
        values: dict,
        prompt_id: str,
        options: PromptOptions,
    ) -> DialogTurnResult:
        if not isinstance(self.dialogs.find(prompt_id), Prompt):
            raise KeyError(f"Unknown prompt '{prompt_id}'")

        await self.context.send_activity(options.prompt)
        self.state.active = DialogInstance(
            flow_id=flow.id,
            step_index=index,
            prompt_id=prompt_id,
            prompt=options.prompt,
            retry_prompt=options.retry_prompt,
            values=values,
        )
        return DialogTurnResult(DialogTurnStatus.WAITING)

    def end_dialog(self, result: Any = None) -> DialogTurnResult:
        if self.state.active is not None:
            logger.info("Flow %s complete", self.state.active.flow_id)
        self.state.active = None
        return DialogTurnResult(DialogTurnStatus.COMPLETE, result)


class WaterfallStepContext:
    """What a step sees: the previous step's result plus flow-scoped values."""

    def __init__(
        self,
        dialog_context: DialogContext,
        flow: WaterfallDialog,
        index: int,
        result: Any,
        values: dict,
    ):
        self._dc = dialog_context
        self._flow = flow
        self.index = index
        self.result = result
        self.values = values

    @property
    def context(self) -> TurnContext:
        return self._dc.context

    async def prompt(self, prompt_id: str, options: PromptOptions) -> DialogTurnResult:
        """Send a prompt and suspend until the user replies."""
        return await self._dc.prompt(self._flow, self.index, self.values, prompt_id, options)

    async def next(self, result: Any = None) -> DialogTurnResult:
        """Skip straight to the following step with ``result``."""
        return await self._dc._run_step(self._flow, self.index + 1, result, self.values)

    async def end_dialog(self, result: Any = None) -> DialogTurnResult:
        return self._dc.end_dialog(result)
