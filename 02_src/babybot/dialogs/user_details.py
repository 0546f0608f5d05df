"""The user detail flows: ask for a name and a birthdate, then summarise."""

from datetime import date
from typing import Callable

from ..logging_config import get_logger
from ..models import DialogTurnResult, UserProfile
from ..questions import QuestionFile, QuestionFileError
from ..state import BotAccessors
from .prompts import ConfirmPrompt, DateTimePrompt, PromptOptions, TextPrompt
from .recognizers import first_resolution_date
from .waterfall import DialogSet, WaterfallDialog, WaterfallStepContext

logger = get_logger(__name__)

NAME_PROMPT = "name"
CONFIRM_PROMPT = "confirm"
BIRTHDATE_PROMPT = "birthdate"

CONFIRM_FLOW_ID = "getUserDetails"
SHORT_FLOW_ID = "getUserDetailsShort"

NAME_TEXT = "Hi my name is Baby bot, What is your name?"
NAME_RETRY_TEXT = "Please tell me your name."
ASK_BIRTHDATE_TEXT = "Would you like to give your birthdate?"
BIRTHDATE_TEXT = "Please enter your birthdate."
BIRTHDATE_RETRY_TEXT = "Please enter a date, for example 1990-05-17."
YES_NO_RETRY_TEXT = "Please answer yes or no."
IS_THIS_OK_TEXT = "Is this ok?"
NO_BIRTHDATE_TEXT = "No birthdate given."
NOT_KEPT_TEXT = "Thanks. Your profile will not be kept."

QUESTION_FLOW_MIN_QUESTIONS = 2


def summary_text(profile: UserProfile, today: date | None = None) -> str:
    """Describe the captured profile; passing ``today`` adds the age."""
    if profile.birthdate is None:
        return f"I have your name as {profile.name}."

    text = (
        f"I have your name as {profile.name} "
        f"and birthdate as {profile.formatted_birthdate()}."
    )
    if today is not None:
        text += f" You are {profile.age_on(today)} years old."
    return text


class UserDetailsFlows:
    """Builds and registers the three user detail flows.

    - ``getUserDetails``: name, ask whether to give a birthdate, birthdate,
      confirm, summary.
    - ``getUserDetailsShort``: name, birthdate, summary.
    - question-driven flow (id from the question file): like the short flow,
      with prompt texts from the file and the age added to the summary.
    """

    def __init__(
        self,
        accessors: BotAccessors,
        questions: QuestionFile | None = None,
        today: Callable[[], date] = date.today,
    ):
        if accessors is None:
            raise ValueError("accessors is required")
        if questions is not None and len(questions.questions) < QUESTION_FLOW_MIN_QUESTIONS:
            raise QuestionFileError(
                f"Flow '{questions.flow_id}' needs at least "
                f"{QUESTION_FLOW_MIN_QUESTIONS} questions, got {len(questions.questions)}"
            )
        self._accessors = accessors
        self._questions = questions
        self._today = today

    @property
    def flow_ids(self) -> list[str]:
        ids = [CONFIRM_FLOW_ID, SHORT_FLOW_ID]
        if self._questions is not None:
            ids.append(self._questions.flow_id)
        return ids

    def register(self, dialogs: DialogSet) -> DialogSet:
        """Add the prompts and flows to ``dialogs``."""
        dialogs.add(TextPrompt(NAME_PROMPT))
        dialogs.add(ConfirmPrompt(CONFIRM_PROMPT))
        dialogs.add(DateTimePrompt(BIRTHDATE_PROMPT, today=self._today))

        dialogs.add(
            WaterfallDialog(CONFIRM_FLOW_ID)
            .add_step(self.name_step)
            .add_step(self.ask_birthdate_step)
            .add_step(self.birthdate_step)
            .add_step(self.confirm_birthdate_step)
            .add_step(self.confirmed_summary_step)
        )
        dialogs.add(
            WaterfallDialog(SHORT_FLOW_ID)
            .add_step(self.name_step)
            .add_step(self.short_birthdate_step)
            .add_step(self.short_summary_step)
        )
        if self._questions is not None:
            dialogs.add(
                WaterfallDialog(self._questions.flow_id)
                .add_step(self.question_name_step)
                .add_step(self.question_birthdate_step)
                .add_step(self.question_summary_step)
            )
        return dialogs

    async def _profile(self, step: WaterfallStepContext) -> UserProfile:
        return await self._accessors.user_profile.get(step.context, UserProfile)

    async def _store_name(self, step: WaterfallStepContext) -> None:
        profile = await self._profile(step)
        profile.name = step.result
        await step.context.send_activity(f"Thanks {step.result}.")

    async def _store_birthdate(self, step: WaterfallStepContext) -> UserProfile:
        profile = await self._profile(step)
        profile.birthdate = first_resolution_date(step.result)
        if profile.birthdate is None:
            logger.info("No usable birthdate in %r", step.result)
        return profile

    # Shared first step

    async def name_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        return await step.prompt(
            NAME_PROMPT, PromptOptions(prompt=NAME_TEXT, retry_prompt=NAME_RETRY_TEXT)
        )

    # getUserDetails

    async def ask_birthdate_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        await self._store_name(step)
        return await step.prompt(
            CONFIRM_PROMPT,
            PromptOptions(prompt=ASK_BIRTHDATE_TEXT, retry_prompt=YES_NO_RETRY_TEXT),
        )

    async def birthdate_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        if step.result:
            return await step.prompt(
                BIRTHDATE_PROMPT,
                PromptOptions(prompt=BIRTHDATE_TEXT, retry_prompt=BIRTHDATE_RETRY_TEXT),
            )
        # Declined: skip the birthdate prompt.
        return await step.next(None)

    async def confirm_birthdate_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self._store_birthdate(step)
        if profile.birthdate is None:
            await step.context.send_activity(NO_BIRTHDATE_TEXT)
        else:
            await step.context.send_activity(
                f"I have your birthdate as {profile.formatted_birthdate()}."
            )
        return await step.prompt(
            CONFIRM_PROMPT,
            PromptOptions(prompt=IS_THIS_OK_TEXT, retry_prompt=YES_NO_RETRY_TEXT),
        )

    async def confirmed_summary_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        if step.result:
            profile = await self._profile(step)
            await step.context.send_activity(summary_text(profile))
        else:
            await step.context.send_activity(NOT_KEPT_TEXT)
        return await step.end_dialog()

    # getUserDetailsShort

    async def short_birthdate_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        await self._store_name(step)
        return await step.prompt(
            BIRTHDATE_PROMPT,
            PromptOptions(prompt=BIRTHDATE_TEXT, retry_prompt=BIRTHDATE_RETRY_TEXT),
        )

    async def short_summary_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self._store_birthdate(step)
        if profile.birthdate is None:
            await step.context.send_activity(NO_BIRTHDATE_TEXT)
        await step.context.send_activity(summary_text(profile))
        return await step.end_dialog(profile)

    # Question-driven flow

    async def question_name_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        return await step.prompt(
            NAME_PROMPT,
            PromptOptions(prompt=self._questions.text(0), retry_prompt=NAME_RETRY_TEXT),
        )

    async def question_birthdate_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        await self._store_name(step)
        return await step.prompt(
            BIRTHDATE_PROMPT,
            PromptOptions(
                prompt=self._questions.text(1), retry_prompt=BIRTHDATE_RETRY_TEXT
            ),
        )

    async def question_summary_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self._store_birthdate(step)
        if profile.birthdate is None:
            await step.context.send_activity(NO_BIRTHDATE_TEXT)
        await step.context.send_activity(summary_text(profile, today=self._today()))
        return await step.end_dialog(profile)
