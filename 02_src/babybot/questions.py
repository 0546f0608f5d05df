"""Question file loading and validation."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .logging_config import get_logger

logger = get_logger(__name__)


class QuestionFileError(ValueError):
    """The question file is missing, not JSON, or does not match the schema."""


def _not_blank(value: str, field: str) -> str:
    if not value.strip():
        raise ValueError(f"{field} must not be blank")
    return value


class Question(BaseModel):
    """One prompt text."""

    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _not_blank(value, "question text")


class QuestionFile(BaseModel):
    """``{"flowId": "...", "questions": [{"text": "..."}, ...]}``"""

    model_config = ConfigDict(populate_by_name=True)

    flow_id: str = Field(alias="flowId", min_length=1)
    questions: list[Question] = Field(min_length=1)

    @field_validator("flow_id")
    @classmethod
    def flow_id_not_blank(cls, value: str) -> str:
        return _not_blank(value, "flowId")

    def text(self, index: int) -> str:
        return self.questions[index].text


def load_questions(path: str | Path) -> QuestionFile:
    """Load and validate a question file, failing fast on any problem."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise QuestionFileError(f"Cannot read question file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise QuestionFileError(f"Question file {path} is not valid JSON: {e}") from e

    try:
        questions = QuestionFile.model_validate(data)
    except ValidationError as e:
        raise QuestionFileError(f"Question file {path} is invalid: {e}") from e

    logger.info(
        "Loaded %s questions for flow %s from %s",
        len(questions.questions),
        questions.flow_id,
        path,
    )
    return questions
