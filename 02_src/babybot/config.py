"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "babybot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_TRIGGER = "Hallo"
DEFAULT_FLOW_ID = "getUserDetails"
DEFAULT_CHANNEL_ID = "http"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def resolve_questions_path(env_value: PathLike | None = None) -> Path | None:
    """Resolve QUESTIONS_FILE to an absolute path, or None when unset."""
    if env_value is None:
        env_value = os.getenv("QUESTIONS_FILE")
    if not env_value:
        return None

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def get_trigger_text() -> str:
    """Phrase that starts the profile flow (case-sensitive)."""
    return os.getenv("BOT_TRIGGER") or DEFAULT_TRIGGER


def get_flow_id() -> str:
    """Flow started by the trigger when no question file is configured."""
    return os.getenv("BOT_FLOW") or DEFAULT_FLOW_ID
