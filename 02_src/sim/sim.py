"""SIM implementation - scripted profile conversations for manual testing."""

import asyncio
import random
from typing import Protocol

import httpx

from babybot.logging_config import get_logger
from babybot.tracker import ITracker

logger = get_logger(__name__)

BOT_ID = "babybot"

# (user id, name, birthdate reply)
VIRTUAL_USERS = [
    ("user_001", "Sam", "1990-05-17"),
    ("user_002", "Alex", "17.05.1985"),
    ("user_003", "Kim", "May 17"),
]


class ISim(Protocol):
    """Drive the bot through its HTTP endpoint."""

    async def start(self) -> None:
        """Start the scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop the scenario."""
        ...


class Sim:
    """Plays one profile conversation per virtual user against the API."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
        trigger_text: str = "Hallo",
    ):
        self._api_url = api_url
        self._tracker = tracker
        self._trigger_text = trigger_text
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start the scripted scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop the scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client:
            await self._client.aclose()
            self._client = None

    def script_for(self, name: str, birthdate: str) -> list[dict]:
        """Activities one user sends: join, trigger, name, confirm, date, confirm."""
        return [
            {"type": "conversationUpdate"},
            {"type": "message", "text": "Hi there"},
            {"type": "message", "text": self._trigger_text},
            {"type": "message", "text": name},
            {"type": "message", "text": "yes"},
            {"type": "message", "text": birthdate},
            {"type": "message", "text": "yes"},
        ]

    async def _run_scenario(self) -> None:
        """Run every virtual user's script, interleaved turn by turn."""
        scripts = {
            user_id: self.script_for(name, birthdate)
            for user_id, name, birthdate in VIRTUAL_USERS
        }

        try:
            if self._tracker:
                await self._tracker.track(
                    "sim_started", "sim", {"user_count": len(scripts)}
                )

            for turn in range(max(len(s) for s in scripts.values())):
                for user_id, script in scripts.items():
                    if not self._running:
                        return
                    if turn < len(script):
                        await self._send(user_id, script[turn])
                        await asyncio.sleep(random.uniform(0.2, 1))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            if self._tracker:
                await self._tracker.track(
                    "sim_completed", "sim", {"user_count": len(scripts)}
                )

    async def _send(self, user_id: str, activity: dict) -> None:
        """Post one activity and log the replies."""
        if not self._client:
            return

        payload = {
            "conversationId": f"sim-{user_id}",
            "fromId": user_id,
            "recipientId": BOT_ID,
            **activity,
        }
        if activity["type"] == "conversationUpdate":
            payload["membersAdded"] = [user_id, BOT_ID]

        try:
            response = await self._client.post(
                f"{self._api_url}/api/messages", json=payload, timeout=10.0
            )
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send activity: %s", e)
            return

        if response.status_code != 200:
            logger.error("SIM: Error sending activity: %s", response.status_code)
            return

        for reply in response.json().get("replies", []):
            logger.info("SIM: %s <- %s", user_id, reply.get("text"))
