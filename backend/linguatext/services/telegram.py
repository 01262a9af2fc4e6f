"""
Greeting messages sent through the Telegram Bot API when a user opens the app.

Each greeting replaces the previous one (the old message is deleted first)
and the text rotates through a few variants so it does not look canned.
"""
import logging
from typing import Optional

import httpx

from linguatext.models.user import User
from linguatext.services.cooldown import KeyedCooldown

logger = logging.getLogger(__name__)

GREETINGS = [
    "👋 Hello, {name}!\nI will stay active by greeting you when you open the app. You can mute me anytime.",
    "🌟 Welcome back, {name}!\nOpening the app keeps me active. You can mute me whenever you like.",
    "💬 Hi {name}!\nJust a friendly ping when you open the app. Mute me anytime.",
]
DEFAULT_NAME = "there"


def next_greeting(name: Optional[str], last_variant: Optional[int] = None) -> tuple[str, int]:
    """Pick the variant after last_variant (or the first one) and fill in the name."""
    index = (last_variant + 1) % len(GREETINGS) if last_variant is not None else 0
    return GREETINGS[index].replace("{name}", name or DEFAULT_NAME), index


class TelegramBot:
    """Minimal async Telegram Bot API client."""

    def __init__(
        self,
        token: str,
        *,
        api_base: str = "https://api.telegram.org",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = f"{api_base.rstrip('/')}/bot{token}"
        self._transport = transport

    async def _call(self, method: str, payload: dict) -> dict:
        async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
            response = await client.post(f"{self.base_url}/{method}", json=payload)
            response.raise_for_status()
            return response.json()

    async def send_message(self, chat_id: int, text: str) -> Optional[int]:
        """Send a text message and return its message id, if Telegram reported one."""
        data = await self._call("sendMessage", {"chat_id": chat_id, "text": text})
        message_id = (data.get("result") or {}).get("message_id")
        return message_id if isinstance(message_id, int) else None

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        await self._call("deleteMessage", {"chat_id": chat_id, "message_id": message_id})


async def send_greeting(bot: TelegramBot, cooldown: KeyedCooldown, user: User) -> bool:
    """
    Greet a Telegram-linked user, replacing the previous greeting.

    Updates user.last_greeting_variant / last_greeting_message_id in place;
    the caller commits. Returns False when the greeting was skipped because
    of the cooldown. Bot API errors are logged and reported as skipped.
    """
    if user.telegram_id is None:
        return False
    if not cooldown.try_acquire(user.telegram_id):
        logger.debug("Greeting for %s skipped, cooling down", user.telegram_id)
        return False

    if user.last_greeting_message_id:
        try:
            await bot.delete_message(user.telegram_id, user.last_greeting_message_id)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed to delete previous greeting for %s: %s", user.telegram_id, exc)

    text, index = next_greeting(user.first_name, user.last_greeting_variant)
    try:
        message_id = await bot.send_message(user.telegram_id, text)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Failed to send greeting to %s: %s", user.telegram_id, exc)
        return False

    user.last_greeting_variant = index
    if message_id is not None:
        user.last_greeting_message_id = message_id
    return True
