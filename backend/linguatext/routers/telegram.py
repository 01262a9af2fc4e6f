"""Telegram greeting endpoint and the dependencies shared with the auth router."""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from linguatext.auth.dependencies import get_current_user
from linguatext.config import get_settings
from linguatext.database import get_session
from linguatext.models.user import User
from linguatext.services.cooldown import KeyedCooldown
from linguatext.services.telegram import TelegramBot, send_greeting

router = APIRouter()


def get_telegram_bot() -> Optional[TelegramBot]:
    """Bot client, or None when no bot token is configured."""
    settings = get_settings()
    if not settings.TELEGRAM_BOT_TOKEN:
        return None
    return TelegramBot(settings.TELEGRAM_BOT_TOKEN, api_base=settings.TELEGRAM_API_BASE)


def get_greeting_cooldown(request: Request) -> KeyedCooldown:
    """Per-application greeting debounce, created in the app lifespan."""
    return request.app.state.greeting_cooldown


async def greet_and_save(
    user: User,
    bot: Optional[TelegramBot],
    cooldown: KeyedCooldown,
    session: AsyncSession,
) -> bool:
    """Send the greeting if possible and persist the greeting bookkeeping."""
    if bot is None:
        return False
    greeted = await send_greeting(bot, cooldown, user)
    if greeted:
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return greeted


@router.post("/telegram/greet")
async def greet(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
    bot: Annotated[Optional[TelegramBot], Depends(get_telegram_bot)],
    cooldown: Annotated[KeyedCooldown, Depends(get_greeting_cooldown)],
):
    """Greet the current user in Telegram, unless greeted moments ago."""
    if current_user.telegram_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User not linked to Telegram",
        )

    greeted = await greet_and_save(current_user, bot, cooldown, session)
    return {"ok": True, "skipped": not greeted}
