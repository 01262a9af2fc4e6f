import logging
from typing import Annotated, Optional
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from linguatext.database import get_session
from linguatext.models.user import (
    User,
    TelegramAuthRequest,
    TelegramAuthResponse,
    UserResponse,
    UserUpdate,
)
from linguatext.auth.dependencies import get_current_user
from linguatext.routers.telegram import get_greeting_cooldown, get_telegram_bot, greet_and_save
from linguatext.services.cooldown import KeyedCooldown
from linguatext.services.telegram import TelegramBot

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/auth/telegram", response_model=TelegramAuthResponse)
async def telegram_login(
    auth_data: TelegramAuthRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    bot: Annotated[Optional[TelegramBot], Depends(get_telegram_bot)],
    cooldown: Annotated[KeyedCooldown, Depends(get_greeting_cooldown)],
):
    """
    Create or refresh the user behind a Telegram Web App session.

    The profile fields are overwritten with what Telegram reports. When a
    bot token is configured the user is greeted in the bot chat.
    """
    result = await session.execute(select(User).where(User.telegram_id == auth_data.telegram_id))
    user = result.scalar_one_or_none()

    profile = auth_data.model_dump(exclude={"telegram_id"})
    if user is None:
        user = User(telegram_id=auth_data.telegram_id, **profile)
        logger.info("Registering Telegram user %s", auth_data.telegram_id)
    else:
        for key, value in profile.items():
            setattr(user, key, value)
        user.updated_at = datetime.now(timezone.utc)

    session.add(user)
    await session.commit()
    await session.refresh(user)

    greeted = await greet_and_save(user, bot, cooldown, session)

    return TelegramAuthResponse(
        user=UserResponse.model_validate(user, from_attributes=True),
        greeted=greeted,
    )


@router.get("/auth/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the user identified by the x-user-id header."""
    return current_user


@router.patch("/users/me")
async def update_current_user(
    update: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
):
    """Change the preferred interface language; blank clears it."""
    language_code = (update.language_code or "").strip()
    current_user.language_code = language_code or None
    current_user.updated_at = datetime.now(timezone.utc)
    session.add(current_user)
    await session.commit()
    return {"ok": True}
