from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from linguatext.database import get_session
from linguatext.models.user import User


def parse_user_id(raw: Optional[str]) -> Optional[int]:
    """Parse the x-user-id header value; anything but a positive integer is None."""
    if raw is None:
        return None
    try:
        user_id = int(raw.strip())
    except ValueError:
        return None
    return user_id if user_id > 0 else None


async def get_current_user(
    session: Annotated[AsyncSession, Depends(get_session)],
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> User:
    """Resolve the calling user from the x-user-id header set by the Mini App client."""
    user_id = parse_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    result = await session.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user
