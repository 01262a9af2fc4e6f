from sqlmodel import SQLModel, Field
from sqlalchemy import BigInteger, Column, DateTime
from datetime import datetime, timezone
from typing import Optional

LANGUAGE_CODE_MAX_LENGTH = 8


class UserBase(SQLModel):
    """Base user model with shared fields."""
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = Field(default=None, max_length=LANGUAGE_CODE_MAX_LENGTH)
    photo_url: Optional[str] = None
    phone: Optional[str] = None


class User(UserBase, table=True):
    """User database model."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Telegram ids exceed 32 bits
    telegram_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, unique=True, index=True, nullable=True),
    )
    last_greeting_message_id: Optional[int] = Field(default=None, sa_column=Column(BigInteger, nullable=True))
    last_greeting_variant: Optional[int] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )


class TelegramAuthRequest(SQLModel):
    """Fields parsed from Telegram Web App initData on the client."""
    telegram_id: int
    first_name: str = Field(min_length=1)
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = Field(default=None, max_length=LANGUAGE_CODE_MAX_LENGTH)
    photo_url: Optional[str] = None
    phone: Optional[str] = None


class UserResponse(SQLModel):
    """Schema for user response."""
    id: int
    telegram_id: Optional[int]
    first_name: str
    last_name: Optional[str]
    username: Optional[str]
    language_code: Optional[str]
    photo_url: Optional[str]


class TelegramAuthResponse(SQLModel):
    ok: bool = True
    user: UserResponse
    greeted: bool = False


class UserUpdate(SQLModel):
    """Schema for PATCH /users/me."""
    language_code: Optional[str] = Field(default=None, max_length=LANGUAGE_CODE_MAX_LENGTH)
