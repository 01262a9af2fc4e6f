from datetime import datetime, timezone
from typing import Optional

from pydantic import StrictInt, field_validator
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from linguatext.services.scheduler import DEFAULT_EASE, ReviewState, utc_now

WORD_MAX_LENGTH = 200
TRANSLATION_MAX_LENGTH = 400
LANGUAGE_MAX_LENGTH = 16


class VocabularyBase(SQLModel):
    """Shared fields for vocabulary data."""

    word: str = Field(max_length=WORD_MAX_LENGTH)
    translation: str = Field(max_length=TRANSLATION_MAX_LENGTH)
    note: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=LANGUAGE_MAX_LENGTH)


class Vocabulary(VocabularyBase, table=True):
    """Vocabulary entry with its spaced-repetition state."""

    __tablename__ = "vocabulary"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    # Review state, only written through scheduler.record_review
    ease_factor: float = Field(default=DEFAULT_EASE)
    interval_days: int = Field(default=0)
    repetition: int = Field(default=0)
    last_reviewed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    next_review_at: Optional[datetime] = Field(default=None, index=True, sa_type=DateTime(timezone=True))
    total_reviews: int = Field(default=0)
    total_correct: int = Field(default=0)
    correct_streak: int = Field(default=0)
    last_result: Optional[bool] = None

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def review_state(self) -> ReviewState:
        """Snapshot of the stored review state; missing values fall back to defaults."""
        return ReviewState(
            ease_factor=self.ease_factor if self.ease_factor is not None else DEFAULT_EASE,
            interval_days=self.interval_days or 0,
            repetition=self.repetition or 0,
            last_reviewed_at=self.last_reviewed_at,
            next_review_at=self.next_review_at,
            total_reviews=self.total_reviews or 0,
            total_correct=self.total_correct or 0,
            correct_streak=self.correct_streak or 0,
            last_result=self.last_result,
        )

    def apply_review_state(self, state: ReviewState) -> None:
        self.ease_factor = state.ease_factor
        self.interval_days = state.interval_days
        self.repetition = state.repetition
        self.last_reviewed_at = state.last_reviewed_at
        self.next_review_at = state.next_review_at
        self.total_reviews = state.total_reviews
        self.total_correct = state.total_correct
        self.correct_streak = state.correct_streak
        self.last_result = state.last_result
        self.updated_at = utc_now()


def _clean_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class VocabularyCreate(SQLModel):
    """Schema for creating a vocabulary entry."""

    word: str = Field(max_length=WORD_MAX_LENGTH)
    translation: str = Field(max_length=TRANSLATION_MAX_LENGTH)
    note: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=LANGUAGE_MAX_LENGTH)

    @field_validator("word", "translation")
    @classmethod
    def strip_required(cls, value: str) -> str:
        return _clean_required(value)


class VocabularyUpdate(SQLModel):
    """Partial update; fields left out are not touched, note may be cleared with null."""

    word: Optional[str] = Field(default=None, max_length=WORD_MAX_LENGTH)
    translation: Optional[str] = Field(default=None, max_length=TRANSLATION_MAX_LENGTH)
    note: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=LANGUAGE_MAX_LENGTH)

    @field_validator("word", "translation")
    @classmethod
    def strip_required(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            raise ValueError("must not be null")
        return _clean_required(value)


class VocabularyRead(VocabularyBase):
    """Schema for vocabulary responses."""

    id: int
    ease_factor: float
    interval_days: int
    repetition: int
    last_reviewed_at: Optional[datetime]
    next_review_at: Optional[datetime]
    total_reviews: int
    total_correct: int
    correct_streak: int
    last_result: Optional[bool]
    created_at: datetime

    @field_validator("last_reviewed_at", "next_review_at", "created_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands back naive values for UTC columns
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ReviewRequest(SQLModel):
    """Recall grade for one review, 0 (blackout) to 5 (perfect)."""

    quality: StrictInt = Field(ge=0, le=5)


class ReviewResponse(SQLModel):
    ok: bool = True
    ease_factor: float
    interval_days: int
    repetition: int
    next_review_at: datetime
