"""Pydantic schemas for pronunciation practice endpoints."""

from typing import Optional
from pydantic import BaseModel, Field

# Utterances are a word or a sentence; the distance table is quadratic in length
TEXT_MAX_LENGTH = 1000


class EvaluateRequest(BaseModel):
    """Compare a transcription against the expected text."""

    target: str = Field(max_length=TEXT_MAX_LENGTH)
    hypothesis: Optional[str] = Field(default="", max_length=TEXT_MAX_LENGTH)
    language: Optional[str] = Field(default=None, max_length=16)
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class EvaluateResponse(BaseModel):
    correct: bool
    similarity: float
    distance: int
    normalized_target: str
    normalized_hypothesis: str
    threshold: float


class PronunciationCheckResponse(EvaluateResponse):
    """Evaluation of a recorded utterance, with what the STT engine heard."""

    transcription: str


class SttResponse(BaseModel):
    text: str
