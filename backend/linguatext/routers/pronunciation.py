"""
Pronunciation practice router - speech-to-text passthrough and scoring of
what the learner said against the expected sentence or word.
"""
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from linguatext.config import get_settings
from linguatext.errors import SttUnavailable
from linguatext.models.pronunciation import (
    EvaluateRequest,
    EvaluateResponse,
    PronunciationCheckResponse,
    SttResponse,
    TEXT_MAX_LENGTH,
)
from linguatext.services.pronunciation import evaluate
from linguatext.services.stt import SttClient

router = APIRouter()
logger = logging.getLogger(__name__)


def get_stt_client() -> SttClient:
    settings = get_settings()
    return SttClient(settings.stt_urls, timeout=settings.STT_TIMEOUT_SECONDS)


def _score(target: str, hypothesis: Optional[str], language: Optional[str], threshold: Optional[float]):
    settings = get_settings()
    return evaluate(
        target,
        hypothesis,
        language or settings.PRONUNCIATION_DEFAULT_LANGUAGE,
        threshold if threshold is not None else settings.PRONUNCIATION_THRESHOLD,
    )


async def _transcribe(client: SttClient, audio: bytes, filename: str, content_type: str) -> str:
    if not audio:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty audio payload")
    try:
        result = await client.transcribe(audio, filename=filename, content_type=content_type)
    except SttUnavailable as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"STT unavailable: {e}")
    return result.text


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_pronunciation(request: EvaluateRequest):
    """
    Score a transcription against the expected text.

    Case, accents and punctuation are ignored. `correct` is true when the
    similarity reaches the threshold (default 0.8).
    """
    if not request.target.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="target required")

    result = _score(request.target, request.hypothesis, request.language, request.threshold)
    return EvaluateResponse(
        correct=result.correct,
        similarity=result.similarity,
        distance=result.distance,
        normalized_target=result.normalized_target,
        normalized_hypothesis=result.normalized_hypothesis,
        threshold=result.threshold,
    )


@router.post("/stt", response_model=SttResponse)
async def speech_to_text(
    request: Request,
    client: Annotated[SttClient, Depends(get_stt_client)],
):
    """
    Transcribe a raw audio body (as recorded by the browser, usually webm).
    """
    audio = await request.body()
    content_type = request.headers.get("content-type") or "audio/webm"
    text = await _transcribe(client, audio, "audio.webm", content_type)
    return SttResponse(text=text)


@router.post("/pronunciation/check", response_model=PronunciationCheckResponse)
async def check_pronunciation(
    audio: Annotated[UploadFile, File(description="Recorded utterance")],
    target: Annotated[str, Form(description="Expected sentence or word", max_length=TEXT_MAX_LENGTH)],
    client: Annotated[SttClient, Depends(get_stt_client)],
    language: Annotated[Optional[str], Form(max_length=16)] = None,
    threshold: Annotated[Optional[float], Form(ge=0.0, le=1.0)] = None,
):
    """
    Transcribe a recording and score it against the expected text in one call.
    """
    if not target.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="target required")

    audio_bytes = await audio.read()
    transcription = await _transcribe(
        client,
        audio_bytes,
        audio.filename or "recording.webm",
        audio.content_type or "audio/webm",
    )
    result = _score(target, transcription, language, threshold)
    logger.debug("Pronunciation check: %r vs %r -> %.3f", target, transcription, result.similarity)

    return PronunciationCheckResponse(
        correct=result.correct,
        similarity=result.similarity,
        distance=result.distance,
        normalized_target=result.normalized_target,
        normalized_hypothesis=result.normalized_hypothesis,
        threshold=result.threshold,
        transcription=transcription,
    )
