"""
Client for the external speech-to-text service.

The service accepts a multipart upload and answers with JSON containing the
transcription under "text" (or "transcript"). Several base URLs may be
configured; they are tried in order until one answers.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import httpx

from linguatext.errors import SttUnavailable

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "audio.webm"
DEFAULT_CONTENT_TYPE = "audio/webm"


@dataclass
class TranscriptionResult:
    """Result of transcription."""
    text: str
    source_url: str


class SttClient:
    def __init__(
        self,
        urls: Sequence[str],
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not urls:
            raise ValueError("At least one STT service URL is required")
        self.urls = list(urls)
        self.timeout = timeout
        self._transport = transport

    async def transcribe(
        self,
        audio: bytes,
        *,
        filename: str = DEFAULT_FILENAME,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> TranscriptionResult:
        """
        Transcribe audio bytes with the first reachable STT candidate.

        Raises:
            ValueError: If the audio payload is empty
            SttUnavailable: If every candidate failed
        """
        if not audio:
            raise ValueError("Empty audio payload")

        files = {"file": (filename, audio, content_type)}
        data = {"parameters": json.dumps({"batch_size": 1})}

        last_error: Optional[Exception] = None
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for url in self.urls:
                try:
                    response = await client.post(url, files=files, data=data)
                    response.raise_for_status()
                    payload = response.json()
                except (httpx.HTTPError, ValueError) as exc:
                    last_error = exc
                    logger.warning("STT request to %s failed: %s", url, exc)
                    continue

                text = (payload.get("text") or payload.get("transcript") or "") if isinstance(payload, dict) else ""
                return TranscriptionResult(text=str(text).strip(), source_url=url)

        raise SttUnavailable(str(last_error) if last_error else "STT unreachable")
