"""
Speech-to-Text Service using OpenAI Whisper.
Transcribes recorded customer audio into text.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

from autovoice.config import Settings, get_settings
from autovoice.core.exceptions import (
    STTException,
    GatewayTimeoutException,
    UnavailableException
)

logger = logging.getLogger(__name__)


@dataclass
class STTResult:
    """Result from speech-to-text transcription."""
    text: str
    audio_size_bytes: int
    processing_time_ms: Optional[float] = None


class STTService:
    """
    Speech-to-Text service backed by the OpenAI transcription API.

    Browsers record `audio/webm`, so that is the default upload type.
    """

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self._settings = settings or get_settings()
        self._client = client
        self._model = self._settings.STT_MODEL_ID
        self._timeout = self._settings.GATEWAY_TIMEOUT_SECONDS

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def transcribe(
        self,
        audio_data: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm"
    ) -> STTResult:
        """
        Transcribe a complete recording.

        Args:
            audio_data: Encoded audio bytes as uploaded by the client
            filename: Upload filename; its extension tells the API the format
            content_type: MIME type of the upload

        Returns:
            STTResult with the transcript (possibly empty)
        """
        if not self.is_initialized:
            raise UnavailableException()

        start_time = time.time()

        try:
            transcription = await asyncio.wait_for(
                self._client.audio.transcriptions.create(
                    model=self._model,
                    file=(filename, audio_data, content_type)
                ),
                timeout=self._timeout
            )
        except asyncio.TimeoutError:
            raise GatewayTimeoutException("Transcription", self._timeout)
        except Exception as e:
            logger.error(f"Transcription error: {e}")
            raise STTException(details={"error": str(e)})

        text = getattr(transcription, "text", None)
        if not isinstance(text, str):
            raise STTException(details={"error": "transcription response has no text"})

        return STTResult(
            text=text,
            audio_size_bytes=len(audio_data),
            processing_time_ms=(time.time() - start_time) * 1000
        )
