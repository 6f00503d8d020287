"""
Text-to-Speech Service using OpenAI TTS.
Synthesizes spoken replies as MP3 audio.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

from autovoice.config import Settings, get_settings, TTS_VOICES
from autovoice.core.exceptions import (
    TTSException,
    BadInputException,
    InternalException,
    GatewayTimeoutException,
    UnavailableException
)

logger = logging.getLogger(__name__)


@dataclass
class TTSResult:
    """Result from text-to-speech synthesis."""
    audio_data: bytes
    voice: str
    processing_time_ms: Optional[float] = None


class TTSService:
    """
    Text-to-Speech service backed by the OpenAI speech API.
    """

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self._settings = settings or get_settings()
        self._client = client
        self._model = self._settings.TTS_MODEL_ID
        self._voice = self._settings.TTS_VOICE
        self._timeout = self._settings.GATEWAY_TIMEOUT_SECONDS

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def synthesize(
        self,
        text: str,
        voice: Optional[str] = None
    ) -> TTSResult:
        """
        Synthesize speech from text.

        Args:
            text: Text to speak
            voice: Optional voice name, one of TTS_VOICES

        Returns:
            TTSResult holding MP3 bytes
        """
        if voice is None and self._voice not in TTS_VOICES:
            raise InternalException(
                "Speech synthesis is misconfigured",
                details={"voice": self._voice, "supported_voices": TTS_VOICES}
            )

        voice = voice or self._voice
        if voice not in TTS_VOICES:
            raise BadInputException(
                f"Voice '{voice}' is not supported",
                details={"voice": voice, "supported_voices": TTS_VOICES}
            )

        if not self.is_initialized:
            raise UnavailableException()

        start_time = time.time()

        try:
            response = await asyncio.wait_for(
                self._client.audio.speech.create(
                    model=self._model,
                    voice=voice,
                    input=text,
                    response_format="mp3"
                ),
                timeout=self._timeout
            )
        except asyncio.TimeoutError:
            raise GatewayTimeoutException("Speech synthesis", self._timeout)
        except Exception as e:
            logger.error(f"TTS synthesis error: {e}")
            raise TTSException(details={"error": str(e)})

        audio_data = getattr(response, "content", None)
        if not isinstance(audio_data, (bytes, bytearray)) or not audio_data:
            raise TTSException(details={"error": "speech response has no audio"})

        return TTSResult(
            audio_data=bytes(audio_data),
            voice=voice,
            processing_time_ms=(time.time() - start_time) * 1000
        )
