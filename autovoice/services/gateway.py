"""
Assistant Gateway.
The narrow interface the orchestrator uses for transcription, replies
and speech, plus its OpenAI implementation.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from autovoice.config import Settings, get_settings
from autovoice.core.conversation import ConversationTurn
from autovoice.services.stt import STTService
from autovoice.services.llm import LLMService
from autovoice.services.tts import TTSService

logger = logging.getLogger(__name__)


class AssistantGateway(ABC):
    """
    External speech and language provider.

    Every call may fail, may be slow, and is not idempotent: calling
    `reply` twice with the same input can give different answers.
    """

    @abstractmethod
    async def transcribe(self, audio: bytes, filename: str = "audio.webm") -> str:
        """Return the transcript of an encoded recording."""

    @abstractmethod
    async def reply(
        self,
        system_context: str,
        turns: List[ConversationTurn],
        utterance: str
    ) -> str:
        """Return the assistant's reply to `utterance`."""

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """Return MP3 audio speaking `text`."""

    async def close(self):
        """Release network resources."""


class OpenAIAssistantGateway(AssistantGateway):
    """Assistant gateway composed of the OpenAI STT, LLM and TTS services."""

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self._settings = settings or get_settings()

        if client is None:
            from openai import AsyncOpenAI

            client = AsyncOpenAI(
                api_key=self._settings.OPENAI_API_KEY,
                base_url=self._settings.OPENAI_BASE_URL
            )
        self._client = client

        self.stt = STTService(self._settings, client)
        self.llm = LLMService(self._settings, client)
        self.tts = TTSService(self._settings, client)

        logger.info(
            f"Assistant gateway ready (stt={self._settings.STT_MODEL_ID}, "
            f"llm={self._settings.LLM_MODEL_ID}, tts={self._settings.TTS_MODEL_ID})"
        )

    async def transcribe(self, audio: bytes, filename: str = "audio.webm") -> str:
        result = await self.stt.transcribe(audio, filename=filename)
        return result.text

    async def reply(
        self,
        system_context: str,
        turns: List[ConversationTurn],
        utterance: str
    ) -> str:
        messages = [{"role": "system", "content": system_context}]
        messages.extend(turn.to_llm_message() for turn in turns)
        messages.append({"role": "user", "content": utterance})

        response = await self.llm.complete(messages)
        return response.content

    async def synthesize(self, text: str) -> bytes:
        result = await self.tts.synthesize(text)
        return result.audio_data

    async def close(self):
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()
        logger.info("Assistant gateway closed")
