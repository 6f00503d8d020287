"""
LLM Service using OpenAI Chat Completions.
Generates sales-assistant replies from conversation context.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, List, Dict

from autovoice.config import Settings, get_settings
from autovoice.core.exceptions import (
    LLMException,
    GatewayTimeoutException,
    UnavailableException
)

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM completion."""
    content: str
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, int]] = None
    processing_time_ms: Optional[float] = None


class LLMService:
    """
    LLM service using the OpenAI chat completions API.

    Non-streaming: the whole reply is needed before speech synthesis.
    """

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self._settings = settings or get_settings()
        self._client = client
        self._model = self._settings.LLM_MODEL_ID
        self._max_tokens = self._settings.LLM_MAX_TOKENS
        self._timeout = self._settings.GATEWAY_TIMEOUT_SECONDS

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def complete(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        """
        Generate a complete response.

        Args:
            messages: Conversation messages, system prompt first
            max_tokens: Maximum completion tokens (defaults to settings)

        Returns:
            LLMResponse; content is empty if the model produced none
        """
        if not self.is_initialized:
            raise UnavailableException()

        start_time = time.time()

        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    max_completion_tokens=max_tokens or self._max_tokens
                ),
                timeout=self._timeout
            )
        except asyncio.TimeoutError:
            raise GatewayTimeoutException("Reply generation", self._timeout)
        except Exception as e:
            logger.error(f"Chat completion error: {e}")
            raise LLMException(details={"error": str(e)})

        if not getattr(response, "choices", None):
            raise LLMException(details={"error": "completion response has no choices"})

        choice = response.choices[0]
        usage = None
        if getattr(response, "usage", None) is not None:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens
            }

        return LLMResponse(
            content=choice.message.content or "",
            finish_reason=choice.finish_reason,
            usage=usage,
            processing_time_ms=(time.time() - start_time) * 1000
        )
