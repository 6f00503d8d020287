"""Services module initialization."""

from autovoice.services.stt import STTService
from autovoice.services.tts import TTSService
from autovoice.services.llm import LLMService
from autovoice.services.gateway import AssistantGateway, OpenAIAssistantGateway

__all__ = [
    "STTService",
    "TTSService",
    "LLMService",
    "AssistantGateway",
    "OpenAIAssistantGateway"
]
