"""
Request Orchestrator for AutoVoice.
Validates requests and sequences inventory reads and assistant gateway
calls for the transcribe, chat and speech operations.
"""

import logging
import time
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autovoice.core.conversation import ChatResult, ConversationTurn
from autovoice.core.exceptions import (
    BadInputException,
    UnavailableException,
    UpstreamException
)
from autovoice.db.models import Vehicle
from autovoice.db.repositories.cars import CarRepository
from autovoice.logging.agent_logger import AgentLogger
from autovoice.services.gateway import AssistantGateway

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I apologize, but I couldn't generate a response. Could you please try again?"

SYSTEM_PROMPT_TEMPLATE = """You are AutoVoice AI, a friendly and knowledgeable car sales assistant. You help customers find their perfect vehicle from our current inventory.

Current Inventory:
{inventory}

Guidelines:
1. Be helpful, friendly, and professional
2. Answer questions about vehicles in our inventory
3. Make personalized recommendations based on customer needs
4. Highlight key features and benefits of vehicles
5. Be honest about vehicle specifications and pricing
6. If asked about vehicles not in inventory, politely explain what we do have
7. Encourage customers to schedule test drives
8. Keep responses concise but informative (2-3 sentences for simple questions, more detail when appropriate)
9. Use natural, conversational language suitable for voice responses
10. When comparing vehicles, focus on the most relevant differences for the customer's needs"""


class ChatRequest(BaseModel):
    """Body of a chat request: prior turns plus the new utterance."""

    model_config = ConfigDict(populate_by_name=True)

    messages: List[ConversationTurn]
    user_message: str = Field(..., alias="userMessage", min_length=1)


def format_price(price: int) -> str:
    """Format whole US dollars, e.g. 28999 -> '$28,999'."""
    return f"${price:,}"


def format_vehicle_line(car: Vehicle) -> str:
    """One grounding line describing a car."""
    features = ", ".join(car.features) if car.features else "none listed"
    line = (
        f"- {car.year} {car.make} {car.model}: {format_price(car.price)}, {car.color}, "
        f"{car.mileage:,} miles, {car.fuel_type}, {car.transmission}, {car.drivetrain}. "
        f"Features: {features}."
    )
    if car.description:
        line += f" {car.description}"
    return line


def build_inventory_context(vehicles: Iterable[Vehicle]) -> str:
    """Grounding text for the assistant: one line per car."""
    return "\n".join(format_vehicle_line(car) for car in vehicles)


def build_system_prompt(vehicles: Iterable[Vehicle]) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(inventory=build_inventory_context(vehicles))


class RequestOrchestrator:
    """
    Orchestrates the backend operations: transcribe, chat and synthesize.

    Every operation checks configuration first and validates its input
    before any gateway call is issued.
    """

    def __init__(
        self,
        repository: CarRepository,
        gateway: Optional[AssistantGateway],
        configured: bool,
        agent_logger: Optional[AgentLogger] = None
    ):
        self.repository = repository
        self.gateway = gateway
        self._configured = bool(configured and gateway is not None)
        self.agent_logger = agent_logger

    @property
    def configured(self) -> bool:
        return self._configured

    def ensure_configured(self):
        """Raise UnavailableException if the assistant gateway is not configured."""
        if not self._configured:
            raise UnavailableException()

    # ==================
    # Transcribe
    # ==================

    async def transcribe(
        self,
        audio_data: Optional[bytes],
        filename: str = "audio.webm"
    ) -> str:
        """
        Transcribe recorded audio.

        Returns the transcript verbatim; an empty string is a valid result.
        """
        self.ensure_configured()

        if not audio_data:
            raise BadInputException("No audio file provided")

        start_time = time.time()
        text = await self.gateway.transcribe(audio_data, filename=filename)

        if self.agent_logger:
            await self.agent_logger.log_transcription(
                text,
                audio_size_bytes=len(audio_data),
                latency_ms=(time.time() - start_time) * 1000
            )

        return text

    # ==================
    # Chat
    # ==================

    def parse_chat_request(self, payload: Any) -> ChatRequest:
        """Validate a raw chat body. Raises BadInputException on mismatch."""
        try:
            return ChatRequest.model_validate(payload)
        except ValidationError as e:
            raise BadInputException(
                "Invalid request body",
                details={"errors": e.errors(include_url=False, include_context=False)}
            )

    async def chat(
        self,
        prior_turns: List[ConversationTurn],
        utterance: str
    ) -> ChatResult:
        """
        Generate a grounded reply and, if possible, its speech.

        A speech synthesis failure does not fail the chat: the reply is
        returned without audio.
        """
        self.ensure_configured()

        if not isinstance(utterance, str) or not utterance.strip():
            raise BadInputException("Invalid request body", details={"field": "userMessage"})

        start_time = time.time()

        vehicles = await self.repository.get_all()
        system_prompt = build_system_prompt(vehicles)

        reply_text = await self.gateway.reply(system_prompt, list(prior_turns), utterance)
        reply_text = (reply_text or "").strip() or FALLBACK_REPLY
        llm_latency_ms = (time.time() - start_time) * 1000

        audio = None
        try:
            audio = await self.gateway.synthesize(reply_text)
        except UpstreamException as e:
            logger.warning(f"Speech synthesis failed, returning text only: {e.message}")
            if self.agent_logger:
                await self.agent_logger.log_error("chat.synthesize", e.message, e.details)
        except Exception as e:
            logger.exception(f"Unexpected speech synthesis error, returning text only: {e}")
            if self.agent_logger:
                await self.agent_logger.log_error("chat.synthesize", str(e))

        if self.agent_logger:
            await self.agent_logger.log_turn_complete(
                utterance,
                reply_text,
                has_audio=audio is not None,
                metrics={
                    "llm_latency_ms": llm_latency_ms,
                    "total_latency_ms": (time.time() - start_time) * 1000
                }
            )

        return ChatResult(message=reply_text, audio=audio or None)

    async def chat_request(self, payload: Any) -> ChatResult:
        """Check configuration, validate a raw chat body, then chat."""
        self.ensure_configured()
        request = self.parse_chat_request(payload)
        return await self.chat(request.messages, request.user_message)

    # ==================
    # Synthesize
    # ==================

    async def synthesize(self, text: Any) -> bytes:
        """Synthesize speech for arbitrary text."""
        self.ensure_configured()

        if not isinstance(text, str) or not text.strip():
            raise BadInputException("Text is required")

        return await self.gateway.synthesize(text)
