"""
AutoVoice HTTP Client.
Async client for the AutoVoice API; also the backend used by the
client session controller.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from autovoice.core.conversation import ChatReply, ConversationTurn
from autovoice.core.exceptions import (
    AutoVoiceException,
    BadInputException,
    GatewayTimeoutException,
    NotFoundException,
    UnavailableException,
    UpstreamException
)
from autovoice.core.session import AssistantBackend
from autovoice.db.models import Vehicle

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class AutoVoiceClient(AssistantBackend):
    """
    Client for every AutoVoice endpoint.

    Error responses are raised as the matching AutoVoiceException so
    callers handle remote and local failures the same way.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport
        )

    async def __aenter__(self) -> "AutoVoiceClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self._client.aclose()

    # ==================
    # Transport
    # ==================

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException:
            raise GatewayTimeoutException(f"{method} {path}", self._timeout)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise UpstreamException("Could not reach the AutoVoice server", details={"error": str(e)})

        if response.is_error:
            raise self._error_from_response(response)
        return response

    @staticmethod
    def _error_from_response(response: httpx.Response) -> AutoVoiceException:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or response.reason_phrase or "Request failed"
        details = body.get("details") or {}
        status = response.status_code

        if status == 400:
            return BadInputException(message, details=details)
        if status == 404:
            return NotFoundException(message, details=details)
        if status == 503:
            return UnavailableException(message, details=details)
        if body.get("error") == "GATEWAY_TIMEOUT":
            return GatewayTimeoutException(
                details.get("operation", response.request.url.path),
                details.get("timeout_seconds"),
                message=message
            )
        return UpstreamException(message, error_code=body.get("error", "UPSTREAM_ERROR"), details=details)

    # ==================
    # Configuration
    # ==================

    async def get_config(self) -> Dict[str, Any]:
        response = await self._request("GET", "/api/config")
        return response.json()

    async def is_configured(self) -> bool:
        config = await self.get_config()
        return bool(config.get("openaiConfigured"))

    # ==================
    # Inventory
    # ==================

    async def list_cars(self) -> List[Vehicle]:
        response = await self._request("GET", "/api/cars")
        return [Vehicle.model_validate(car) for car in response.json()]

    async def get_car(self, car_id: str) -> Vehicle:
        response = await self._request("GET", f"/api/cars/{car_id}")
        return Vehicle.model_validate(response.json())

    async def search_cars(
        self,
        make: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        year: Optional[int] = None,
        color: Optional[str] = None,
        fuel_type: Optional[str] = None
    ) -> List[Vehicle]:
        params = {
            "make": make,
            "minPrice": min_price,
            "maxPrice": max_price,
            "year": year,
            "color": color,
            "fuelType": fuel_type
        }
        params = {key: value for key, value in params.items() if value is not None}

        response = await self._request("GET", "/api/cars/search", params=params)
        return [Vehicle.model_validate(car) for car in response.json()]

    # ==================
    # Assistant
    # ==================

    async def transcribe(self, audio: bytes, filename: str = "recording.webm") -> str:
        response = await self._request(
            "POST",
            "/api/transcribe",
            files={"audio": (filename, audio, "audio/webm")}
        )
        return response.json()["text"]

    async def chat(self, messages: List[ConversationTurn], user_message: str) -> ChatReply:
        response = await self._request(
            "POST",
            "/api/chat",
            json={
                "messages": [turn.model_dump() for turn in messages],
                "userMessage": user_message
            }
        )
        data = response.json()
        return ChatReply(message=data["message"], audio_url=data.get("audioUrl"))

    async def synthesize(self, text: str) -> bytes:
        response = await self._request("POST", "/api/tts", json={"text": text})
        return response.content
