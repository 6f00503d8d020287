"""
Core exceptions for AutoVoice.
Custom exception classes for structured error handling.
"""

from typing import Optional, Dict, Any


class AutoVoiceException(Exception):
    """Base exception for AutoVoice errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "AUTOVOICE_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# =========================
# Request Exceptions
# =========================

class BadInputException(AutoVoiceException):
    """Raised when request data is missing or malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="BAD_INPUT",
            status_code=400,
            details=details
        )


class UnavailableException(AutoVoiceException):
    """Raised when a dependent external service is not configured."""

    def __init__(
        self,
        message: str = "OpenAI API key not configured. Please add your OPENAI_API_KEY to use the AI assistant.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="SERVICE_UNAVAILABLE",
            status_code=503,
            details=details
        )


class NotFoundException(AutoVoiceException):
    """Raised when an identifier does not resolve to a record."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details
        )


class CarNotFoundException(NotFoundException):
    """Raised when a car id is not in the inventory."""

    def __init__(self, car_id: str):
        super().__init__(
            message="Car not found",
            details={"car_id": car_id}
        )


class InternalException(AutoVoiceException):
    """Raised for unexpected internal failures."""

    def __init__(self, message: str = "An unexpected error occurred", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="INTERNAL_ERROR",
            status_code=500,
            details=details
        )


# =========================
# Upstream (Gateway) Exceptions
# =========================

class UpstreamException(AutoVoiceException):
    """Raised when the assistant gateway fails or returns unusable data."""

    def __init__(
        self,
        message: str,
        error_code: str = "UPSTREAM_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=500,
            details=details
        )


class GatewayTimeoutException(UpstreamException):
    """Raised when a gateway call exceeds its timeout."""

    def __init__(self, operation: str, timeout_seconds: Optional[float], message: Optional[str] = None):
        super().__init__(
            message=message or f"{operation} timed out after {timeout_seconds} seconds",
            error_code="GATEWAY_TIMEOUT",
            details={"operation": operation, "timeout_seconds": timeout_seconds}
        )


class STTException(UpstreamException):
    """Raised when transcription fails."""

    def __init__(self, message: str = "Failed to transcribe audio", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, error_code="STT_ERROR", details=details)


class LLMException(UpstreamException):
    """Raised when reply generation fails."""

    def __init__(self, message: str = "Failed to generate response", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, error_code="LLM_ERROR", details=details)


class TTSException(UpstreamException):
    """Raised when speech synthesis fails."""

    def __init__(self, message: str = "Failed to generate speech", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, error_code="TTS_ERROR", details=details)


# =========================
# Session Exceptions
# =========================

class InvalidTransitionException(AutoVoiceException):
    """Raised when a session action is not allowed in the current state."""

    def __init__(self, action: str, state: str):
        super().__init__(
            message=f"Cannot {action} while {state}",
            error_code="INVALID_TRANSITION",
            status_code=409,
            details={"action": action, "state": state}
        )
