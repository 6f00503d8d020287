"""Core module initialization."""

from autovoice.core.exceptions import (
    AutoVoiceException,
    BadInputException,
    UnavailableException,
    NotFoundException,
    CarNotFoundException,
    UpstreamException,
    GatewayTimeoutException,
    InternalException,
    InvalidTransitionException
)
from autovoice.core.conversation import ConversationTurn, ConversationLog, ChatResult, ChatReply
from autovoice.core.session import SessionController, SessionState

__all__ = [
    "AutoVoiceException",
    "BadInputException",
    "UnavailableException",
    "NotFoundException",
    "CarNotFoundException",
    "UpstreamException",
    "GatewayTimeoutException",
    "InternalException",
    "InvalidTransitionException",
    "ConversationTurn",
    "ConversationLog",
    "ChatResult",
    "ChatReply",
    "SessionController",
    "SessionState"
]
