"""
Conversation State.
Conversation turns, the append-only turn log, and chat results.
"""

import base64
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

AUDIO_MEDIA_TYPE = "audio/mp3"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class ConversationTurn(BaseModel):
    """Single turn in a conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")

    def to_llm_message(self) -> Dict[str, str]:
        """Convert to LLM message format."""
        return {"role": self.role, "content": self.content}


class ConversationLog:
    """
    Ordered, append-only log of conversation turns.

    Turns are never reordered or edited. Timestamps never go backwards:
    a clock reading earlier than the previous turn is clamped to it.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._turns: List[ConversationTurn] = []

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(list(self._turns))

    @property
    def turns(self) -> List[ConversationTurn]:
        return list(self._turns)

    @property
    def last(self) -> Optional[ConversationTurn]:
        return self._turns[-1] if self._turns else None

    def append(self, role: str, content: str) -> ConversationTurn:
        """Create a turn with a fresh id and timestamp and append it."""
        timestamp = self._clock()
        if self._turns and timestamp < self._turns[-1].timestamp:
            timestamp = self._turns[-1].timestamp

        turn = ConversationTurn(
            id=str(uuid4()),
            role=role,
            content=content,
            timestamp=timestamp
        )
        self._turns.append(turn)
        return turn

    def add_user_turn(self, content: str) -> ConversationTurn:
        return self.append("user", content)

    def add_assistant_turn(self, content: str) -> ConversationTurn:
        return self.append("assistant", content)

    def clear(self):
        self._turns = []

    def to_payload(self) -> List[Dict]:
        """Serialize turns for the chat endpoint."""
        return [turn.model_dump() for turn in self._turns]


@dataclass
class ChatResult:
    """Reply from the chat operation, with optional synthesized speech."""
    message: str
    audio: Optional[bytes] = None

    @property
    def audio_url(self) -> Optional[str]:
        """Audio as a base64 data URI, or None when synthesis was skipped or failed."""
        if self.audio is None:
            return None
        encoded = base64.b64encode(self.audio).decode("ascii")
        return f"data:{AUDIO_MEDIA_TYPE};base64,{encoded}"

    def to_dict(self) -> Dict[str, str]:
        data = {"message": self.message}
        if self.audio_url is not None:
            data["audioUrl"] = self.audio_url
        return data


@dataclass
class ChatReply:
    """Chat response as seen by a client of the HTTP API."""
    message: str
    audio_url: Optional[str] = None
