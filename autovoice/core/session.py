"""
Client Session Controller for AutoVoice.
Owns the conversation log and drives the record -> transcribe -> reply
-> speak cycle as a state machine. Device I/O sits behind the Recorder
and Player adapters so the controller runs without real audio hardware.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional

from autovoice.core.conversation import ChatReply, ConversationLog, ConversationTurn
from autovoice.core.exceptions import (
    InvalidTransitionException,
    UnavailableException,
    UpstreamException
)

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of a client session."""
    IDLE = "idle"
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"
    AWAITING_REPLY = "awaiting_reply"
    SPEAKING = "speaking"


# =========================
# Adapters
# =========================

class Recorder(ABC):
    """Microphone capture."""

    @abstractmethod
    async def start(self):
        """Begin capturing audio."""

    @abstractmethod
    async def stop(self) -> bytes:
        """Stop capturing and return the encoded recording."""

    async def cancel(self):
        """Stop capturing and discard the recording."""
        await self.stop()


class Player(ABC):
    """
    Audio output. `play` starts playback and returns; the owner reports
    the end of playback through SessionController.on_playback_finished.
    """

    @abstractmethod
    async def play(self, audio_url: str):
        """Start playing a data URI."""

    @abstractmethod
    async def stop(self):
        """Cancel playback."""


class AssistantBackend(ABC):
    """The transcribe and chat operations as seen by a client."""

    @abstractmethod
    async def transcribe(self, audio: bytes) -> str:
        """Return the transcript of a recording."""

    @abstractmethod
    async def chat(self, messages: List[ConversationTurn], user_message: str) -> ChatReply:
        """Return the assistant's reply given prior turns and a new message."""


# =========================
# Controller
# =========================

class SessionController:
    """
    State machine for one client session.

    Transitions:
        IDLE -> RECORDING               start_recording
        RECORDING -> TRANSCRIBING       stop_recording (non-empty audio)
        RECORDING -> IDLE               stop_recording (empty audio)
        TRANSCRIBING -> AWAITING_REPLY  non-empty transcript, user turn appended
        TRANSCRIBING -> IDLE            empty transcript or failure
        AWAITING_REPLY -> SPEAKING      reply with audio while unmuted
        AWAITING_REPLY -> IDLE          reply without audio, muted, or failure
        SPEAKING -> IDLE                playback finished/failed, interrupt
        any -> IDLE                     clear

    At most one transcription or reply request is outstanding at a time.
    After clear() the state is IDLE but recording stays refused until a
    request that was in flight settles; its result is then dropped.
    """

    def __init__(
        self,
        backend: AssistantBackend,
        recorder: Recorder,
        player: Player,
        configured: bool = True,
        conversation: Optional[ConversationLog] = None,
        on_state_change: Optional[Callable[[SessionState, SessionState], None]] = None
    ):
        self.backend = backend
        self.recorder = recorder
        self.player = player
        self.configured = configured
        self.conversation = conversation or ConversationLog()
        self.muted = False

        self._state = SessionState.IDLE
        self._on_state_change = on_state_change
        # Bumped by clear(); replies from an older generation are dropped
        self._generation = 0
        # Set while a transcription or chat request is outstanding, even after clear()
        self._in_flight = False
        # Bumped on every play, interrupt and clear; stale end-of-playback events are ignored
        self._playback_id = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def turns(self) -> List[ConversationTurn]:
        return self.conversation.turns

    @property
    def request_pending(self) -> bool:
        return self._in_flight

    @property
    def playback_id(self) -> int:
        """Id of the current playback, to pass back to on_playback_finished."""
        return self._playback_id

    def _set_state(self, new_state: SessionState):
        old_state = self._state
        if old_state == new_state:
            return
        self._state = new_state
        logger.debug(f"Session state: {old_state.value} -> {new_state.value}")
        if self._on_state_change:
            self._on_state_change(old_state, new_state)

    def _require(self, action: str, *allowed: SessionState):
        if self._state not in allowed:
            raise InvalidTransitionException(action, self._state.value)

    # ==================
    # Recording
    # ==================

    async def start_recording(self):
        """Begin capturing a question."""
        if not self.configured:
            raise UnavailableException("API key required. Please add your OpenAI API key to use voice features.")

        self._require("start recording", SessionState.IDLE)
        if self._in_flight:
            raise InvalidTransitionException("start recording", "a request is pending")
        await self.recorder.start()
        self._set_state(SessionState.RECORDING)

    async def stop_recording(self) -> Optional[ConversationTurn]:
        """
        Stop capturing and run the question through transcription and
        chat.

        Returns:
            The appended assistant turn, or None if nothing was appended
            (empty audio, empty transcript, or the session was cleared).
        """
        self._require("stop recording", SessionState.RECORDING)

        audio = await self.recorder.stop()
        if not audio:
            logger.info("Empty recording discarded")
            self._set_state(SessionState.IDLE)
            return None

        generation = self._generation
        self._set_state(SessionState.TRANSCRIBING)

        self._in_flight = True
        try:
            text = await self.backend.transcribe(audio)
        except Exception:
            if generation == self._generation:
                self._set_state(SessionState.IDLE)
            raise
        finally:
            self._in_flight = False

        if generation != self._generation:
            return None

        if not text or not text.strip():
            logger.info("Empty transcript, nothing to send")
            self._set_state(SessionState.IDLE)
            return None

        return await self._request_reply(text.strip(), generation)

    # ==================
    # Reply
    # ==================

    async def _request_reply(self, text: str, generation: int) -> Optional[ConversationTurn]:
        prior_turns = self.conversation.turns
        self.conversation.add_user_turn(text)
        self._set_state(SessionState.AWAITING_REPLY)

        self._in_flight = True
        try:
            reply = await self.backend.chat(prior_turns, text)
            if not reply.message or not reply.message.strip():
                raise UpstreamException("Assistant returned an empty reply")
        except Exception:
            if generation == self._generation:
                self._set_state(SessionState.IDLE)
            raise
        finally:
            self._in_flight = False

        if generation != self._generation:
            return None

        turn = self.conversation.add_assistant_turn(reply.message)

        if reply.audio_url and not self.muted:
            self._playback_id += 1
            self._set_state(SessionState.SPEAKING)
            try:
                await self.player.play(reply.audio_url)
            except Exception as e:
                logger.warning(f"Audio playback error: {e}")
                self._set_state(SessionState.IDLE)
        else:
            self._set_state(SessionState.IDLE)

        return turn

    # ==================
    # Playback
    # ==================

    def on_playback_finished(self, playback_id: Optional[int] = None):
        """
        Playback ended on its own or with an error.

        Args:
            playback_id: The playback_id read when playback started. Events
                for an earlier playback are ignored.
        """
        if playback_id is not None and playback_id != self._playback_id:
            logger.debug(f"Ignoring end of stale playback {playback_id}")
            return
        if self._state == SessionState.SPEAKING:
            self._set_state(SessionState.IDLE)

    async def interrupt(self) -> bool:
        """
        Stop speaking. The assistant turn being spoken stays in the log.

        Returns:
            True if playback was interrupted, False if nothing was playing
        """
        if self._state != SessionState.SPEAKING:
            return False

        self._playback_id += 1
        try:
            await self.player.stop()
        finally:
            self._set_state(SessionState.IDLE)
        return True

    async def toggle_mute(self) -> bool:
        """Flip the mute flag, silencing any current playback. Returns the new flag."""
        if self._state == SessionState.SPEAKING:
            await self.interrupt()
        self.muted = not self.muted
        return self.muted

    # ==================
    # Clear
    # ==================

    async def clear(self):
        """Empty the conversation and return to IDLE from any state."""
        self._generation += 1
        self._playback_id += 1
        state = self._state

        try:
            if state == SessionState.SPEAKING:
                await self.player.stop()
            elif state == SessionState.RECORDING:
                await self.recorder.cancel()
        finally:
            self.conversation.clear()
            self._set_state(SessionState.IDLE)
