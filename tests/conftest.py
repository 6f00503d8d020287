import pytest
from fastapi.testclient import TestClient

from autovoice.config import Settings
from autovoice.core.conversation import ChatReply
from autovoice.core.session import AssistantBackend, Player, Recorder
from autovoice.db.repositories.cars import InMemoryCarRepository
from autovoice.db.seed import sample_vehicles
from autovoice.main import create_app
from autovoice.services.gateway import AssistantGateway

FAKE_AUDIO = b"ID3\x04\x00fake-mp3-bytes"


class FakeGateway(AssistantGateway):
    """Records every call; failures are injected through the *_error attributes."""

    def __init__(self, transcript="Do you have any electric cars?", reply_text="We have the Tesla Model 3 and the Chevrolet Bolt EV.", audio=FAKE_AUDIO):
        self.transcript = transcript
        self.reply_text = reply_text
        self.audio = audio
        self.transcribe_error = None
        self.reply_error = None
        self.synthesize_error = None
        self.calls = []
        self.closed = False

    @property
    def call_names(self):
        return [call[0] for call in self.calls]

    async def transcribe(self, audio, filename="audio.webm"):
        self.calls.append(("transcribe", audio, filename))
        if self.transcribe_error:
            raise self.transcribe_error
        return self.transcript

    async def reply(self, system_context, turns, utterance):
        self.calls.append(("reply", system_context, list(turns), utterance))
        if self.reply_error:
            raise self.reply_error
        return self.reply_text

    async def synthesize(self, text):
        self.calls.append(("synthesize", text))
        if self.synthesize_error:
            raise self.synthesize_error
        return self.audio

    async def close(self):
        self.closed = True


class SpyCarRepository(InMemoryCarRepository):
    """In-memory inventory that counts full reads."""

    def __init__(self, vehicles=None):
        super().__init__(vehicles if vehicles is not None else sample_vehicles())
        self.get_all_calls = 0

    async def get_all(self):
        self.get_all_calls += 1
        return await super().get_all()


class FakeRecorder(Recorder):
    def __init__(self, audio=b"webm-recording"):
        self.audio = audio
        self.started = 0
        self.stopped = 0
        self.cancelled = 0

    async def start(self):
        self.started += 1

    async def stop(self):
        self.stopped += 1
        return self.audio

    async def cancel(self):
        self.cancelled += 1


class FakePlayer(Player):
    def __init__(self):
        self.played = []
        self.stopped = 0
        self.play_error = None

    async def play(self, audio_url):
        if self.play_error:
            raise self.play_error
        self.played.append(audio_url)

    async def stop(self):
        self.stopped += 1


class FakeBackend(AssistantBackend):
    """
    Client-side backend. `before_transcribe_returns` and
    `before_chat_returns` are awaited mid-request so tests can act while
    a request is in flight.
    """

    def __init__(self, transcript="Show me hybrids", reply=None):
        self.transcript = transcript
        self.reply = reply or ChatReply(
            message="The Camry and the Tucson are both hybrids.",
            audio_url="data:audio/mp3;base64,SUQz"
        )
        self.transcribe_error = None
        self.chat_error = None
        self.before_transcribe_returns = None
        self.before_chat_returns = None
        self.transcribed = []
        self.chats = []

    async def transcribe(self, audio):
        self.transcribed.append(audio)
        if self.before_transcribe_returns:
            await self.before_transcribe_returns()
        if self.transcribe_error:
            raise self.transcribe_error
        return self.transcript

    async def chat(self, messages, user_message):
        self.chats.append((list(messages), user_message))
        if self.before_chat_returns:
            await self.before_chat_returns()
        if self.chat_error:
            raise self.chat_error
        return self.reply


@pytest.fixture
def settings(tmp_path):
    return Settings(
        OPENAI_API_KEY="test-key",
        AGENT_LOG_ENABLED=False,
        AGENT_LOG_PATH=tmp_path / "agent_log.md"
    )


@pytest.fixture
def unconfigured_settings(tmp_path):
    return Settings(
        OPENAI_API_KEY=None,
        AGENT_LOG_ENABLED=False,
        AGENT_LOG_PATH=tmp_path / "agent_log.md"
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def repository():
    return SpyCarRepository()


@pytest.fixture
def client(settings, gateway, repository):
    app = create_app(settings, gateway=gateway, repository=repository)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unconfigured_client(unconfigured_settings, gateway, repository):
    app = create_app(unconfigured_settings, gateway=gateway, repository=repository)
    with TestClient(app) as test_client:
        yield test_client
