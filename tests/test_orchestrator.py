import pytest

from autovoice.core.conversation import ConversationLog
from autovoice.core.exceptions import (
    BadInputException,
    LLMException,
    TTSException,
    UnavailableException
)
from autovoice.core.orchestrator import (
    FALLBACK_REPLY,
    RequestOrchestrator,
    build_system_prompt,
    format_price,
    format_vehicle_line
)
from autovoice.db.models import Vehicle
from autovoice.db.seed import sample_vehicles

from conftest import FAKE_AUDIO, FakeGateway, SpyCarRepository


@pytest.fixture
def orchestrator(gateway, repository):
    return RequestOrchestrator(repository, gateway, configured=True)


@pytest.fixture
def unconfigured(gateway, repository):
    return RequestOrchestrator(repository, gateway, configured=False)


def test_format_price():
    assert format_price(28999) == "$28,999"
    assert format_price(0) == "$0"


def test_vehicle_line_without_features_or_description():
    car = Vehicle(
        id="car-100", make="Kia", model="Soul", year=2022, price=18000, mileage=12000,
        color="Blue", fuel_type="Gasoline", transmission="Automatic", drivetrain="FWD"
    )
    assert format_vehicle_line(car) == (
        "- 2022 Kia Soul: $18,000, Blue, 12,000 miles, Gasoline, Automatic, FWD. "
        "Features: none listed."
    )


def test_system_prompt_lists_every_car():
    prompt = build_system_prompt(sample_vehicles())
    assert prompt.startswith("You are AutoVoice AI")
    assert "- 2024 Toyota Camry: $28,999, Pearl White, 5,200 miles, Hybrid, Automatic, FWD." in prompt
    assert prompt.count("\n- ") == 8


def test_configured_requires_a_gateway(repository):
    assert not RequestOrchestrator(repository, None, configured=True).configured


async def test_unconfigured_chat_never_reads_inventory(unconfigured, gateway, repository):
    with pytest.raises(UnavailableException):
        await unconfigured.chat([], "Any electric cars?")
    assert repository.get_all_calls == 0
    assert gateway.calls == []


async def test_unconfigured_check_precedes_validation(unconfigured, gateway):
    with pytest.raises(UnavailableException):
        await unconfigured.chat_request({"garbage": True})
    with pytest.raises(UnavailableException):
        await unconfigured.transcribe(b"")
    with pytest.raises(UnavailableException):
        await unconfigured.synthesize("")
    assert gateway.calls == []


async def test_chat_grounds_reply_in_inventory(orchestrator, gateway):
    history = ConversationLog()
    history.add_user_turn("Hi")
    history.add_assistant_turn("Welcome!")

    result = await orchestrator.chat(history.turns, "Do you have any electric cars?")

    assert result.message == gateway.reply_text
    assert result.audio == FAKE_AUDIO
    assert gateway.call_names == ["reply", "synthesize"]

    _, system_context, turns, utterance = gateway.calls[0]
    assert "Tesla" in system_context and "Chevrolet" in system_context
    assert [t.content for t in turns] == ["Hi", "Welcome!"]
    assert utterance == "Do you have any electric cars?"
    assert gateway.calls[1] == ("synthesize", gateway.reply_text)


async def test_chat_reads_current_inventory_each_time(orchestrator, repository):
    await orchestrator.chat([], "Hi")
    await orchestrator.chat([], "Hello again")
    assert repository.get_all_calls == 2


async def test_speech_failure_returns_text_only(orchestrator, gateway):
    gateway.synthesize_error = TTSException()
    result = await orchestrator.chat([], "Any hybrids?")
    assert result.message == gateway.reply_text
    assert result.audio is None
    assert "audioUrl" not in result.to_dict()


async def test_unexpected_speech_error_returns_text_only(orchestrator, gateway):
    gateway.synthesize_error = RuntimeError("socket closed")
    result = await orchestrator.chat([], "Any hybrids?")
    assert result.message == gateway.reply_text
    assert result.audio_url is None


async def test_empty_reply_uses_fallback(repository):
    gateway = FakeGateway(reply_text="   ")
    orchestrator = RequestOrchestrator(repository, gateway, configured=True)
    result = await orchestrator.chat([], "Hi")
    assert result.message == FALLBACK_REPLY
    assert gateway.calls[-1] == ("synthesize", FALLBACK_REPLY)


async def test_reply_failure_propagates(orchestrator, gateway):
    gateway.reply_error = LLMException()
    with pytest.raises(LLMException):
        await orchestrator.chat([], "Hi")
    assert "synthesize" not in gateway.call_names


async def test_blank_utterance_rejected(orchestrator, gateway):
    with pytest.raises(BadInputException):
        await orchestrator.chat([], "   ")
    assert gateway.calls == []


async def test_chat_request_parses_camel_case_body(orchestrator, gateway):
    payload = {
        "messages": [{"id": "m1", "role": "user", "content": "Hi", "timestamp": 1700000000000}],
        "userMessage": "What's the cheapest car?"
    }
    result = await orchestrator.chat_request(payload)
    assert result.message == gateway.reply_text
    assert gateway.calls[0][2][0].id == "m1"


@pytest.mark.parametrize("payload", [
    None,
    [],
    {"messages": []},
    {"messages": [], "userMessage": ""},
    {"messages": "nope", "userMessage": "Hi"},
    {"messages": [{"id": "m1", "role": "system", "content": "Hi", "timestamp": 0}], "userMessage": "Hi"},
])
async def test_chat_request_rejects_malformed_body(orchestrator, gateway, payload):
    with pytest.raises(BadInputException):
        await orchestrator.chat_request(payload)
    assert gateway.calls == []


async def test_transcribe(orchestrator, gateway):
    text = await orchestrator.transcribe(b"webm", filename="question.webm")
    assert text == gateway.transcript
    assert gateway.calls == [("transcribe", b"webm", "question.webm")]


async def test_transcribe_empty_audio_rejected(orchestrator, gateway):
    with pytest.raises(BadInputException):
        await orchestrator.transcribe(b"")
    assert gateway.calls == []


async def test_empty_transcript_returned_verbatim():
    gateway = FakeGateway(transcript="")
    orchestrator = RequestOrchestrator(SpyCarRepository(), gateway, configured=True)
    assert await orchestrator.transcribe(b"silence") == ""


async def test_synthesize(orchestrator):
    assert await orchestrator.synthesize("Thanks for stopping by") == FAKE_AUDIO


@pytest.mark.parametrize("text", [None, "", "   ", 42])
async def test_synthesize_requires_text(orchestrator, gateway, text):
    with pytest.raises(BadInputException):
        await orchestrator.synthesize(text)
    assert gateway.calls == []
