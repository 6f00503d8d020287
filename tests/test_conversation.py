import base64

import pytest
from pydantic import ValidationError

from autovoice.core.conversation import ChatResult, ConversationLog, ConversationTurn


def make_clock(*readings):
    values = iter(readings)
    return lambda: next(values)


def test_turns_keep_order_and_roles():
    log = ConversationLog(clock=make_clock(1000, 2000, 3000))
    log.add_user_turn("Any SUVs?")
    log.add_assistant_turn("The Honda CR-V is a great pick.")
    log.add_user_turn("What color?")

    assert [t.role for t in log] == ["user", "assistant", "user"]
    assert log.last.content == "What color?"
    assert len(log) == 3
    assert len({t.id for t in log}) == 3


def test_timestamps_never_go_backwards():
    log = ConversationLog(clock=make_clock(5000, 4000))
    first = log.add_user_turn("Hi")
    second = log.add_assistant_turn("Hello!")
    assert second.timestamp == first.timestamp == 5000


def test_turns_is_a_copy():
    log = ConversationLog()
    log.add_user_turn("Hi")
    log.turns.clear()
    assert len(log) == 1


def test_clear():
    log = ConversationLog()
    log.add_user_turn("Hi")
    log.clear()
    assert len(log) == 0
    assert log.last is None


def test_to_payload():
    log = ConversationLog(clock=make_clock(1700000000000))
    turn = log.add_user_turn("Hi")
    assert log.to_payload() == [
        {"id": turn.id, "role": "user", "content": "Hi", "timestamp": 1700000000000}
    ]


def test_turn_validation():
    with pytest.raises(ValidationError):
        ConversationTurn(id="1", role="system", content="Hi", timestamp=0)
    with pytest.raises(ValidationError):
        ConversationTurn(id="1", role="user", content="", timestamp=0)
    with pytest.raises(ValidationError):
        ConversationTurn(id="1", role="user", content="Hi", timestamp=-1)


def test_turn_to_llm_message():
    turn = ConversationTurn(id="1", role="assistant", content="Hello", timestamp=0)
    assert turn.to_llm_message() == {"role": "assistant", "content": "Hello"}


def test_chat_result_audio_url():
    result = ChatResult(message="Hi", audio=b"mp3")
    assert result.audio_url == "data:audio/mp3;base64," + base64.b64encode(b"mp3").decode()
    assert result.to_dict() == {"message": "Hi", "audioUrl": result.audio_url}


def test_chat_result_without_audio():
    result = ChatResult(message="Hi")
    assert result.audio_url is None
    assert result.to_dict() == {"message": "Hi"}
