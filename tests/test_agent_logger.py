from autovoice.logging.agent_logger import AgentLogger


async def test_entries_written_on_close(tmp_path):
    log_path = tmp_path / "logs" / "agent_log.md"
    agent_logger = AgentLogger(str(log_path))

    await agent_logger.log_system_event("Application starting", {"version": "1.0.0"})
    await agent_logger.log_transcription("Any electric cars?", audio_size_bytes=2048, latency_ms=310)
    await agent_logger.log_turn_complete(
        "Any electric cars?",
        "We have the Tesla Model 3 and the Chevrolet Bolt EV.",
        has_audio=True,
        metrics={"llm_latency_ms": 800, "total_latency_ms": 1400}
    )
    await agent_logger.log_error("chat.synthesize", "Failed to generate speech", {"error": "timeout"})
    await agent_logger.close()

    content = log_path.read_text(encoding="utf-8")
    assert "**Event:** Application starting" in content
    assert '**Transcript:** "Any electric cars?"' in content
    assert "**Audio Size:** 2048 bytes" in content
    assert "Chevrolet Bolt EV" in content
    assert "| Total | 1400ms |" in content
    assert "`chat.synthesize`" in content
    assert "- **error:** timeout" in content


async def test_empty_transcript_is_marked(tmp_path):
    log_path = tmp_path / "agent_log.md"
    agent_logger = AgentLogger(str(log_path))
    await agent_logger.log_transcription("", audio_size_bytes=10)
    await agent_logger.close()
    assert "_(empty transcript)_" in log_path.read_text(encoding="utf-8")


def test_writes_synchronously_without_event_loop(tmp_path):
    log_path = tmp_path / "agent_log.md"
    agent_logger = AgentLogger(str(log_path))
    assert agent_logger._writer_task is None
    agent_logger._sync_write("entry")
    assert log_path.read_text(encoding="utf-8") == "entry\n"


async def test_disabled_logger_writes_nothing(tmp_path):
    log_path = tmp_path / "logs" / "agent_log.md"
    agent_logger = AgentLogger(str(log_path), enabled=False)
    await agent_logger.log_system_event("ignored", {})
    await agent_logger.close()
    assert not log_path.exists()
