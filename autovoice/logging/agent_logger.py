"""
Agent Logger for Markdown Execution Logs.
Creates human-readable logs of assistant conversations for debugging.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class AgentLogger:
    """
    Markdown logger for assistant activity.

    Documents:
    - System events (startup, shutdown)
    - Transcriptions
    - Completed chat turns with latency
    - Gateway failures

    Entries go through a queue drained by a background task when an
    event loop is running, and are written directly otherwise.
    """

    def __init__(self, log_path: str = "logs/agent_log.md", enabled: bool = True):
        self.log_path = Path(log_path)
        self.enabled = enabled

        if self.enabled:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self._queue: asyncio.Queue = asyncio.Queue()
        self._writer_task: Optional[asyncio.Task] = None
        self._running = False

        if self.enabled:
            self._start_writer()

    def _start_writer(self):
        """Start the background log writer."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop, will write synchronously
            return
        self._writer_task = loop.create_task(self._write_loop())
        self._running = True

    async def _write_loop(self):
        """Background loop to write logs asynchronously."""
        while self._running:
            try:
                entry = await asyncio.wait_for(self._queue.get(), timeout=1.0)
                self._sync_write(entry)
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                break

    def _sync_write(self, entry: str):
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(entry)
                f.write("\n")
        except OSError as e:
            logger.error(f"Failed to write agent log: {e}")

    async def _log(self, entry: str):
        """Add a log entry to the queue."""
        if not self.enabled:
            return
        if self._running and self._writer_task:
            await self._queue.put(entry)
        else:
            self._sync_write(entry)

    # =========================
    # Public Logging Methods
    # =========================

    async def log_transcription(
        self,
        text: str,
        audio_size_bytes: int,
        latency_ms: Optional[float] = None
    ):
        """Log a transcription result."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        shown = text if text else "_(empty transcript)_"

        entry = f"""### 🎤 Transcription | {timestamp}

**Transcript:** "{shown}"
**Audio Size:** {audio_size_bytes} bytes
{f'**STT Latency:** {latency_ms:.0f}ms' if latency_ms is not None else ''}
"""
        await self._log(entry)

    async def log_turn_complete(
        self,
        user_text: str,
        agent_text: str,
        has_audio: bool,
        metrics: Dict[str, float]
    ):
        """Log a complete chat turn with metrics."""
        timestamp = datetime.now().strftime("%H:%M:%S")

        display_response = agent_text
        if len(agent_text) > 500:
            display_response = agent_text[:500] + "..."

        total_latency = metrics.get("total_latency_ms", 0.0)
        llm_latency = metrics.get("llm_latency_ms", 0.0)

        entry = f"""### ✅ Turn Complete | {timestamp}

**Customer:** "{user_text}"

> {display_response}

| Metric | Value |
|--------|-------|
| LLM | {llm_latency:.0f}ms |
| Total | {total_latency:.0f}ms |
| Audio | {"yes" if has_audio else "no"} |

---
"""
        await self._log(entry)

    async def log_error(
        self,
        operation: str,
        error_message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Log a failure."""
        timestamp = datetime.now().strftime("%H:%M:%S")

        entry = f"""### ❌ Error | {timestamp}

**Operation:** `{operation}`
**Message:** {error_message}
"""
        for key, value in (details or {}).items():
            entry += f"- **{key}:** {value}\n"

        await self._log(entry)

    async def log_system_event(
        self,
        event: str,
        details: Dict[str, Any]
    ):
        """Log a system event."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        details_str = ""
        for key, value in details.items():
            details_str += f"- **{key}:** {value}\n"

        entry = f"""### ⚙️ System Event | {timestamp}

**Event:** {event}

{details_str}
---
"""
        await self._log(entry)

    async def close(self):
        """Close the logger and flush pending entries."""
        self._running = False

        if self._writer_task:
            self._writer_task.cancel()
            try:
                await self._writer_task
            except asyncio.CancelledError:
                pass
            self._writer_task = None

        while not self._queue.empty():
            try:
                entry = self._queue.get_nowait()
                self._sync_write(entry)
            except asyncio.QueueEmpty:
                break

        logger.info("Agent logger closed")
