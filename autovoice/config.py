"""
Configuration management for AutoVoice.
Loads settings from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache


# Voices accepted by the speech endpoint
TTS_VOICES = [
    "alloy",
    "echo",
    "fable",
    "onyx",
    "nova",
    "shimmer"
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # =========================
    # Application Settings
    # =========================
    APP_NAME: str = "AutoVoice AI"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    ENVIRONMENT: str = Field(default="development", description="Environment name")

    # =========================
    # API Keys
    # =========================
    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="OpenAI API key; AI-backed endpoints are disabled without it"
    )
    OPENAI_BASE_URL: Optional[str] = Field(default=None, description="Override for the OpenAI API base URL")

    # =========================
    # Server Settings
    # =========================
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=5000, description="Server port")
    CORS_ORIGINS: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # =========================
    # Model Settings
    # =========================
    STT_MODEL_ID: str = Field(default="whisper-1", description="Transcription model")
    LLM_MODEL_ID: str = Field(default="gpt-5", description="Chat completion model")
    TTS_MODEL_ID: str = Field(default="tts-1", description="Speech synthesis model")
    TTS_VOICE: str = Field(default="alloy", description="Speech synthesis voice")
    LLM_MAX_TOKENS: int = Field(default=500, description="Maximum completion tokens per reply")

    # =========================
    # Latency Settings
    # =========================
    GATEWAY_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Timeout applied to every transcription, chat and speech call"
    )

    # =========================
    # Logging Settings
    # =========================
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    AGENT_LOG_ENABLED: bool = Field(default=True, description="Write the markdown agent log")
    AGENT_LOG_PATH: Path = Field(
        default=Path("./logs/agent_log.md"),
        description="Path to agent markdown log"
    )

    @field_validator("TTS_VOICE")
    @classmethod
    def _known_voice(cls, value: str) -> str:
        if value not in TTS_VOICES:
            raise ValueError(f"TTS_VOICE must be one of {TTS_VOICES}, got '{value}'")
        return value

    @property
    def openai_configured(self) -> bool:
        """Whether the assistant gateway credential is present."""
        return bool(self.OPENAI_API_KEY and self.OPENAI_API_KEY.strip())


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

