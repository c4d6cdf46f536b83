# meeting_agent/config.py

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Single project config. Reads environment variables.
    Pydantic v2 + pydantic-settings.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # --- Core ---
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, test, prod)")

    # --- Meeting store ---
    MEETING_STORE: str = Field("memory", description="Meeting store backend ('memory', 'sql')")
    DATABASE_URL: Optional[str] = Field(
        None, description="Async database URL (e.g. postgresql+asyncpg://..., sqlite+aiosqlite:///...)"
    )

    # --- LLM providers ---
    LLM_PROVIDER: str = Field("stub", description="LLM provider to use ('stub', 'gemini', 'openai')")
    LLM_TEMPERATURE: float = Field(0.7, description="Sampling temperature for completions")
    GEMINI_API_KEY: Optional[str] = Field(None, description="API Key for Google Gemini")
    GEMINI_MODEL: str = Field("gemini-1.5-flash-latest", description="Gemini chat model")
    OPENAI_API_KEY: Optional[str] = Field(None, description="API Key for OpenAI")
    OPENAI_MODEL: str = Field("gpt-4", description="OpenAI chat model")
    OPENAI_BASE_URL: Optional[str] = Field(None, description="Base URL of an OpenAI-compatible server (None = api.openai.com)")

    # --- Assistant ---
    DEFAULT_TIMEZONE: str = Field("Asia/Kolkata", description="Zone used for naive datetimes and spoken output")
    ASSISTANT_NAME: str = Field("Alex's Assistant", description="Name the assistant introduces itself with")

    # --- HTTP ---
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    @model_validator(mode="after")
    def check_store_backend(self) -> "Settings":
        self.MEETING_STORE = self.MEETING_STORE.lower()
        if self.MEETING_STORE not in ("memory", "sql"):
            raise ValueError(f"Unknown meeting store: {self.MEETING_STORE!r}")
        if self.MEETING_STORE == "sql" and not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set when MEETING_STORE=sql")
        return self


try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    log.debug(
        "Loaded settings: store=%s, DB URL=%s..., LLM Provider=%s, TZ=%s",
        settings.MEETING_STORE,
        str(settings.DATABASE_URL)[:25] if settings.DATABASE_URL else "None",
        settings.LLM_PROVIDER,
        settings.DEFAULT_TIMEZONE,
    )
except Exception as e:
    log.exception("Failed to instantiate Settings.")
    raise e
