"""Runtime configuration for the advisor gateway."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the advisor gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Text provider (translation)
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "TEXT_PROVIDER_KEY"),
    )
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    translate_model: str = Field(default="gpt-4o-mini", alias="TRANSLATE_MODEL")
    translate_temperature: float = Field(default=0.2, alias="TRANSLATE_TEMPERATURE")
    translate_max_tokens: int = Field(default=1000, alias="TRANSLATE_MAX_TOKENS", ge=1)

    # Multimodal provider (chat, remedy)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "MULTIMODAL_PROVIDER_KEY", "GOOGLE_API_KEY"),
    )
    gemini_chat_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_CHAT_MODEL")
    gemini_remedy_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_REMEDY_MODEL")

    provider_timeout_seconds: float = Field(default=60.0, alias="PROVIDER_TIMEOUT_SECONDS", gt=0)

    # Forward chat history to the provider. Off keeps the single-turn behaviour.
    chat_include_history: bool = Field(default=False, alias="CHAT_INCLUDE_HISTORY")

    max_body_bytes: int = Field(default=10 * 1024 * 1024, alias="MAX_BODY_BYTES", ge=1)

    # FastAPI
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=4000, alias="APP_PORT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    return Settings()
