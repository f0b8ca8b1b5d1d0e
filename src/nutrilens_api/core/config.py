"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # AI gateway (OpenAI-compatible chat completions endpoint)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("AI_GATEWAY_API_KEY", "LOVABLE_API_KEY"),
    )
    ai_model: str = "google/gemini-2.5-flash"
    ai_timeout: float = 60.0  # seconds, applies to the single upstream call

    # Logging
    log_level: str = "INFO"

    # App
    debug: bool = False
    app_name: str = "NutriLens Analysis API"
    api_version: str = "1.0.0"

    @property
    def is_ai_configured(self) -> bool:
        """Check if an API key for the AI gateway is available."""
        return bool(self.ai_gateway_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
