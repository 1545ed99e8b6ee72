"""Relay configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Chat-completion gateway
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_api_key: str | None = None
    ai_model: str = "google/gemini-2.5-flash"
    request_timeout: float = 60.0

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def gateway_configured(self) -> bool:
        """Whether an API key is available for the gateway."""
        return bool(self.ai_gateway_api_key)


settings = Settings()
