"""Application configuration using Pydantic Settings."""

import logging
import warnings
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # App
    app_name: str = "Notewise"
    debug: bool = True

    # Security
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080  # 1 week

    # Database
    database_url: str = "sqlite:///./notewise.db"

    # OpenAI-compatible provider. No key means AI features stay off.
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    embedding_model: str = "text-embedding-ada-002"
    chat_model: str = "gpt-3.5-turbo"
    provider_timeout_seconds: float = 30.0

    # Retrieval
    similarity_threshold: float = 0.5
    retrieval_strategy: Literal["local", "database"] = "local"
    default_search_limit: int = 5

    # CORS
    cors_origins: list[str] = ["*"]

    def __init__(self, **kwargs):
        """Initialize settings and validate production configuration."""
        super().__init__(**kwargs)
        self._validate_production_settings()
        if not self.ai_enabled:
            logger.warning(
                "OPENAI_API_KEY is not configured. AI chat features will be disabled."
            )

    @property
    def ai_enabled(self) -> bool:
        """True when a provider credential is configured."""
        return bool(self.openai_api_key)

    def _validate_production_settings(self) -> None:
        """Validate and warn about insecure production settings."""
        if not self.debug:
            # Production mode - check for insecure settings
            if self.secret_key == "change-me-in-production":
                warnings.warn(
                    "SECRET_KEY is set to default value. Change this in production!",
                    UserWarning,
                    stacklevel=2,
                )
                logger.warning(
                    "SECRET_KEY is set to default value. Change this in production!"
                )

            if "*" in self.cors_origins:
                warnings.warn(
                    "CORS is configured to allow all origins (*). Restrict this in production!",
                    UserWarning,
                    stacklevel=2,
                )
                logger.warning(
                    "CORS is configured to allow all origins (*). Restrict this in production!"
                )


settings = Settings()
