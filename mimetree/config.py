"""Runtime settings loaded from environment variables via pydantic-settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class RetryConfig(BaseSettings):
    """Backoff policy for :class:`~mimetree.retry.RetryingByteFetcher`."""

    model_config = {"env_prefix": "RETRY_"}

    max_attempts: int = Field(default=3, description="Maximum fetch attempts per part")
    initial_wait_seconds: float = Field(
        default=0.5,
        description="Initial backoff wait in seconds",
    )
    max_wait_seconds: float = Field(
        default=10.0,
        description="Maximum backoff wait in seconds",
    )
    multiplier: float = Field(default=2.0, description="Exponential backoff multiplier")


class MimeTreeConfig(BaseSettings):
    """Process-level settings for tools built on :mod:`mimetree`."""

    model_config = {"env_prefix": "MIMETREE_"}

    log_level: str = Field(default="INFO", description="Root log level name")
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines instead of the console renderer",
    )
    retry: RetryConfig = Field(default_factory=RetryConfig)
