"""
Configuration module for the diagram graph backend and CLI.

Uses pydantic-settings for environment-based configuration. Every setting
can be overridden with a DIAGRAM_GRAPH_-prefixed environment variable,
e.g. DIAGRAM_GRAPH_PORT=9000.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DIAGRAM_GRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Backend bind address")
    port: int = Field(default=8765, description="Backend port")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    api_base: str = Field(
        default="http://127.0.0.1:8765/api",
        description="Backend URL used by the CLI",
    )
    request_timeout: float = Field(default=30.0, description="CLI request timeout in seconds")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Set up root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
