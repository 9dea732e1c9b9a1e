"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator


class Config(BaseSettings):
    """Application configuration.

    Read once at startup and passed explicitly to the components that need it.
    """

    # Storage settings
    storage_url: str = Field(
        default="http://localhost:8080",
        validation_alias=AliasChoices("storage_url", "go_sqlite_server"),
        description="Base address of the storage service",
    )

    table_name: str = Field(
        default="url_shortener",
        min_length=1,
        description="Table holding URL mappings",
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to",
    )

    port: int = Field(
        default=5000,
        description="Port to listen on",
    )

    # URL shortener settings
    redirector_path: str = Field(
        default="redirect",
        description="Path segment short hashes are served under (e.g. 'redirect' for /redirect/a1b2c3d4)",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)",
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("storage_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("redirector_path")
    @classmethod
    def normalize_redirector_path(cls, v: str) -> str:
        path = v.strip().strip("/")
        if not path:
            raise ValueError("redirector_path must not be empty")
        return path


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
