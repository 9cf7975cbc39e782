"""
Configuration management for the SDK.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_HOST = "view-api.box.com"
DEFAULT_UPLOAD_HOST = "upload.view-api.box.com"
DEFAULT_BASE_PATH = "/1"
DEFAULT_RETRY_TIMEOUT = 60


class Settings(BaseSettings):
    """SDK settings, read from BOX_VIEW_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="BOX_VIEW_", extra="ignore"
    )

    api_key: Optional[str] = None
    host: str = DEFAULT_HOST
    upload_host: str = DEFAULT_UPLOAD_HOST
    base_path: str = DEFAULT_BASE_PATH
    retry_timeout: int = Field(default=DEFAULT_RETRY_TIMEOUT, gt=0)
    http_timeout: float = Field(default=60.0, gt=0)
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("base_path")
    @classmethod
    def _normalize_base_path(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value

    def setup_logging(self) -> None:
        """Configure logging for the SDK."""
        setup_logging("DEBUG" if self.debug else self.log_level)


def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the SDK logger, once."""
    logger = logging.getLogger("box_view")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"box_view.{name}")
