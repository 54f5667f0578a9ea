"""
Logger Configuration.

Verbosity is read from the `LOG_LEVEL` environment variable. No .env file is
consulted.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import LogLevel, parse_level


class LoggerSettings(BaseSettings):
    """Verbosity configuration, resolved once per Logger."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    log_level: str | None = Field(default=None, description="Verbosity: error, warn, info or debug")

    @property
    def threshold(self) -> LogLevel:
        return parse_level(self.log_level)
