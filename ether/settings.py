"""Environment settings powered by Pydantic BaseSettings."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EtherSettings(BaseSettings):
    """Environment configuration, read from ``ETHER_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="ETHER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_requests: bool = Field(default=False)
    timeout_seconds: float | None = Field(default=None, gt=0.0)
    user_agent: str | None = Field(default=None)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level

    @property
    def log_level_number(self) -> int:
        """Numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> EtherSettings:
    """Get a settings instance."""
    return EtherSettings()
