"""
xdiff Configuration Management

Runtime settings loaded from environment variables (prefix ``XDIFF_``) and an
optional ``.env`` file.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class XDiffSettings(BaseSettings):
    """Settings shared by the xdiff and xreq commands."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    max_log_file_size: int = Field(
        default=10_000_000, description="Max log file size in bytes"
    )
    log_backup_count: int = Field(default=5, description="Number of backup log files")

    request_timeout: float = Field(
        default=30.0, description="Total timeout per request in seconds"
    )

    diff_config: str = Field(
        default="./xdiff.yaml", description="Default xdiff profile document"
    )
    req_config: str = Field(
        default="./xreq.yaml", description="Default xreq profile document"
    )

    theme: str = Field(default="monokai", description="Syntax highlighting theme")
    context_lines: int = Field(default=3, description="Context lines around hunks")

    model_config = SettingsConfigDict(
        env_prefix="XDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Invalid request timeout: {v}. Must be positive")
        return v

    @field_validator("context_lines")
    @classmethod
    def validate_context_lines(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Invalid context lines: {v}. Must not be negative")
        return v


_settings: Optional[XDiffSettings] = None


def get_settings() -> XDiffSettings:
    """
    Get the global settings instance.

    Returns:
        The global XDiffSettings instance
    """
    global _settings
    if _settings is None:
        _settings = XDiffSettings()
    return _settings


def reload_settings(env_file: Optional[Path] = None) -> XDiffSettings:
    """
    Reload the global settings, optionally from a specific env file.

    Args:
        env_file: Optional path to a ``.env`` style file

    Returns:
        Reloaded settings instance
    """
    global _settings
    if env_file is not None:
        _settings = XDiffSettings(_env_file=env_file)
    else:
        _settings = XDiffSettings()
    return _settings
