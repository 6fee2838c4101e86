# ============================================================================
# src/ordo_facile/config/logging_config.py
# ============================================================================
"""
Logging Settings
- Log level
- Output format
- Optional log file
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .loader import load_settings

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingSettings(BaseSettings):
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT_JSON: bool = Field(
        default=False,
        description="Emit log records as JSON lines"
    )
    LOG_FILE: Optional[Path] = Field(
        default=None,
        description="Optional file receiving a copy of every log record"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _VALID_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_VALID_LEVELS)}, got {value!r}")
        return level

logging_settings = load_settings(LoggingSettings)
