"""Filekeeper settings with environment variable support.

Uses pydantic-settings for type-safe configuration management.
Automatically loads from .env file and validates all settings.
"""

import codecs
import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FileSettings(BaseSettings):
    """File handle configuration with automatic environment variable loading.

    All settings can be overridden via FILEKEEPER_* environment variables.
    The .env file is automatically loaded if present.

    Examples:
        >>> # Load from environment
        >>> settings = FileSettings()
        >>> settings.encoding
        'utf-8'

        >>> # Override specific values
        >>> settings = FileSettings(temp_dir="/var/tmp/scratch")
    """

    model_config = SettingsConfigDict(
        env_prefix="FILEKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    temp_dir: Path | None = Field(
        default=None,
        description="Directory for temp files (default: the OS temp directory)",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used by read_all() and append()",
    )
    text_errors: Literal["replace", "ignore", "backslashreplace"] = Field(
        default="replace",
        description="Codec error handler for text that does not encode or decode cleanly",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the command-line interface",
    )

    @field_validator("temp_dir", mode="before")
    @classmethod
    def validate_temp_dir(cls, v) -> Path | None:  # noqa: N805
        """Convert string paths to Path objects, treating empty as unset."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate the encoding is a text codec that appends cleanly.

        append() encodes each piece of text on its own, so codecs that prefix
        every encoded chunk (byte-order marks in utf-16, utf-32 and utf-8-sig)
        are rejected.
        """
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: '{v}'") from e
        try:
            once = "a".encode(v)
            twice = "aa".encode(v)
            b"".decode(v)
        except LookupError as e:
            raise ValueError(f"Not a text encoding: '{v}'") from e
        if len(twice) != 2 * len(once):
            raise ValueError(
                f"Encoding '{v}' writes a byte-order mark; use an explicit-endian variant"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level


@lru_cache(maxsize=1)
def get_settings() -> FileSettings:
    """Return the process-wide settings, loaded once."""
    return FileSettings()
