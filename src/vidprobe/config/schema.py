"""Pydantic schema for the TOML configuration file.

The file is validated as a whole before any value reaches the config
dataclasses, so typos in keys are reported instead of silently ignored.

Example config.toml:

    [logging]
    level = "debug"
    format = "json"
    file = "~/.vidprobe/vidprobe.log"

    [parser]
    log_lines = true

    [playback]
    acceptance = "complete"
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingSection(BaseModel):
    """[logging] section."""

    model_config = ConfigDict(extra="forbid")

    level: Literal["debug", "info", "warning", "error"] | None = None
    file: str | None = None
    format: Literal["text", "json"] | None = None
    include_stderr: bool | None = None
    max_bytes: int | None = Field(default=None, gt=0)
    backup_count: int | None = Field(default=None, ge=0)

    @field_validator("level", "format", mode="before")
    @classmethod
    def _lowercase(cls, value: object) -> object:
        if isinstance(value, str):
            return value.lower()
        return value


class ParserSection(BaseModel):
    """[parser] section."""

    model_config = ConfigDict(extra="forbid")

    log_lines: bool | None = None
    record_unparsable: bool | None = None


class PlaybackSection(BaseModel):
    """[playback] section."""

    model_config = ConfigDict(extra="forbid")

    acceptance: Literal["good_enough", "complete"] | None = None


class ConfigFileSchema(BaseModel):
    """Root schema for config.toml."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingSection = Field(default_factory=LoggingSection)
    parser: ParserSection = Field(default_factory=ParserSection)
    playback: PlaybackSection = Field(default_factory=PlaybackSection)
