"""
codegraph-tiers Configuration

Centralized configuration management using pydantic-settings.
All environment variables use the CODEGRAPH_TIERS_ prefix.

Usage:
    from codegraph_tiers.config import get_settings

    settings = get_settings()
    settings.channels.input_channel  # "__tierIn"
"""

import re
from functools import cached_property, lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class ChannelConfig(BaseModel):
    """Reserved names used by generated marshalling code."""

    input_channel: str = Field(default="__tierIn", description="Input bag read by server fragments")
    output_channel: str = Field(default="__tierOut", description="Output bag written by server fragments")


class ComponentConfig(BaseModel):
    """Component document integration."""

    extensions: list[str] = Field(default_factory=lambda: [".vue"], description="Component file extensions")
    flag: str = Field(default="tiers", description="Resource query flag enabling tier compilation")


class LoggingConfig(BaseModel):
    """Logging output."""

    level: str = Field(default="WARNING", description="Log level")
    format: Literal["console", "json"] = Field(default="console", description="Renderer")


class TierSettings(BaseSettings):
    """
    codegraph-tiers Settings

    Environment variables use the CODEGRAPH_TIERS_ prefix.
    Example: CODEGRAPH_TIERS_MARKER_LABEL, CODEGRAPH_TIERS_INPUT_CHANNEL

    Grouped access:
        settings.channels   # ChannelConfig
        settings.component  # ComponentConfig
        settings.logging    # LoggingConfig
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEGRAPH_TIERS_",
        extra="ignore",
    )

    marker_label: str = Field(default="on", description="Label that introduces a tier marker")
    language: str = Field(default="javascript", description="Grammar used for module source")

    input_channel: str = Field(default="__tierIn")
    output_channel: str = Field(default="__tierOut")

    component_extensions: list[str] = Field(default_factory=lambda: [".vue"])
    component_flag: str = Field(default="tiers")

    log_level: str = Field(default="WARNING")
    log_format: Literal["console", "json"] = Field(default="console")

    @field_validator("marker_label", "input_channel", "output_channel")
    @classmethod
    def _check_identifier(cls, value: str) -> str:
        if not _JS_IDENTIFIER.match(value):
            raise ValueError(f"not a JavaScript identifier: {value!r}")
        return value

    @model_validator(mode="after")
    def _check_channels_differ(self) -> "TierSettings":
        if self.input_channel == self.output_channel:
            raise ValueError("input_channel and output_channel must differ")
        return self

    # ========================================================================
    # Grouped Config Accessors
    # ========================================================================

    @cached_property
    def channels(self) -> ChannelConfig:
        return ChannelConfig(input_channel=self.input_channel, output_channel=self.output_channel)

    @cached_property
    def component(self) -> ComponentConfig:
        return ComponentConfig(extensions=self.component_extensions, flag=self.component_flag)

    @cached_property
    def logging(self) -> LoggingConfig:
        return LoggingConfig(level=self.log_level, format=self.log_format)


@lru_cache(maxsize=1)
def get_settings() -> TierSettings:
    """Process-default settings (read once from the environment)."""
    return TierSettings()


__all__ = [
    "ChannelConfig",
    "ComponentConfig",
    "LoggingConfig",
    "TierSettings",
    "get_settings",
]
