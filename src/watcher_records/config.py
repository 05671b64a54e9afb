"""Configuration for watcher record tooling.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from watcher_records.xcontent import EncodeOptions


class WatcherSettings(BaseSettings):
    """Settings for encoding and decoding watch records.

    Environment variables:
    - LOG_LEVEL               (optional)
    - WATCHER_PRETTY_PRINT    (optional)
    - WATCHER_RECORD_VERSION  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `WatcherSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    pretty_print: bool = Field(
        default=False,
        validation_alias="WATCHER_PRETTY_PRINT",
        description="Indent encoded watch records",
    )

    record_version: int = Field(
        default=1,
        ge=1,
        validation_alias="WATCHER_RECORD_VERSION",
        description="Document version passed along when decoding records",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    def encode_options(self) -> EncodeOptions:
        return EncodeOptions(pretty=self.pretty_print)
