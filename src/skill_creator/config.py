from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from skill_creator.exception import ConfigError
from skill_creator.share import get_share_dir

ArchiverKind = Literal["builtin", "zip"]

ARCHIVER_ENV = "SKILL_CREATOR_ARCHIVER"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    levels: dict[str, str] = Field(
        default_factory=dict,
        description="Per-module log levels, e.g. `skill_creator.packager = \"DEBUG\"`",
    )


class Config(BaseModel):
    """Main configuration structure."""

    model_config = ConfigDict(extra="forbid")

    archiver: ArchiverKind = Field(
        default="builtin",
        description="Archiver used by `package`: in-process zip or the external `zip` command",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_file() -> Path:
    """Get the default configuration file path."""
    return get_share_dir() / "config.toml"


def get_default_config() -> Config:
    return Config()


def load_config_from_string(text: str) -> Config:
    """Parse TOML text into a `Config`.

    Raises:
        ConfigError: If the text is not valid TOML or does not match the schema.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in configuration: {e}") from e
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(config_file: Path | None = None) -> Config:
    """
    Load configuration from a TOML file, falling back to defaults if it does not exist.

    The `SKILL_CREATOR_ARCHIVER` environment variable overrides the `archiver` setting.

    Args:
        config_file: Path to the configuration file. Default: `<share dir>/config.toml`.

    Raises:
        ConfigError: If the configuration file is invalid.
    """
    config_file = config_file or get_config_file()
    if config_file.exists():
        logger.debug("Loading config from {file}", file=config_file)
        try:
            text = config_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_file}: {e}") from e
        config = load_config_from_string(text)
    else:
        config = get_default_config()

    if archiver := os.getenv(ARCHIVER_ENV):
        try:
            config = Config.model_validate({**config.model_dump(), "archiver": archiver})
        except ValidationError as e:
            raise ConfigError(f"Invalid {ARCHIVER_ENV}: {archiver!r}") from e
    return config
