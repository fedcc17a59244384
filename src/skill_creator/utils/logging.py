"""Log sinks for the command-line tool.

Thresholds are keyed by logger name (`skill_creator.packager`). A record uses
the threshold of its closest configured ancestor, falling back to `default`.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Record

PACKAGE = "skill_creator"
DEFAULT_LEVEL_KEY = "default"

logger.remove()


def level_no(level_name: str) -> int:
    """Resolve a level name such as `debug` to its loguru severity number."""
    try:
        return logger.level(level_name.strip().upper()).no
    except ValueError as exc:
        raise ValueError(f"Invalid log level '{level_name}'") from exc


def qualify_module(module: str) -> str:
    """Expand `packager` to `skill_creator.packager`; `default` and full names pass through."""
    key = module.strip().strip(".").lower()
    if not key or key == DEFAULT_LEVEL_KEY:
        return DEFAULT_LEVEL_KEY
    if key == PACKAGE or key.startswith(f"{PACKAGE}."):
        return key
    return f"{PACKAGE}.{key}"


class LevelThresholds:
    def __init__(self, levels: Mapping[str, str], base_level: str) -> None:
        self.levels = {qualify_module(k): level_no(v) for k, v in levels.items()}
        self.levels.setdefault(DEFAULT_LEVEL_KEY, level_no(base_level))

    def threshold_for(self, name: str | None) -> int:
        parts = (name or "").lower().split(".")
        while parts:
            if (key := ".".join(parts)) in self.levels:
                return self.levels[key]
            parts.pop()
        return self.levels[DEFAULT_LEVEL_KEY]

    def __call__(self, record: Record) -> bool:
        return record["level"].no >= self.threshold_for(record["name"])


def configure_file_logging(
    log_file: Path,
    *,
    base_level: str,
    module_levels: Mapping[str, str] | None = None,
    console_level: str | None = None,
    rotation: str = "10 MB",
    retention: str = "10 days",
) -> None:
    """Send records to `log_file`, and to stderr when `console_level` is given.

    Raises:
        ValueError: If any level name is unknown to loguru.
    """
    thresholds = LevelThresholds(module_levels or {}, base_level)
    console_no = level_no(console_level) if console_level is not None else None

    logger.remove()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(log_file, level="TRACE", rotation=rotation, retention=retention, filter=thresholds)
    if console_no is not None:
        logger.add(sys.stderr, level=console_no, format="<level>{level: <8}</level> {message}")
    logger.enable(PACKAGE)
    logger.debug("Log thresholds: {levels}", levels=thresholds.levels)
