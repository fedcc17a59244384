from __future__ import annotations

import importlib.metadata

NAME = importlib.metadata.metadata("skill-creator")["Name"]
VERSION = importlib.metadata.version("skill-creator")

SKILL_MD = "SKILL.md"
"""File name of the skill manifest."""
SKILL_EXTENSION = ".skill"
"""Extension of packaged skill archives."""

FRONTMATTER_DELIMITER = "---"

ALLOWED_PROPERTIES = frozenset({"name", "description", "license", "allowed-tools", "metadata"})
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
