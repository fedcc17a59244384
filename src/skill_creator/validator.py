"""Skill validation."""

from __future__ import annotations

import re
from pathlib import Path

import aiofiles.os
from loguru import logger

from skill_creator.constant import (
    ALLOWED_PROPERTIES,
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    SKILL_MD,
)
from skill_creator.exception import MalformedHeaderError, MissingHeaderError
from skill_creator.frontmatter import read_frontmatter
from skill_creator.models import ValidationResult

_NAME_PATTERN = re.compile(r"[a-z0-9-]+")


def check_skill_name(name: str) -> str | None:
    """Check a skill name against the naming rules.

    Valid names:
    - Lowercase letters, digits, and hyphens only
    - Cannot start or end with hyphen, no consecutive hyphens
    - At most 64 characters

    Returns:
        The violation message, or None if the name is valid.
    """
    if not _NAME_PATTERN.fullmatch(name):
        return (
            f"Name '{name}' should be hyphen-case "
            "(lowercase letters, digits, and hyphens only)"
        )
    if name.startswith("-") or name.endswith("-") or "--" in name:
        return f"Name '{name}' cannot start/end with hyphen or contain consecutive hyphens"
    if len(name) > MAX_NAME_LENGTH:
        return (
            f"Name is too long ({len(name)} characters). "
            f"Maximum is {MAX_NAME_LENGTH} characters."
        )
    return None


def check_description(description: str) -> str | None:
    """Check a skill description; returns the violation message or None."""
    if "<" in description or ">" in description:
        return "Description cannot contain angle brackets (< or >)"
    if len(description) > MAX_DESCRIPTION_LENGTH:
        return (
            f"Description is too long ({len(description)} characters). "
            f"Maximum is {MAX_DESCRIPTION_LENGTH} characters."
        )
    return None


def check_header(header: dict[str, str]) -> str | None:
    """Apply the schema rules to a parsed header, stopping at the first violation."""
    unexpected = sorted(key for key in header if key not in ALLOWED_PROPERTIES)
    if unexpected:
        return (
            f"Unexpected key(s) in SKILL.md frontmatter: {', '.join(unexpected)}. "
            f"Allowed properties are: {', '.join(sorted(ALLOWED_PROPERTIES))}"
        )

    # Empty values count as missing
    name = header.get("name")
    if not name:
        return "Missing 'name' in frontmatter"
    description = header.get("description")
    if not description:
        return "Missing 'description' in frontmatter"

    return check_skill_name(name) or check_description(description)


async def validate_skill(skill_dir: Path | str) -> ValidationResult:
    """Validate a skill directory.

    The manifest is read and parsed fresh on every call. Failures are
    returned, never raised.

    Args:
        skill_dir: Path to the skill directory

    Returns:
        ValidationResult carrying the first violation, or the success message.
    """
    skill_md = Path(skill_dir).absolute() / SKILL_MD
    logger.debug("Validating {path}", path=skill_md)

    if not await aiofiles.os.path.exists(skill_md):
        return _fail("SKILL.md not found")

    try:
        header = await read_frontmatter(skill_md)
    except MissingHeaderError:
        return _fail("No YAML frontmatter found")
    except MalformedHeaderError:
        return _fail("Invalid frontmatter format")
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Could not read SKILL.md: {e}")

    if error := check_header(header):
        return _fail(error)

    logger.debug("Skill {name} is valid", name=header["name"])
    return ValidationResult.ok()


def _fail(message: str) -> ValidationResult:
    logger.info("Validation failed: {reason}", reason=message)
    return ValidationResult.fail(message)
