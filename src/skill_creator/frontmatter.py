"""Flat frontmatter parsing for SKILL.md files.

Only the subset used by skill manifests is supported: one `key: value` pair
per line, optionally quoted values, blank lines and `#` comments. Nested
YAML structures, lists and multi-line values are not understood.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles

from skill_creator.constant import FRONTMATTER_DELIMITER
from skill_creator.exception import MalformedHeaderError, MissingHeaderError

_QUOTES = ('"', "'")


def _is_delimiter(line: str) -> bool:
    return line.removesuffix("\r") == FRONTMATTER_DELIMITER


def split_frontmatter(content: str) -> tuple[list[str], str]:
    """Split SKILL.md content into header lines and the markdown body.

    Raises:
        MissingHeaderError: If the content does not start with `---`.
        MalformedHeaderError: If the opening or closing `---` line is missing.
    """
    if not content.startswith(FRONTMATTER_DELIMITER):
        raise MissingHeaderError("SKILL.md must start with YAML frontmatter (---)")

    lines = content.split("\n")
    if not _is_delimiter(lines[0]):
        raise MalformedHeaderError("SKILL.md frontmatter must open with a line of exactly ---")

    for idx in range(1, len(lines)):
        if _is_delimiter(lines[idx]):
            return lines[1:idx], "\n".join(lines[idx + 1 :])
    raise MalformedHeaderError("SKILL.md frontmatter not properly closed with ---")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_header_lines(lines: list[str]) -> dict[str, str]:
    """Parse `key: value` lines into a flat mapping.

    Blank lines, `#` comments and lines without a colon are skipped. A
    repeated key keeps its last value.
    """
    header: dict[str, str] = {}
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        header[key.strip()] = _unquote(value.strip())
    return header


def parse_frontmatter(content: str) -> dict[str, str]:
    """Parse the frontmatter block at the top of SKILL.md content.

    Args:
        content: Raw content of a SKILL.md file

    Returns:
        Flat mapping of field names to string values

    Raises:
        MissingHeaderError: If the content does not start with `---`
        MalformedHeaderError: If the block is not closed
    """
    header_lines, _ = split_frontmatter(content)
    return parse_header_lines(header_lines)


async def read_frontmatter(path: Path) -> dict[str, str]:
    """Read a SKILL.md file and parse its frontmatter."""
    async with aiofiles.open(path, encoding="utf-8") as f:
        content = await f.read()
    return parse_frontmatter(content)
