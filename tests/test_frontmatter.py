"""Tests for SKILL.md frontmatter parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from skill_creator.exception import FrontmatterError, MalformedHeaderError, MissingHeaderError
from skill_creator.frontmatter import (
    parse_frontmatter,
    parse_header_lines,
    read_frontmatter,
    split_frontmatter,
)


class TestParseFrontmatter:
    def test_valid_frontmatter(self):
        content = """---
name: my-skill
description: A test skill
---
# My Skill

Instructions here.
"""
        header = parse_frontmatter(content)
        assert header == {"name": "my-skill", "description": "A test skill"}

    def test_body_is_returned_by_split(self):
        content = "---\nname: my-skill\n---\n# Body\n\ntext"
        lines, body = split_frontmatter(content)
        assert lines == ["name: my-skill"]
        assert body == "# Body\n\ntext"

    def test_missing_frontmatter(self):
        with pytest.raises(MissingHeaderError, match="must start with YAML frontmatter"):
            parse_frontmatter("# No frontmatter here")

    def test_leading_whitespace_is_missing_frontmatter(self):
        with pytest.raises(MissingHeaderError):
            parse_frontmatter("\n---\nname: x\n---\n")

    def test_unclosed_frontmatter(self):
        content = """---
name: my-skill
description: A test skill
"""
        with pytest.raises(MalformedHeaderError, match="not properly closed"):
            parse_frontmatter(content)

    def test_opening_line_must_be_exact(self):
        with pytest.raises(MalformedHeaderError):
            parse_frontmatter("----\nname: x\n---\n")

    def test_closing_line_must_be_exact(self):
        with pytest.raises(MalformedHeaderError):
            parse_frontmatter("---\nname: x\n--- trailing\n")

    def test_errors_share_base_class(self):
        assert issubclass(MissingHeaderError, FrontmatterError)
        assert issubclass(MalformedHeaderError, FrontmatterError)
        assert issubclass(FrontmatterError, ValueError)

    def test_crlf_line_endings(self):
        content = "---\r\nname: my-skill\r\ndescription: Windows\r\n---\r\nBody\r\n"
        assert parse_frontmatter(content) == {"name": "my-skill", "description": "Windows"}

    def test_empty_header(self):
        assert parse_frontmatter("---\n---\nBody") == {}


class TestParseHeaderLines:
    def test_skips_blank_and_comment_lines(self):
        header = parse_header_lines(["", "   ", "# comment", "  # indented comment", "name: a"])
        assert header == {"name": "a"}

    def test_ignores_lines_without_colon(self):
        assert parse_header_lines(["just some text", "name: a"]) == {"name": "a"}

    def test_value_keeps_extra_colons(self):
        header = parse_header_lines(["description: Use for: parsing, http://x.y"])
        assert header == {"description": "Use for: parsing, http://x.y"}

    def test_trims_key_and_value(self):
        assert parse_header_lines(["  name  :   my-skill   "]) == {"name": "my-skill"}

    def test_strips_matching_double_quotes(self):
        assert parse_header_lines(['description: "Does X"']) == {"description": "Does X"}

    def test_strips_matching_single_quotes(self):
        assert parse_header_lines(["description: 'Does X'"]) == {"description": "Does X"}

    def test_mismatched_quotes_are_kept(self):
        assert parse_header_lines(["description: \"Does X'"]) == {"description": "\"Does X'"}

    def test_only_outer_quotes_are_stripped(self):
        header = parse_header_lines(['description: "say "hi" \\n"'])
        assert header == {"description": 'say "hi" \\n'}

    def test_single_quote_character_is_kept(self):
        assert parse_header_lines(['description: "']) == {"description": '"'}

    def test_empty_value(self):
        assert parse_header_lines(["name:"]) == {"name": ""}

    def test_duplicate_key_last_wins(self):
        assert parse_header_lines(["name: first", "name: second"]) == {"name": "second"}

    def test_nested_yaml_is_flattened_not_interpreted(self):
        header = parse_header_lines(["metadata:", "  author: test"])
        assert header == {"metadata": "", "author": "test"}


@pytest.mark.asyncio
async def test_read_frontmatter(tmp_path: Path):
    skill_md = tmp_path / "SKILL.md"
    skill_md.write_text("---\nname: my-skill\ndescription: Reads\n---\n", encoding="utf-8")
    assert await read_frontmatter(skill_md) == {"name": "my-skill", "description": "Reads"}


@pytest.mark.asyncio
async def test_read_frontmatter_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        await read_frontmatter(tmp_path / "SKILL.md")
