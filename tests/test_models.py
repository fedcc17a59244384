from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from skill_creator.models import Skill, ValidationResult


class TestSkill:
    def test_from_path(self, tmp_path: Path):
        skill = Skill.from_path(tmp_path / "my-skill")
        assert skill.path == tmp_path / "my-skill"
        assert skill.name == "my-skill"
        assert skill.skill_md_file == tmp_path / "my-skill" / "SKILL.md"
        assert skill.artifact_name == "my-skill.skill"

    def test_relative_path_is_made_absolute(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(tmp_path)
        skill = Skill.from_path("nested/pdf-tools")
        assert skill.path == tmp_path / "nested" / "pdf-tools"
        assert skill.name == "pdf-tools"

    def test_trailing_separator(self, tmp_path: Path):
        assert Skill.from_path(f"{tmp_path / 'my-skill'}/").name == "my-skill"

    def test_frozen(self, tmp_path: Path):
        skill = Skill.from_path(tmp_path)
        with pytest.raises(ValidationError):
            skill.path = tmp_path / "other"  # type: ignore[misc]


class TestValidationResult:
    def test_ok(self):
        result = ValidationResult.ok()
        assert result.valid is True
        assert result.message == "Skill is valid!"
        assert bool(result) is True

    def test_fail(self):
        result = ValidationResult.fail("SKILL.md not found")
        assert result.valid is False
        assert result.message == "SKILL.md not found"
        assert bool(result) is False

    def test_equality(self):
        assert ValidationResult.fail("x") == ValidationResult(valid=False, message="x")
        assert ValidationResult.fail("x") != ValidationResult.fail("y")

    def test_dump(self):
        assert ValidationResult.ok().model_dump() == {"valid": True, "message": "Skill is valid!"}
