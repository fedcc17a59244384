"""Data models shared by the validator, packager and scaffolder."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from skill_creator.constant import SKILL_EXTENSION, SKILL_MD


class Skill(BaseModel):
    """A skill directory on disk.

    The model only carries the location; the manifest is re-read on every
    operation so edits between calls are always observed.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Absolute path to the skill directory")

    @classmethod
    def from_path(cls, path: Path | str) -> Skill:
        """Create a Skill from a possibly relative path."""
        return cls(path=Path(path).expanduser().absolute())

    @property
    def name(self) -> str:
        """Skill name, taken from the directory's final path segment."""
        return self.path.name

    @property
    def skill_md_file(self) -> Path:
        """Path to the SKILL.md file."""
        return self.path / SKILL_MD

    @property
    def artifact_name(self) -> str:
        """File name of the packaged archive."""
        return f"{self.name}{SKILL_EXTENSION}"


class ValidationResult(BaseModel):
    """Outcome of validating a skill.

    `message` is either the success confirmation or the first violation found.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: str

    @classmethod
    def ok(cls, message: str = "Skill is valid!") -> ValidationResult:
        return cls(valid=True, message=message)

    @classmethod
    def fail(cls, message: str) -> ValidationResult:
        return cls(valid=False, message=message)

    def __bool__(self) -> bool:
        return self.valid
