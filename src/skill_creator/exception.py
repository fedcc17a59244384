from __future__ import annotations


class SkillCreatorException(Exception):
    """Base exception class for skill-creator."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigError(SkillCreatorException, ValueError):
    """Configuration error."""

    pass


class FrontmatterError(SkillCreatorException, ValueError):
    """The SKILL.md header block cannot be parsed."""

    pass


class MissingHeaderError(FrontmatterError):
    """The manifest does not start with the header delimiter."""

    pass


class MalformedHeaderError(FrontmatterError):
    """The header delimiter is opened but never closed."""

    pass


class ScaffoldError(SkillCreatorException, RuntimeError):
    """A new skill cannot be created."""

    pass


class ArchiveError(SkillCreatorException, RuntimeError):
    """The archiver failed to produce an archive."""

    pass


class PackageError(SkillCreatorException, RuntimeError):
    """Packaging a skill failed."""

    pass
