"""Packaging of validated skills into distributable `.skill` archives."""

from __future__ import annotations

from pathlib import Path

import aiofiles.os
from loguru import logger

from skill_creator.archiver import Archiver, ZipArchiver
from skill_creator.exception import ArchiveError, PackageError
from skill_creator.models import Skill
from skill_creator.validator import validate_skill


async def resolve_output_path(skill: Skill, output_dir: Path | str | None = None) -> Path:
    """Resolve where the artifact for `skill` goes, creating `output_dir` if needed."""
    if output_dir is not None:
        output_path = Path(output_dir).expanduser().absolute()
        await aiofiles.os.makedirs(output_path, exist_ok=True)
    else:
        output_path = Path.cwd()
    return output_path / skill.artifact_name


async def package_skill(
    skill_path: Path | str,
    output_dir: Path | str | None = None,
    *,
    archiver: Archiver | None = None,
) -> Path:
    """
    Validate a skill and package it into `<skill-name>.skill`.

    Packaging is all-or-nothing: every check runs before the archiver is
    invoked, and a failing archiver leaves no file at the artifact path.

    Args:
        skill_path: Path to the skill directory.
        output_dir: Directory for the artifact. Default: current working directory.
        archiver: Archive backend. Default: in-process zip.

    Returns:
        Absolute path of the created artifact.

    Raises:
        PackageError: If any step fails.
    """
    skill = Skill.from_path(skill_path)

    if not await aiofiles.os.path.exists(skill.path):
        raise PackageError(f"Skill folder not found: {skill.path}")
    if not await aiofiles.os.path.isdir(skill.path):
        raise PackageError(f"Path is not a directory: {skill.path}")
    if not await aiofiles.os.path.exists(skill.skill_md_file):
        raise PackageError(f"SKILL.md not found in {skill.path}")

    logger.info("Validating skill {name}", name=skill.name)
    result = await validate_skill(skill.path)
    if not result.valid:
        raise PackageError(f"Validation failed: {result.message}")

    try:
        artifact = await resolve_output_path(skill, output_dir)
    except OSError as e:
        raise PackageError(f"Could not create output directory: {e}") from e
    archiver = archiver or ZipArchiver()
    logger.info("Packaging {src} into {dest}", src=skill.path, dest=artifact)
    try:
        await archiver.create_archive(skill.path, artifact)
    except (ArchiveError, OSError) as e:
        raise PackageError(f"Error creating .skill file: {e}") from e

    logger.info("Packaged skill {name} to {dest}", name=skill.name, dest=artifact)
    return artifact
