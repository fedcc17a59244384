"""Archive creation for packaged skills.

An archiver turns a skill directory into a single ZIP archive whose only
top-level entry is the directory itself. Archives are written to a temporary
sibling file and moved into place, so a failed run never leaves a partial
archive at the destination.
"""

from __future__ import annotations

import asyncio
import uuid
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

import aiofiles.os
from loguru import logger

from skill_creator.config import ArchiverKind
from skill_creator.exception import ArchiveError


class Archiver(Protocol):
    async def create_archive(self, source_dir: Path, dest_file: Path) -> None:
        """Create `dest_file` containing `source_dir` as its sole top-level entry.

        Raises:
            ArchiveError: If the archive cannot be produced.
        """
        ...


def _temp_path(dest_file: Path) -> Path:
    return dest_file.with_name(f".{dest_file.name}.{uuid.uuid4().hex[:8]}.tmp")


async def _discard(path: Path) -> None:
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass


def _excluded_arcnames(source_dir: Path, *paths: Path) -> list[str]:
    """Arcnames of `paths` that would otherwise be swept into the archive."""
    source_dir = source_dir.absolute()
    return [
        path.absolute().relative_to(source_dir.parent).as_posix()
        for path in paths
        if path.absolute().is_relative_to(source_dir)
    ]


def iter_archive_entries(
    source_dir: Path, *, exclude: set[Path] | None = None
) -> Iterator[tuple[Path, str]]:
    """Yield `(file, arcname)` pairs for every file under `source_dir`, sorted.

    Arcnames are posix paths rooted at `source_dir.name`.
    """
    exclude = exclude or set()
    for file_path in sorted(source_dir.rglob("*")):
        if not file_path.is_file() or file_path in exclude:
            continue
        arcname = file_path.relative_to(source_dir.parent).as_posix()
        yield file_path, arcname


class ZipArchiver:
    """Writes the archive in-process with `zipfile`."""

    compression = zipfile.ZIP_DEFLATED

    def _write(self, source_dir: Path, tmp_file: Path, dest_file: Path) -> int:
        count = 0
        # Pre-1980 mtimes are clamped to 1980-01-01, as `zip` does
        with zipfile.ZipFile(tmp_file, "w", self.compression, strict_timestamps=False) as zf:
            for file_path, arcname in iter_archive_entries(
                source_dir, exclude={tmp_file, dest_file}
            ):
                zf.write(file_path, arcname)
                logger.trace("Added {arcname}", arcname=arcname)
                count += 1
        return count

    async def create_archive(self, source_dir: Path, dest_file: Path) -> None:
        tmp_file = _temp_path(dest_file)
        try:
            count = await asyncio.to_thread(self._write, source_dir, tmp_file, dest_file)
            await aiofiles.os.replace(tmp_file, dest_file)
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            raise ArchiveError(str(e)) from e
        finally:
            await _discard(tmp_file)
        logger.debug("Wrote {count} entries to {dest}", count=count, dest=dest_file)


class CommandArchiver:
    """Shells out to the Info-ZIP `zip` executable."""

    def __init__(self, executable: str = "zip") -> None:
        self.executable = executable

    async def create_archive(self, source_dir: Path, dest_file: Path) -> None:
        tmp_file = _temp_path(dest_file)
        # -D: no directory entries, so the listing matches ZipArchiver
        args = ["-r", "-D", "-q", str(tmp_file), source_dir.name]
        if excluded := _excluded_arcnames(source_dir, tmp_file, dest_file):
            args += ["-x", *excluded]
        logger.debug("Executing: {cmd} {args}", cmd=self.executable, args=args)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                cwd=source_dir.parent,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ArchiveError(f"Archiver executable not found: {self.executable}") from e
        except OSError as e:
            raise ArchiveError(str(e)) from e

        try:
            _, stderr = await proc.communicate()
            if proc.returncode != 0:
                detail = stderr.decode(errors="replace").strip()
                raise ArchiveError(
                    f"{self.executable} exited with status {proc.returncode}"
                    + (f": {detail}" if detail else "")
                )
            await aiofiles.os.replace(tmp_file, dest_file)
        except OSError as e:
            raise ArchiveError(str(e)) from e
        finally:
            await _discard(tmp_file)


def get_archiver(kind: ArchiverKind = "builtin") -> Archiver:
    """Return the archiver for a configured kind."""
    match kind:
        case "builtin":
            return ZipArchiver()
        case "zip":
            return CommandArchiver()
