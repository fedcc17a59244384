from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from skill_creator.share import _resolve_share_dir

VALID_SKILL_MD = """\
---
name: my-skill
description: "Does X"
---

# My Skill

Instructions here.
"""


@pytest.fixture(autouse=True)
def share_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    share = tmp_path / "share"
    monkeypatch.setenv("SKILL_CREATOR_SHARE_DIR", str(share))
    monkeypatch.delenv("SKILL_CREATOR_ARCHIVER", raising=False)
    _resolve_share_dir.cache_clear()
    yield share
    _resolve_share_dir.cache_clear()


MakeSkill = Callable[..., Path]


@pytest.fixture
def make_skill(tmp_path: Path) -> MakeSkill:
    """Create a skill directory under `tmp_path/skills` with the given SKILL.md content."""

    def _make(
        content: str | None = VALID_SKILL_MD,
        *,
        name: str = "my-skill",
        files: dict[str, str] | None = None,
    ) -> Path:
        skill_dir = tmp_path / "skills" / name
        skill_dir.mkdir(parents=True)
        if content is not None:
            (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
        for relative, text in (files or {}).items():
            target = skill_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return skill_dir

    return _make
