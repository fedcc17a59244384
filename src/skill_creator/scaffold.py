"""Scaffolding of new skills from templates."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from skill_creator.constant import SKILL_MD
from skill_creator.exception import ScaffoldError
from skill_creator.validator import check_skill_name

SKILL_TEMPLATE = """\
---
name: {skill_name}
description: "TODO: Complete and informative explanation of what the skill does and when to use it. Include WHEN to use this skill - specific scenarios, file types, or tasks that trigger it."
---

# {skill_title}

## Overview

[TODO: 1-2 sentences explaining what this skill enables]

## Structuring This Skill

[TODO: Choose the structure that best fits this skill's purpose. Common patterns:

**1. Workflow-Based** (best for sequential processes)
- Works well when there are clear step-by-step procedures
- Structure: ## Overview -> ## Workflow Decision Tree -> ## Step 1 -> ## Step 2...

**2. Task-Based** (best for tool collections)
- Works well when the skill offers different operations/capabilities
- Structure: ## Overview -> ## Quick Start -> ## Task Category 1 -> ## Task Category 2...

**3. Reference/Guidelines** (best for standards or specifications)
- Works well for brand guidelines, coding standards, or requirements
- Structure: ## Overview -> ## Guidelines -> ## Specifications -> ## Usage...

**4. Capabilities-Based** (best for integrated systems)
- Works well when the skill provides multiple interrelated features
- Structure: ## Overview -> ## Core Capabilities -> ### 1. Feature -> ### 2. Feature...

Patterns can be mixed and matched as needed.

Delete this entire "Structuring This Skill" section when done - it's just guidance.]

## [TODO: Replace with the first main section based on chosen structure]

[TODO: Add content here: code samples, decision trees, concrete examples with
realistic user requests, and references to scripts/references/assets as needed.]

## Resources

### scripts/
Executable code that can be run directly to perform specific operations.
Scripts may be executed without loading into context.

### references/
Documentation intended to be loaded into context to inform the agent's process
and thinking: API references, schemas, detailed workflow guides.

### assets/
Files not intended to be loaded into context, but used within the output the
agent produces: templates, images, fonts, boilerplate code.

---

**Any unneeded directories can be deleted.** Not every skill requires all three types of resources.
"""

EXAMPLE_SCRIPT = '''\
#!/usr/bin/env python3
"""
Example helper script for {skill_name}

This is a placeholder script that can be executed directly.
Replace with actual implementation or delete if not needed.
"""


def main():
    print("This is an example script for {skill_name}")
    # TODO: Add actual script logic here


if __name__ == "__main__":
    main()
'''

EXAMPLE_REFERENCE = """\
# Reference Documentation for {skill_title}

This is a placeholder for detailed reference documentation.
Replace with actual reference content or delete if not needed.

## When Reference Docs Are Useful

Reference docs are ideal for:
- Comprehensive API documentation
- Detailed workflow guides
- Complex multi-step processes
- Information too lengthy for main SKILL.md
- Content that's only needed for specific use cases
"""

EXAMPLE_ASSET = """\
# Example Asset File

This placeholder represents where asset files would be stored.
Replace with actual asset files (templates, images, fonts, etc.) or delete if not needed.

Asset files are NOT intended to be loaded into context, but rather used within
the output the agent produces.
"""


def title_case_skill_name(skill_name: str) -> str:
    """Convert a hyphen-case skill name to a title, e.g. `pdf-tools` -> `Pdf Tools`."""
    return " ".join(word[:1].upper() + word[1:] for word in skill_name.split("-"))


async def _write_text(path: Path, content: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(content)
    logger.debug("Created {path}", path=path)


async def init_skill(skill_name: str, path: Path | str) -> Path:
    """
    Create a new skill directory populated with template files.

    Args:
        skill_name: Hyphen-case skill name, also used as the directory name.
        path: Parent directory for the new skill.

    Returns:
        Absolute path of the created skill directory.

    Raises:
        ScaffoldError: If the name is invalid, the directory exists, or a write fails.
    """
    if error := check_skill_name(skill_name):
        raise ScaffoldError(error)

    skill_dir = Path(path).expanduser().absolute() / skill_name
    if await aiofiles.os.path.exists(skill_dir):
        raise ScaffoldError(f"Skill directory already exists: {skill_dir}")

    skill_title = title_case_skill_name(skill_name)
    files = {
        SKILL_MD: SKILL_TEMPLATE.format(skill_name=skill_name, skill_title=skill_title),
        "scripts/example.py": EXAMPLE_SCRIPT.format(skill_name=skill_name),
        "references/api_reference.md": EXAMPLE_REFERENCE.format(skill_title=skill_title),
        "assets/example_asset.txt": EXAMPLE_ASSET,
    }

    try:
        await aiofiles.os.makedirs(skill_dir)
        for relative, content in files.items():
            target = skill_dir / relative
            await aiofiles.os.makedirs(target.parent, exist_ok=True)
            await _write_text(target, content)
        await asyncio.to_thread(os.chmod, skill_dir / "scripts" / "example.py", 0o755)
    except OSError as e:
        raise ScaffoldError(f"Error initializing skill: {e}") from e

    logger.info("Initialized skill {name} at {path}", name=skill_name, path=skill_dir)
    return skill_dir
