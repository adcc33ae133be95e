# AI assistant integration files
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from promptonomicon.utils import ensure_directory, write_text_file

_PHASES = """\
1. Design - `.promptonomicon/1_BUILD_DESIGN.md`
2. Review - the human approves the design
3. Plan - `.promptonomicon/3_BUILD_PLAN.md`
4. Process - `.promptonomicon/4_DEVELOPMENT_PROCESS.md`
5. Implement - `.promptonomicon/5_BUILD_IMPLEMENTATION.md`
6. Document - `.promptonomicon/6_DOCUMENTATION_UPDATE.md`
"""

CLAUDE_CONTENT = f"""\
# Promptonomicon Framework Instructions

This project uses Promptonomicon: Documentation-driven development with AI.
Read `.promptonomicon/PROMPTONOMICON.md` before starting any feature.

## Six-Phase Process

{_PHASES}
## Rules

- Never skip a phase; wait for approval between phases.
- Design, plan and implementation logs live in `ai-docs/`.
- Temporary work goes in `.scratch/` (git-ignored).
"""

CURSOR_CONTENT = f"""\
---
alwaysApply: true
---
# Promptonomicon Framework

Follow the Promptonomicon process in `.promptonomicon/PROMPTONOMICON.md`.

## Process Overview

{_PHASES}
Keep scratch work in `.scratch/` and write all documents under `ai-docs/`.
"""

VSCODE_CONTENT = f"""\
# Promptonomicon Configuration for VS Code

When assisting in this workspace, follow the six phases described in
`.promptonomicon/PROMPTONOMICON.md`:

{_PHASES}
Ask for approval before moving from one phase to the next.
"""

WINDSURF_CONTENT = f"""\
# Promptonomicon Framework - Windsurf Configuration

Follow `.promptonomicon/PROMPTONOMICON.md` for every feature.

## Process Phases

{_PHASES}
Documents go in `ai-docs/`; experiments go in `.scratch/`.
"""

# ABOUTME: Setting this env var means Cursor is the editor even without .cursor/
CURSOR_ENV_VAR = "CURSOR_EDITOR"


@dataclass(frozen=True)
class Integration:
    """One assistant integration file.

    ABOUTME: tool_dir None means the file is always written
    ABOUTME: location overrides the path shown in labels
    """
    name: str
    relative_path: str
    content: str
    tool_dir: str | None = None
    location: str | None = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.location or self.relative_path})"

    def path(self, project_dir: Path) -> Path:
        return project_dir / self.relative_path

    def applies_to(self, project_dir: Path, environ: Mapping[str, str]) -> bool:
        if self.tool_dir is None:
            return True
        if (project_dir / self.tool_dir).is_dir():
            return True
        return self.tool_dir == ".cursor" and CURSOR_ENV_VAR in environ


# ABOUTME: Fixed order shared by init output and doctor checks
INTEGRATION_FILES: tuple[Integration, ...] = (
    Integration("Claude", "CLAUDE.md", CLAUDE_CONTENT, location="CLAUDE.md in project root"),
    Integration("Cursor", ".cursor/rules/promptonomicon.mdc", CURSOR_CONTENT, ".cursor"),
    Integration("VS Code", ".vscode/promptonomicon.md", VSCODE_CONTENT, ".vscode"),
    Integration("Windsurf", ".windsurf/rules.md", WINDSURF_CONTENT, ".windsurf"),
)


def place_integrations(
    project_dir: Path,
    environ: Mapping[str, str] | None = None,
) -> list[tuple[str, Path]]:
    """Write integration files for the assistants present in the project.

    ABOUTME: CLAUDE.md is unconditional; others need their tool directory
    ABOUTME: Overwrites existing integration files

    Returns:
        (label, path) for each file written
    """
    if environ is None:
        environ = os.environ

    written: list[tuple[str, Path]] = []
    for integration in INTEGRATION_FILES:
        if not integration.applies_to(project_dir, environ):
            continue
        target = integration.path(project_dir)
        ensure_directory(target.parent)
        write_text_file(target, integration.content)
        written.append((integration.label, target))
    return written
