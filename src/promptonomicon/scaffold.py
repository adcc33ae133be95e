# Project scaffolding: init and reset
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from promptonomicon.config import (
    DIRECTORIES,
    GITIGNORE_FILE,
    GITIGNORE_LABEL,
    GITIGNORE_MARKER,
    MARKER_DIR,
    SCRATCH_DIR,
    TEMPLATE_FILES,
    template_path,
)
from promptonomicon.errors import AlreadyInitializedError, ConfirmationRequiredError
from promptonomicon.gitignore import ensure_ignored
from promptonomicon.integrations import place_integrations
from promptonomicon.mcp import configure_mcp_servers
from promptonomicon.models import ContentSource, ScaffoldReport
from promptonomicon.utils import ensure_directory, write_text_file

logger = logging.getLogger(__name__)

SCRATCH_README = """\
# .scratch Directory

This directory is for temporary work and experiments. Everything here is git-ignored.

## Purpose
- Temporary scripts and experiments
- Work-in-progress documentation
- Test files and playground code

## Key Files
- `todo.md` - Track your progress through the 6 phases

## Note
Nothing in this directory will be committed to git (except this README).
"""


def is_initialized(project_dir: Path) -> bool:
    return (project_dir / MARKER_DIR).exists()


def initialize(
    project_dir: Path,
    source: ContentSource,
    force: bool = False,
    servers: Iterable[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ScaffoldReport:
    """Create the Promptonomicon layout in project_dir.

    ABOUTME: Refuses before touching disk if already initialized and not forced
    ABOUTME: Template fetches are sequential; the first failure propagates
    ABOUTME: Files written before a failure stay on disk (no rollback)

    Args:
        project_dir: Project root
        source: Where template content comes from
        force: Overwrite an existing installation
        servers: MCP server names to merge, or None to skip MCP configuration
        environ: Environment used for editor detection (defaults to os.environ)

    Returns:
        ScaffoldReport describing everything written

    Raises:
        AlreadyInitializedError: If initialized and force is False
        FetchError: If a template cannot be fetched
        MalformedConfigError: If an existing MCP config is not valid JSON
        FilesystemPermissionError: If a write is refused
    """
    if not force and is_initialized(project_dir):
        raise AlreadyInitializedError(project_dir / MARKER_DIR)

    return _scaffold(project_dir, source, servers, environ)


def reset(
    project_dir: Path,
    source: ContentSource,
    confirmed: bool,
    servers: Iterable[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ScaffoldReport:
    """Restore stock templates and integrations, overwriting customizations.

    ABOUTME: Same steps as a forced initialize, gated on explicit confirmation

    Raises:
        ConfirmationRequiredError: If confirmed is False (nothing is written)
    """
    if not confirmed:
        raise ConfirmationRequiredError()

    return _scaffold(project_dir, source, servers, environ)


def _scaffold(
    project_dir: Path,
    source: ContentSource,
    servers: Iterable[str] | None,
    environ: Mapping[str, str] | None,
) -> ScaffoldReport:
    if environ is None:
        environ = os.environ

    report = ScaffoldReport()

    for directory in DIRECTORIES:
        path = project_dir / directory
        ensure_directory(path)
        report.directories.append(path)

    for identifier in TEMPLATE_FILES:
        content = source.fetch(identifier)
        target = template_path(project_dir, identifier)
        write_text_file(target, content)
        logger.debug("Wrote template %s", target)
        report.templates.append(target)

    write_text_file(project_dir / SCRATCH_DIR / "README.md", SCRATCH_README)

    report.gitignore_updated = ensure_ignored(
        project_dir / GITIGNORE_FILE, GITIGNORE_MARKER, GITIGNORE_LABEL
    )

    report.integrations = place_integrations(project_dir, environ)

    if servers is not None:
        report.mcp_targets = configure_mcp_servers(project_dir, servers)

    return report
