# Diagnostics: compare a project against the canonical Promptonomicon layout
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from promptonomicon.config import (
    DIRECTORIES,
    DOCS_DIR,
    MARKER_DIR,
    MCP_MENTION_TEMPLATES,
    TEMPLATE_FILES,
    template_path,
)
from promptonomicon.errors import FetchError, FilesystemPermissionError, MalformedConfigError
from promptonomicon.integrations import INTEGRATION_FILES
from promptonomicon.mcp import CREDENTIAL_SERVERS, GENERIC_CONFIG, KNOWN_SERVERS, all_config_paths
from promptonomicon.models import ContentSource, DiagnosticFinding, DoctorReport
from promptonomicon.utils import env_var_present, read_json_file

logger = logging.getLogger(__name__)

# ABOUTME: Section titles, also used by the CLI renderer
SECTION_SETUP = "Setup"
SECTION_DIRECTORIES = "Checking directories:"
SECTION_TEMPLATES = "Checking template files:"
SECTION_UPDATES = "Checking for updates:"
SECTION_INTEGRATIONS = "AI assistant integration:"
SECTION_MCP = "MCP server configuration:"

MCP_SUGGESTION = (
    'Run "promptonomicon init --force --with-mcp-servers" to configure MCP servers'
)


def run_doctor(
    project_dir: Path,
    source: ContentSource,
    environ: Mapping[str, str] | None = None,
) -> DoctorReport:
    """Run every diagnostic check against a project.

    ABOUTME: Stops early only when uninitialized or a critical directory is gone
    ABOUTME: Otherwise always finishes the scan and accumulates findings
    ABOUTME: Findings keep declaration order: directories, templates, updates,
    ABOUTME: integrations, MCP configs - never sorted by severity

    Args:
        project_dir: Project root
        source: Canonical template content for the drift check
        environ: Environment for credential checks (defaults to os.environ)

    Returns:
        DoctorReport; report.exit_code is 1 iff an error was found
    """
    if environ is None:
        environ = os.environ

    report = DoctorReport()

    if not (project_dir / MARKER_DIR).is_dir():
        report.add(DiagnosticFinding(
            severity="error",
            subject=MARKER_DIR,
            kind="not_initialized",
            message="Promptonomicon is not initialized",
            section=SECTION_SETUP,
            hint='Run "promptonomicon init" to get started',
        ))
        return report

    if not (project_dir / DOCS_DIR).is_dir():
        report.add(DiagnosticFinding(
            severity="error",
            subject=DOCS_DIR,
            kind="missing",
            message=f"Critical directory {DOCS_DIR} is missing",
            section=SECTION_SETUP,
            hint='Run "promptonomicon init --force" to restore the layout',
        ))
        return report

    check_directories(project_dir, report)
    missing = check_templates(project_dir, report)
    if missing:
        report.add(DiagnosticFinding(
            severity="warning",
            subject=MARKER_DIR,
            kind="templates_missing",
            message="Some template files are missing",
            section=SECTION_UPDATES,
            hint='Run "promptonomicon reset --yes" to restore them',
        ))
    else:
        check_drift(project_dir, source, report)

    check_integrations(project_dir, report)
    if check_configs(project_dir, report):
        check_mentions(project_dir, report)
    check_credentials(project_dir, environ, report)

    return report


def check_directories(project_dir: Path, report: DoctorReport) -> None:
    for directory in DIRECTORIES:
        if (project_dir / directory).is_dir():
            report.add(DiagnosticFinding("info", directory, "present", directory, SECTION_DIRECTORIES))
        else:
            report.add(DiagnosticFinding(
                "error", directory, "missing", f"{directory} (missing)", SECTION_DIRECTORIES
            ))


def check_templates(project_dir: Path, report: DoctorReport) -> list[str]:
    """Record each template's presence and size.

    Returns:
        Identifiers of missing templates
    """
    missing: list[str] = []
    for identifier in TEMPLATE_FILES:
        path = template_path(project_dir, identifier)
        subject = f"{MARKER_DIR}/{identifier}"
        if path.is_file():
            size_kb = path.stat().st_size / 1024
            report.add(DiagnosticFinding(
                "info", subject, "present", f"{subject} ({size_kb:.1f} KB)", SECTION_TEMPLATES
            ))
        else:
            missing.append(identifier)
            report.add(DiagnosticFinding(
                "error", subject, "missing", f"{subject} (missing)", SECTION_TEMPLATES
            ))
    return missing


def check_drift(project_dir: Path, source: ContentSource, report: DoctorReport) -> None:
    """Compare local templates byte-for-byte with canonical content.

    ABOUTME: Untouched templates are a warning - the process expects customization
    ABOUTME: A fetch or read failure becomes a check_failed warning, not an abort
    """
    customized: list[str] = []
    try:
        for identifier in TEMPLATE_FILES:
            canonical = source.fetch(identifier).encode("utf-8")
            local = template_path(project_dir, identifier).read_bytes()
            if local != canonical:
                customized.append(identifier)
    except (FetchError, OSError) as e:
        logger.debug("Drift check failed: %s", e)
        report.add(DiagnosticFinding(
            "warning", MARKER_DIR, "check_failed",
            f"Could not check for updates: {e}", SECTION_UPDATES,
        ))
        return

    if customized:
        report.add(DiagnosticFinding(
            "info", MARKER_DIR, "customized",
            "Templates have been customized", SECTION_UPDATES,
            hint='Run "promptonomicon reset" if you want to update to latest',
        ))
    else:
        report.add(DiagnosticFinding(
            "warning", MARKER_DIR, "matches_latest",
            "Templates match latest version exactly", SECTION_UPDATES,
            hint="You haven't customized your templates yet! Edit them for your project.",
        ))


def check_integrations(project_dir: Path, report: DoctorReport) -> None:
    found = False
    for integration in INTEGRATION_FILES:
        if integration.path(project_dir).is_file():
            found = True
            report.add(DiagnosticFinding(
                "info", integration.relative_path, "integration_present",
                integration.label, SECTION_INTEGRATIONS,
            ))
    if not found:
        report.add(DiagnosticFinding(
            "info", "", "integration_absent",
            "No AI assistant integration files found", SECTION_INTEGRATIONS,
            hint='Run "promptonomicon reset --yes" to create them',
        ))


def check_configs(project_dir: Path, report: DoctorReport) -> bool:
    """Record which MCP config files exist.

    Returns:
        True if at least one config file is present
    """
    found = False
    for label, path in all_config_paths(project_dir):
        if path.is_file():
            found = True
            subject = path.relative_to(project_dir).as_posix()
            report.add(DiagnosticFinding(
                "info", subject, "config_present", f"{label} ({subject})", SECTION_MCP
            ))
    if not found:
        report.add(DiagnosticFinding(
            "info", "", "config_absent", "No MCP server configuration found",
            SECTION_MCP, hint=MCP_SUGGESTION,
        ))
    return found


def check_mentions(project_dir: Path, report: DoctorReport) -> None:
    """Warn when a planning template never mentions a known MCP server.

    ABOUTME: Case-insensitive substring match on server names
    ABOUTME: A missing template is skipped - the template check already reported it
    """
    tokens = [name.lower() for name in KNOWN_SERVERS]
    for identifier in MCP_MENTION_TEMPLATES:
        path = template_path(project_dir, identifier)
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace").lower()
        except OSError as e:
            report.add(DiagnosticFinding(
                "warning", f"{MARKER_DIR}/{identifier}", "check_failed",
                f"Could not read {identifier}: {e}", SECTION_MCP,
            ))
            continue
        if not any(token in text for token in tokens):
            report.add(DiagnosticFinding(
                "warning", f"{MARKER_DIR}/{identifier}", "mention_absent",
                f"{identifier} doesn't mention MCP servers", SECTION_MCP,
                hint=f"Mention {' or '.join(KNOWN_SERVERS)} so your assistant uses them",
            ))


def check_credentials(
    project_dir: Path,
    environ: Mapping[str, str],
    report: DoctorReport,
) -> None:
    """Warn when a configured server's credential variable is unset."""
    path = project_dir / GENERIC_CONFIG
    try:
        document = read_json_file(path)
    except (MalformedConfigError, FilesystemPermissionError) as e:
        report.add(DiagnosticFinding(
            "warning", GENERIC_CONFIG, "check_failed", str(e), SECTION_MCP,
        ))
        return
    if document is None:
        return

    servers = document.get("mcpServers")
    if not isinstance(servers, dict):
        return

    for name, var_name in CREDENTIAL_SERVERS.items():
        if name in servers and not env_var_present(var_name, environ):
            report.add(DiagnosticFinding(
                "warning", var_name, "env_key_absent",
                f"{name} is configured but {var_name} environment variable is not set",
                SECTION_MCP,
                hint=f"export {var_name}=<your key>",
            ))
