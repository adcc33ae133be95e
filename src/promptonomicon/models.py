# Core data models for promptonomicon
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

Severity = Literal["error", "warning", "info"]

FindingKind = Literal[
    "not_initialized",
    "present",
    "missing",
    "templates_missing",
    "customized",
    "matches_latest",
    "integration_present",
    "integration_absent",
    "config_present",
    "config_absent",
    "mention_absent",
    "env_key_absent",
    "check_failed",
]


@dataclass(frozen=True)
class ServerDescriptor:
    """Immutable MCP server entry as written under mcpServers.

    ABOUTME: Identity is the name it is stored under, not a field here
    ABOUTME: env values are placeholder tokens like ${VAR}, never resolved secrets
    """
    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape used in mcp.json files.

        ABOUTME: Omits empty env and missing description for cleaner output
        """
        result: dict[str, Any] = {
            "command": self.command,
            "args": list(self.args),
        }
        if self.env:
            result["env"] = dict(self.env)
        if self.description:
            result["description"] = self.description
        return result


@dataclass(frozen=True)
class DiagnosticFinding:
    """One observation made by the doctor.

    ABOUTME: Findings are data, not exceptions; only errors fail the run
    ABOUTME: section groups findings for display, hint is an optional follow-up line
    """
    severity: Severity
    subject: str
    kind: FindingKind
    message: str
    section: str
    hint: str | None = None


@dataclass
class DoctorReport:
    """Ordered findings from one doctor pass."""
    findings: list[DiagnosticFinding] = field(default_factory=list)

    def add(self, finding: DiagnosticFinding) -> None:
        self.findings.append(finding)

    @property
    def errors(self) -> list[DiagnosticFinding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def warnings(self) -> list[DiagnosticFinding]:
        return [f for f in self.findings if f.severity == "warning"]

    @property
    def status(self) -> Literal["failed", "warnings", "ok"]:
        """Summarize: any error fails, otherwise warnings downgrade success."""
        if self.errors:
            return "failed"
        if self.warnings:
            return "warnings"
        return "ok"

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0


@dataclass
class ScaffoldReport:
    """What init or reset wrote.

    ABOUTME: Lists are (label, path) pairs in the order they were written
    """
    directories: list[Path] = field(default_factory=list)
    templates: list[Path] = field(default_factory=list)
    integrations: list[tuple[str, Path]] = field(default_factory=list)
    mcp_targets: list[tuple[str, Path]] = field(default_factory=list)
    gitignore_updated: bool = False


@runtime_checkable
class ContentSource(Protocol):
    """Resolves a template identifier to its canonical text.

    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    def fetch(self, identifier: str) -> str:
        """Return canonical content or raise FetchError."""
        ...
