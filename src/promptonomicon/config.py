# Static layout tables and user settings for promptonomicon
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli

# ABOUTME: Directory whose presence marks an initialized project
MARKER_DIR = ".promptonomicon"

# ABOUTME: Top-level documentation directory (critical for doctor)
DOCS_DIR = "ai-docs"

SCRATCH_DIR = ".scratch"

# ABOUTME: Directories created by init, in declaration order
DIRECTORIES: tuple[str, ...] = (
    MARKER_DIR,
    DOCS_DIR,
    "ai-docs/ai-design",
    "ai-docs/ai-plans",
    "ai-docs/ai-implementation",
    "ai-docs/features",
    SCRATCH_DIR,
)

# ABOUTME: Template identifiers, each stored as .promptonomicon/<id>
TEMPLATE_FILES: tuple[str, ...] = (
    "1_BUILD_DESIGN.md",
    "3_BUILD_PLAN.md",
    "4_DEVELOPMENT_PROCESS.md",
    "5_BUILD_IMPLEMENTATION.md",
    "6_DOCUMENTATION_UPDATE.md",
    "PROMPTONOMICON.md",
    "README.md",
)

# ABOUTME: Templates expected to tell the assistant about configured MCP servers
MCP_MENTION_TEMPLATES: tuple[str, ...] = (
    "3_BUILD_PLAN.md",
    "4_DEVELOPMENT_PROCESS.md",
)

GITIGNORE_FILE = ".gitignore"
GITIGNORE_MARKER = ".scratch/"
GITIGNORE_LABEL = "Promptonomicon scratch directory"

# ABOUTME: Remote template source defaults (raw GitHub content)
DEFAULT_OWNER = "trianglegrrl"
DEFAULT_REPO = "promptonomicon"
DEFAULT_BRANCH = "main"
DEFAULT_TIMEOUT = 10  # seconds

# ABOUTME: Default user settings location
CONFIG_DIR = Path.home() / ".promptonomicon"
CONFIG_FILE = CONFIG_DIR / "config.toml"

CONFIG_ENV_VAR = "PROMPTONOMICON_CONFIG"
OFFLINE_ENV_VAR = "PROMPTONOMICON_OFFLINE"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Where templates come from and how long to wait for them.

    ABOUTME: Loaded once per invocation, never mutated
    """
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    timeout: float = DEFAULT_TIMEOUT
    offline: bool = False

    @property
    def base_url(self) -> str:
        return (
            f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/"
            f"{self.branch}/{MARKER_DIR}"
        )


def template_path(project_dir: Path, identifier: str) -> Path:
    """Return the local path of a template inside a project."""
    return project_dir / MARKER_DIR / identifier


def get_config_path() -> Path:
    """Return the path to the user settings file.

    ABOUTME: Honors PROMPTONOMICON_CONFIG, otherwise ~/.promptonomicon/config.toml
    ABOUTME: File may not exist - load_settings() falls back to defaults
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def load_settings(path: Path | None = None) -> Settings:
    """Load template source settings from TOML.

    ABOUTME: Missing file means built-in defaults
    ABOUTME: Only the optional [source] table is read
    ABOUTME: PROMPTONOMICON_OFFLINE in the environment forces offline mode

    Args:
        path: Settings file, defaults to get_config_path()

    Returns:
        Parsed Settings

    Raises:
        ValueError: If the TOML is invalid or a value has the wrong type
    """
    if path is None:
        path = get_config_path()

    data: dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

    source = data.get("source", {})
    if not isinstance(source, dict):
        raise ValueError(f"'source' in {path} must be a table")

    values: dict[str, Any] = {}
    for key in ("owner", "repo", "branch"):
        if key in source:
            if not isinstance(source[key], str) or not source[key]:
                raise ValueError(f"'source.{key}' in {path} must be a non-empty string")
            values[key] = source[key]

    if "timeout" in source:
        timeout = source["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError(f"'source.timeout' in {path} must be a positive number")
        values["timeout"] = float(timeout)

    if "offline" in source:
        if not isinstance(source["offline"], bool):
            raise ValueError(f"'source.offline' in {path} must be true or false")
        values["offline"] = source["offline"]

    if os.environ.get(OFFLINE_ENV_VAR, "").strip().lower() in _TRUTHY:
        values["offline"] = True

    return Settings(**values)
