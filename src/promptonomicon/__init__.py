# promptonomicon - Documentation-driven development scaffolding for AI assistants
# ABOUTME: Version information
__version__ = "1.1.0"

# ABOUTME: Export core data models and errors
from promptonomicon.config import DIRECTORIES, TEMPLATE_FILES, Settings, load_settings
from promptonomicon.errors import (
    AlreadyInitializedError,
    ConfirmationRequiredError,
    FetchError,
    FilesystemPermissionError,
    MalformedConfigError,
    PromptonomiconError,
)
from promptonomicon.models import (
    ContentSource,
    DiagnosticFinding,
    DoctorReport,
    ScaffoldReport,
    ServerDescriptor,
)

# ABOUTME: Export the operations behind init, reset and doctor
from promptonomicon.doctor import run_doctor
from promptonomicon.gitignore import ensure_ignored
from promptonomicon.mcp import KNOWN_SERVERS, merge_mcp_servers
from promptonomicon.scaffold import initialize, reset
from promptonomicon.templates import TemplateSource

__all__ = [
    "__version__",
    "DIRECTORIES",
    "TEMPLATE_FILES",
    "Settings",
    "load_settings",
    "PromptonomiconError",
    "AlreadyInitializedError",
    "ConfirmationRequiredError",
    "FetchError",
    "FilesystemPermissionError",
    "MalformedConfigError",
    "ContentSource",
    "DiagnosticFinding",
    "DoctorReport",
    "ScaffoldReport",
    "ServerDescriptor",
    "run_doctor",
    "ensure_ignored",
    "KNOWN_SERVERS",
    "merge_mcp_servers",
    "initialize",
    "reset",
    "TemplateSource",
]
