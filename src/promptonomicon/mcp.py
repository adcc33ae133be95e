# MCP server configuration: known servers, merging and selection
import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from promptonomicon.errors import MalformedConfigError
from promptonomicon.models import ServerDescriptor
from promptonomicon.utils import placeholder, read_json_file, write_json_file

logger = logging.getLogger(__name__)

# ABOUTME: Servers promptonomicon knows how to configure, in prompt order
KNOWN_SERVERS: Mapping[str, ServerDescriptor] = {
    "versionator": ServerDescriptor(
        command="npx",
        args=("-y", "@versionator/mcp-server"),
        description="Looks up the latest released versions of packages",
    ),
    "context7": ServerDescriptor(
        command="npx",
        args=("-y", "@context7/mcp-server"),
        env={"CONTEXT7_API_KEY": placeholder("CONTEXT7_API_KEY")},
        description="Fetches current library documentation",
    ),
}

# ABOUTME: Server selected by --with-mcp-servers --yes without a list
DEFAULT_SERVER = "versionator"

# ABOUTME: Servers that need a credential, mapped to the env var holding it
CREDENTIAL_SERVERS: Mapping[str, str] = {
    "context7": "CONTEXT7_API_KEY",
}

GENERIC_CONFIG = ".mcp.json"

# ABOUTME: (label, tool directory) for tool-specific project configs
TOOL_CONFIG_DIRS: tuple[tuple[str, str], ...] = (
    ("Cursor", ".cursor"),
    ("VS Code", ".vscode"),
    ("Windsurf", ".windsurf"),
    ("Roo Code", ".roo"),
)

# ABOUTME: Prompt callable: (available names) -> (selected names, credential confirmations)
SelectionPrompt = Callable[[list[str]], tuple[list[str], dict[str, bool]]]


def read_config_document(path: Path) -> dict[str, Any]:
    """Load an MCP config document, defaulting to an empty one.

    ABOUTME: Missing file yields {"mcpServers": {}}
    ABOUTME: Invalid JSON raises MalformedConfigError; nothing is recovered
    ABOUTME: So does an mcpServers value that is not an object
    """
    data = read_json_file(path)
    if data is None:
        return {"mcpServers": {}}
    if "mcpServers" in data and not isinstance(data["mcpServers"], dict):
        raise MalformedConfigError(path, "mcpServers must be an object")
    return data


def merge_documents(
    existing: Mapping[str, Any],
    incoming: Mapping[str, ServerDescriptor],
) -> dict[str, Any]:
    """Merge incoming servers into a config document without touching anything else.

    ABOUTME: Top-level keys are copied as-is; only mcpServers is rebuilt
    ABOUTME: Incoming descriptors overwrite same-named entries wholesale
    ABOUTME: Returns new dict (doesn't mutate inputs)

    Examples:
        >>> doc = {"theme": "dark", "mcpServers": {"x": {"command": "x"}}}
        >>> merged = merge_documents(doc, {"y": ServerDescriptor(command="npx")})
        >>> sorted(merged["mcpServers"])
        ['x', 'y']
        >>> merged["theme"]
        'dark'
    """
    result: dict[str, Any] = dict(existing)

    current = existing.get("mcpServers")
    servers: dict[str, Any] = dict(current) if isinstance(current, Mapping) else {}

    for name, descriptor in incoming.items():
        servers[name] = descriptor.to_dict()

    result["mcpServers"] = servers
    return result


def merge_mcp_servers(path: Path, incoming: Mapping[str, ServerDescriptor]) -> dict[str, Any]:
    """Merge servers into the config file at path and write it back.

    ABOUTME: Read-modify-write of the whole file; the write is atomic
    ABOUTME: Creates parent directories if needed
    ABOUTME: No locking - one invocation per project root at a time

    Args:
        path: Config file (may not exist yet)
        incoming: Server name -> descriptor

    Returns:
        The document that was written

    Raises:
        MalformedConfigError: If the existing file is not a JSON object
        FilesystemPermissionError: If the file cannot be written
    """
    existing = read_config_document(path)
    merged = merge_documents(existing, incoming)
    write_json_file(path, merged)
    return merged


def mcp_targets(project_dir: Path) -> list[tuple[str, Path]]:
    """List config files to write for a project.

    ABOUTME: Generic .mcp.json always; tool configs only if the tool dir exists
    """
    targets = [(f"Generic ({GENERIC_CONFIG})", project_dir / GENERIC_CONFIG)]
    for label, tool_dir in TOOL_CONFIG_DIRS:
        if (project_dir / tool_dir).is_dir():
            targets.append((f"{label} ({tool_dir}/mcp.json)", project_dir / tool_dir / "mcp.json"))
    return targets


def all_config_paths(project_dir: Path) -> list[tuple[str, Path]]:
    """Every config location the doctor looks at, whether or not it exists."""
    paths = [("Generic MCP config", project_dir / GENERIC_CONFIG)]
    for label, tool_dir in TOOL_CONFIG_DIRS:
        paths.append((f"{label} MCP config", project_dir / tool_dir / "mcp.json"))
    return paths


def resolve_servers(names: Iterable[str]) -> dict[str, ServerDescriptor]:
    """Map known server names to descriptors, preserving order."""
    return {name: KNOWN_SERVERS[name] for name in names if name in KNOWN_SERVERS}


def configure_mcp_servers(project_dir: Path, names: Iterable[str]) -> list[tuple[str, Path]]:
    """Merge the selected servers into every applicable config file.

    ABOUTME: Each target is merged independently; no cross-target rollback
    ABOUTME: A failure stops at that target, earlier targets stay written

    Returns:
        (label, path) for each file written, in order
    """
    incoming = resolve_servers(names)
    written: list[tuple[str, Path]] = []
    for label, path in mcp_targets(project_dir):
        merge_mcp_servers(path, incoming)
        logger.debug("Merged %d server(s) into %s", len(incoming), path)
        written.append((label, path))
    return written


def parse_server_list(text: str) -> list[str]:
    """Parse a comma-separated server list.

    ABOUTME: Trims whitespace, drops empty and unknown names silently
    ABOUTME: Duplicates keep their first position

    Examples:
        >>> parse_server_list("versionator, nope ,context7")
        ['versionator', 'context7']
        >>> parse_server_list("")
        []
    """
    selected: list[str] = []
    for raw in text.split(","):
        name = raw.strip()
        if not name:
            continue
        if name not in KNOWN_SERVERS:
            logger.debug("Ignoring unknown MCP server '%s'", name)
            continue
        if name not in selected:
            selected.append(name)
    return selected


def apply_credential_decision(
    selection: Iterable[str],
    confirmations: Mapping[str, bool],
) -> list[str]:
    """Drop credential-requiring servers whose confirmation was declined.

    ABOUTME: Pure function, independent of how the answers were collected
    ABOUTME: A server with no recorded answer is kept

    Examples:
        >>> apply_credential_decision(["versionator", "context7"], {"context7": False})
        ['versionator']
    """
    return [
        name for name in selection
        if name not in CREDENTIAL_SERVERS or confirmations.get(name, True)
    ]


def select_servers(
    option: str | bool | None,
    assume_yes: bool,
    prompt: SelectionPrompt | None = None,
) -> list[str] | None:
    """Decide which servers to configure from the --with-mcp-servers option.

    ABOUTME: None (flag absent) means no MCP step at all
    ABOUTME: An explicit list wins; --yes falls back to DEFAULT_SERVER
    ABOUTME: Otherwise asks the prompt, then applies the credential rule

    Args:
        option: None if absent, True for a bare flag, or the list text
        assume_yes: Unattended mode (--yes)
        prompt: Interactive selection, required for bare flag without --yes

    Returns:
        Server names to configure, or None to skip MCP configuration
    """
    if option is None or option is False:
        return None
    if isinstance(option, str):
        return parse_server_list(option)
    if assume_yes:
        return [DEFAULT_SERVER]
    if prompt is None:
        raise ValueError("Interactive server selection requires a prompt")

    selection, confirmations = prompt(list(KNOWN_SERVERS))
    selection = [name for name in selection if name in KNOWN_SERVERS]
    return apply_credential_decision(selection, confirmations)
