# Exception types for promptonomicon
from pathlib import Path


class PromptonomiconError(Exception):
    """Base class for failures that abort a command.

    ABOUTME: Caught at the CLI boundary and turned into exit code 1
    """


class AlreadyInitializedError(PromptonomiconError):
    """Raised by init when the marker directory exists and --force is absent."""

    def __init__(self, marker: Path) -> None:
        self.marker = marker
        super().__init__(
            f"Promptonomicon already initialized ({marker}). Use --force to overwrite."
        )


class ConfirmationRequiredError(PromptonomiconError):
    """Raised by reset when the caller did not confirm the overwrite."""

    def __init__(self) -> None:
        super().__init__("Reset overwrites all template customizations; pass --yes to confirm.")


class FetchError(PromptonomiconError):
    """Template content could not be resolved.

    ABOUTME: Embeds the template identifier in the message
    ABOUTME: Keeps the underlying cause for callers that want it
    """

    def __init__(self, identifier: str, cause: BaseException | str) -> None:
        self.identifier = identifier
        self.cause = cause
        super().__init__(f"Failed to fetch {identifier}: {cause}")


class MalformedConfigError(PromptonomiconError):
    """An existing MCP config file is not a JSON object."""

    def __init__(self, path: Path, detail: str = "") -> None:
        self.path = path
        message = f"Invalid JSON in {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class FilesystemPermissionError(PromptonomiconError):
    """Writing under the project root was refused by the OS."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Permission denied: {path}")
