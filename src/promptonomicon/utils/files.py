# File helpers shared by the scaffold, merger and gitignore code
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from promptonomicon.errors import FilesystemPermissionError, MalformedConfigError

logger = logging.getLogger(__name__)


def read_json_file(path: Path) -> dict[str, Any] | None:
    """Read a JSON object from disk.

    ABOUTME: Returns None if the file doesn't exist
    ABOUTME: Raises MalformedConfigError for invalid JSON or a non-object document
    """
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            result = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedConfigError(path, str(e)) from e
    except PermissionError as e:
        raise FilesystemPermissionError(path) from e

    if not isinstance(result, dict):
        raise MalformedConfigError(path, "top-level value must be an object")
    return result


def atomic_write_bytes(path: Path, payload: bytes) -> None:
    """Replace path with payload in one step.

    ABOUTME: Writes a temp file beside the target, then os.replace()
    ABOUTME: Creates parent directories if needed
    ABOUTME: PermissionError surfaces as FilesystemPermissionError
    """
    temp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=str(path.parent),
            prefix=path.name + ".",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(temp_path, path)
        temp_path = None
    except PermissionError as e:
        raise FilesystemPermissionError(path) from e
    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()

    logger.debug("Wrote %s (%d bytes)", path, len(payload))


def write_text_file(path: Path, content: str) -> None:
    """Write UTF-8 text exactly as given (no newline translation)."""
    atomic_write_bytes(path, content.encode("utf-8"))


def write_json_file(path: Path, data: dict[str, Any]) -> None:
    """Write JSON with 2-space indentation and a trailing newline.

    ABOUTME: Keeps key insertion order so untouched keys stay where they were
    """
    write_text_file(path, json.dumps(data, indent=2) + "\n")


def ensure_directory(path: Path) -> None:
    """Create a directory and its parents, mapping permission failures."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        raise FilesystemPermissionError(path) from e
