# Idempotent .gitignore augmentation
import logging
from pathlib import Path

from promptonomicon.errors import FilesystemPermissionError
from promptonomicon.utils import write_text_file

logger = logging.getLogger(__name__)


def ensure_ignored(path: Path, marker: str, label: str) -> bool:
    """Append a labelled ignore rule unless the marker is already present.

    ABOUTME: Substring check anywhere in the file makes reruns a no-op
    ABOUTME: Existing lines are kept verbatim and in order; only trailing
    ABOUTME: whitespace is trimmed before the block is appended

    Args:
        path: Ignore file (may not exist)
        marker: Rule to add, e.g. ".scratch/"
        label: Comment line written above the rule

    Returns:
        True if the file was written, False if it already had the marker
    """
    try:
        content = path.read_text(encoding="utf-8") if path.exists() else ""
    except PermissionError as e:
        raise FilesystemPermissionError(path) from e

    if marker in content:
        logger.debug("%s already ignores %s", path, marker)
        return False

    block = f"# {label}\n{marker}\n"
    existing = content.rstrip()
    updated = f"{existing}\n\n{block}" if existing else block

    write_text_file(path, updated)
    return True
