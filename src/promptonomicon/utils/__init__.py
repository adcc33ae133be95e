# ABOUTME: Utility modules for promptonomicon
# ABOUTME: Exports file writing and env helpers

from promptonomicon.utils.env import env_var_present, placeholder
from promptonomicon.utils.files import (
    atomic_write_bytes,
    ensure_directory,
    read_json_file,
    write_json_file,
    write_text_file,
)

__all__ = [
    "env_var_present",
    "placeholder",
    "atomic_write_bytes",
    "ensure_directory",
    "read_json_file",
    "write_json_file",
    "write_text_file",
]
