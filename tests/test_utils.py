# Tests for file and environment helpers
import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from promptonomicon.errors import FilesystemPermissionError, MalformedConfigError
from promptonomicon.utils import (
    atomic_write_bytes,
    env_var_present,
    placeholder,
    read_json_file,
    write_json_file,
)


def test_placeholder():
    assert placeholder("CONTEXT7_API_KEY") == "${CONTEXT7_API_KEY}"


def test_env_var_present_ignores_value():
    """Test that an empty value still counts as set."""
    assert env_var_present("KEY", {"KEY": ""}) is True
    assert env_var_present("KEY", {}) is False


def test_read_json_missing(tmp_path: Path):
    assert read_json_file(tmp_path / "absent.json") is None


def test_read_json_invalid(tmp_path: Path):
    """Test that invalid JSON raises MalformedConfigError naming the file."""
    path = tmp_path / "bad.json"
    path.write_text("{ invalid json")

    with pytest.raises(MalformedConfigError, match="bad.json"):
        read_json_file(path)


def test_read_json_non_object(tmp_path: Path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")

    with pytest.raises(MalformedConfigError, match="object"):
        read_json_file(path)


def test_write_json_format(tmp_path: Path):
    """Test 2-space indentation, trailing newline and preserved key order."""
    path = tmp_path / "nested" / "mcp.json"

    write_json_file(path, {"b": 1, "a": {"c": 2}})

    assert path.read_text() == json.dumps({"b": 1, "a": {"c": 2}}, indent=2) + "\n"


def test_atomic_write_leaves_no_temp_files(tmp_path: Path):
    path = tmp_path / "file.txt"
    path.write_text("old")

    atomic_write_bytes(path, b"new")

    assert path.read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]


def test_atomic_write_permission_error(tmp_path: Path):
    """Test that a refused replace keeps the original and cleans up."""
    path = tmp_path / "file.txt"
    path.write_text("old")

    with patch("promptonomicon.utils.files.os.replace", side_effect=PermissionError("denied")):
        with pytest.raises(FilesystemPermissionError):
            atomic_write_bytes(path, b"new")

    assert path.read_text() == "old"
    assert os.listdir(tmp_path) == ["file.txt"]
