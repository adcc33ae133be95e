# ABOUTME: Integration tests for the promptonomicon CLI that run actual subprocess commands
# ABOUTME: Tests real CLI behavior by invoking the CLI via subprocess
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from promptonomicon import __version__


def _run(args: list[str], cwd: Path, home: Path, stdin=None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["HOME"] = str(home)
    env["PROMPTONOMICON_OFFLINE"] = "1"
    env["NO_COLOR"] = "1"
    env.pop("PROMPTONOMICON_CONFIG", None)
    env.pop("CONTEXT7_API_KEY", None)
    return subprocess.run(
        [sys.executable, "-m", "promptonomicon", *args],
        stdin=stdin,
        capture_output=True,
        text=True,
        timeout=30,
        cwd=str(cwd),
        env=env
    )


class TestCliIntegration:
    """Integration tests that run the CLI via subprocess."""

    def test_integration_cli_version_output(self, tmp_path: Path):
        """Test that the CLI can be invoked and returns version information."""
        result = _run(["--version"], tmp_path, tmp_path)

        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_integration_cli_help_output(self, tmp_path: Path):
        """Test that --help lists the three commands."""
        result = _run(["--help"], tmp_path, tmp_path)

        assert result.returncode == 0
        for command in ("init", "reset", "doctor"):
            assert command in result.stdout

    def test_integration_init_then_doctor(self, tmp_path: Path):
        """Test a full init followed by a healthy doctor run."""
        project = tmp_path / "project"
        project.mkdir()

        init = _run(["init", "--with-mcp-servers=versionator"], project, tmp_path)
        assert init.returncode == 0, init.stdout + init.stderr
        assert (project / ".promptonomicon" / "PROMPTONOMICON.md").exists()
        servers = json.loads((project / ".mcp.json").read_text())["mcpServers"]
        assert "versionator" in servers

        doctor = _run(["doctor"], project, tmp_path)
        assert doctor.returncode == 0
        assert "Templates match latest version exactly" in doctor.stdout

    def test_integration_doctor_uninitialized(self, tmp_path: Path):
        """Test that doctor exits 1 in an empty directory."""
        result = _run(["doctor"], tmp_path, tmp_path)

        assert result.returncode == 1
        assert "not initialized" in result.stdout

    @pytest.mark.parametrize("args", [["reset"], ["init", "--force", "--bogus"]])
    def test_integration_nonzero_exit(self, tmp_path: Path, args: list[str]):
        """Test that refused or malformed invocations exit non-zero."""
        result = _run(args, tmp_path, tmp_path)

        assert result.returncode != 0
        assert not (tmp_path / ".promptonomicon").exists()

    def test_integration_server_prompt_without_terminal(self, tmp_path: Path):
        """Test that the bare flag with no TTY falls back to the default selection."""
        project = tmp_path / "project"
        project.mkdir()

        result = _run(["init", "--with-mcp-servers"], project, tmp_path, stdin=subprocess.DEVNULL)

        assert result.returncode == 0, result.stdout + result.stderr
        assert "Traceback" not in result.stderr
        servers = json.loads((project / ".mcp.json").read_text())["mcpServers"]
        assert list(servers) == ["versionator"]
