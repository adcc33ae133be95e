# ABOUTME: Shared fixtures: an in-memory template source and an isolated environment
from pathlib import Path

import pytest

from promptonomicon.config import TEMPLATE_FILES
from promptonomicon.errors import FetchError


class DictSource:
    """ContentSource backed by a dict; records every fetch."""

    def __init__(self, contents: dict[str, str], fail_on: str | None = None) -> None:
        self.contents = contents
        self.fail_on = fail_on
        self.fetched: list[str] = []

    def fetch(self, identifier: str) -> str:
        self.fetched.append(identifier)
        if identifier == self.fail_on:
            raise FetchError(identifier, "HTTP Error 404: Not Found")
        return self.contents[identifier]


def canonical_contents() -> dict[str, str]:
    contents = {name: f"# {name}\n\nCanonical text for {name}.\n" for name in TEMPLATE_FILES}
    contents["3_BUILD_PLAN.md"] += "Check versions with versionator.\n"
    return contents


@pytest.fixture
def source() -> DictSource:
    return DictSource(canonical_contents())


@pytest.fixture
def project(tmp_path: Path) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the network, the user's settings and real keys."""
    monkeypatch.setenv("PROMPTONOMICON_CONFIG", str(tmp_path / "no-such-config.toml"))
    monkeypatch.setenv("PROMPTONOMICON_OFFLINE", "1")
    monkeypatch.delenv("CONTEXT7_API_KEY", raising=False)
    monkeypatch.delenv("CURSOR_EDITOR", raising=False)
