# ABOUTME: Tests for layout tables and TOML settings loading
from pathlib import Path

import pytest

from promptonomicon.config import (
    CONFIG_FILE,
    DEFAULT_TIMEOUT,
    DIRECTORIES,
    MARKER_DIR,
    Settings,
    get_config_path,
    load_settings,
    template_path,
)


class TestLayout:
    """Tests for the static layout tables."""

    def test_marker_created_first(self) -> None:
        assert DIRECTORIES[0] == MARKER_DIR

    def test_template_path(self, tmp_path: Path) -> None:
        assert template_path(tmp_path, "README.md") == tmp_path / ".promptonomicon" / "README.md"


class TestGetConfigPath:
    """Tests for get_config_path()."""

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that PROMPTONOMICON_CONFIG wins."""
        monkeypatch.setenv("PROMPTONOMICON_CONFIG", str(tmp_path / "custom.toml"))

        assert get_config_path() == tmp_path / "custom.toml"

    def test_default_location(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PROMPTONOMICON_CONFIG", raising=False)

        assert get_config_path() == CONFIG_FILE


class TestLoadSettings:
    """Tests for load_settings()."""

    @pytest.fixture(autouse=True)
    def online(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PROMPTONOMICON_OFFLINE", raising=False)

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Test that no settings file means built-in defaults."""
        settings = load_settings(tmp_path / "absent.toml")

        assert settings == Settings()
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.base_url == (
            "https://raw.githubusercontent.com/trianglegrrl/promptonomicon/main/.promptonomicon"
        )

    def test_source_table(self, tmp_path: Path) -> None:
        """Test that [source] values are applied."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[source]\nowner = "acme"\nrepo = "prompts"\nbranch = "v2"\n'
            "timeout = 5\noffline = true\n"
        )

        settings = load_settings(path)

        assert settings == Settings(owner="acme", repo="prompts", branch="v2", timeout=5.0, offline=True)
        assert settings.base_url.startswith("https://raw.githubusercontent.com/acme/prompts/v2/")

    def test_unrelated_tables_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[other]\nkey = "value"\n')

        assert load_settings(path) == Settings()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test that a syntax error is a ValueError naming the file."""
        path = tmp_path / "config.toml"
        path.write_text("[source\nowner = ")

        with pytest.raises(ValueError, match="Invalid TOML"):
            load_settings(path)

    @pytest.mark.parametrize(
        "body, field",
        [
            ('source = "github"\n', "'source'"),
            ('[source]\nowner = ""\n', "source.owner"),
            ("[source]\nbranch = 3\n", "source.branch"),
            ("[source]\ntimeout = 0\n", "source.timeout"),
            ('[source]\ntimeout = "fast"\n', "source.timeout"),
            ("[source]\ntimeout = true\n", "source.timeout"),
            ('[source]\noffline = "yes"\n', "source.offline"),
        ],
    )
    def test_bad_values(self, tmp_path: Path, body: str, field: str) -> None:
        """Test that wrongly typed values are rejected."""
        path = tmp_path / "config.toml"
        path.write_text(body)

        with pytest.raises(ValueError, match=field):
            load_settings(path)

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_offline_env_forces_offline(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        """Test the PROMPTONOMICON_OFFLINE override."""
        path = tmp_path / "config.toml"
        path.write_text("[source]\noffline = false\n")
        monkeypatch.setenv("PROMPTONOMICON_OFFLINE", value)

        assert load_settings(path).offline is True

    def test_offline_env_falsy(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROMPTONOMICON_OFFLINE", "0")

        assert load_settings(tmp_path / "absent.toml").offline is False
