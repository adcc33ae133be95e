# ABOUTME: Tests for AI assistant integration file placement
from pathlib import Path

from promptonomicon.integrations import INTEGRATION_FILES, place_integrations


def test_claude_always_written(tmp_path: Path) -> None:
    """Test that CLAUDE.md is the only file without tool directories."""
    written = place_integrations(tmp_path, environ={})

    assert written == [("Claude (CLAUDE.md in project root)", tmp_path / "CLAUDE.md")]
    content = (tmp_path / "CLAUDE.md").read_text()
    assert "Promptonomicon Framework Instructions" in content
    assert "Six-Phase Process" in content


def test_cursor_rule_has_frontmatter(tmp_path: Path) -> None:
    """Test the Cursor rule file when .cursor exists."""
    (tmp_path / ".cursor").mkdir()

    place_integrations(tmp_path, environ={})

    content = (tmp_path / ".cursor" / "rules" / "promptonomicon.mdc").read_text()
    assert content.startswith("---\nalwaysApply: true\n---\n")
    assert "Process Overview" in content


def test_cursor_detected_from_environment(tmp_path: Path) -> None:
    """Test that CURSOR_EDITOR triggers the Cursor rule without .cursor."""
    written = place_integrations(tmp_path, environ={"CURSOR_EDITOR": "true"})

    assert (tmp_path / ".cursor" / "rules" / "promptonomicon.mdc").exists()
    assert len(written) == 2


def test_all_editors(tmp_path: Path) -> None:
    """Test that every tool directory gets its file, in fixed order."""
    for tool in (".cursor", ".vscode", ".windsurf"):
        (tmp_path / tool).mkdir()

    written = place_integrations(tmp_path, environ={})

    assert [label for label, _ in written] == [i.label for i in INTEGRATION_FILES]
    assert "Promptonomicon Configuration for VS Code" in (
        tmp_path / ".vscode" / "promptonomicon.md"
    ).read_text()
    assert "Windsurf Configuration" in (tmp_path / ".windsurf" / "rules.md").read_text()
