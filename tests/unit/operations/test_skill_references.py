"""Tests for external reference detection in SKILL.md."""

from pathlib import Path

from claude_config_manager.operations.skill_references import detect_external_references


def test_no_references(tmp_path: Path) -> None:
    content = "---\nname: pdf\n---\n\nRun the bundled script: python scripts/fill.py\n"

    assert detect_external_references(tmp_path, content) == []


def test_absolute_path_is_error(tmp_path: Path) -> None:
    references = detect_external_references(tmp_path, "Read /etc/hosts first")

    assert len(references) == 1
    assert references[0].reference == "/etc/hosts"
    assert references[0].type == "absolute"
    assert references[0].severity == "error"
    assert references[0].line == 1
    assert references[0].file == "SKILL.md"


def test_home_path_is_warning(tmp_path: Path) -> None:
    references = detect_external_references(tmp_path, "intro\nSee ~/notes/style.md")

    assert [(r.type, r.severity, r.line) for r in references] == [("home", "warning", 2)]


def test_parent_escape_is_warning(tmp_path: Path) -> None:
    references = detect_external_references(tmp_path, "Shared at ../common/README.md")

    assert [(r.type, r.reference) for r in references] == [("relative", "../common/README.md")]


def test_script_outside_skill(tmp_path: Path) -> None:
    """Test that scripts run from outside the skill are errors."""
    references = detect_external_references(tmp_path, "node ~/tools/build.js")

    assert ("script", "~/tools/build.js", "error") in [
        (r.type, r.reference, r.severity) for r in references
    ]


def test_script_inside_skill_ignored(tmp_path: Path) -> None:
    assert detect_external_references(tmp_path, "bash ./scripts/run.sh") == []


def test_urls_ignored(tmp_path: Path) -> None:
    assert detect_external_references(tmp_path, "Docs: https://example.com/docs") == []


def test_to_response(tmp_path: Path) -> None:
    reference = detect_external_references(tmp_path, "/opt/tool")[0]

    assert reference.to_response() == {
        "file": "SKILL.md",
        "line": 1,
        "reference": "/opt/tool",
        "type": "absolute",
        "severity": "error",
    }
