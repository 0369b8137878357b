"""Tests for JSON document I/O."""

import json
from pathlib import Path

import pytest

from claude_config_manager.errors import FileSystemError, ParseError
from claude_config_manager.io.json_document import (
    load_json_document,
    modify_json_document,
    save_json_document,
    write_bytes_atomic,
)


def test_load_json_document_missing_file(tmp_path: Path) -> None:
    """Test that a missing file loads as an empty document."""
    assert load_json_document(tmp_path / "settings.json") == {}


def test_load_json_document_empty_file(tmp_path: Path) -> None:
    """Test that a whitespace-only file loads as an empty document."""
    path = tmp_path / "settings.json"
    path.write_text("  \n", encoding="utf-8")

    assert load_json_document(path) == {}


def test_load_json_document_invalid_json(tmp_path: Path) -> None:
    """Test that malformed JSON raises ParseError naming the file."""
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ParseError, match="Failed to read settings file"):
        load_json_document(path)


def test_load_json_document_rejects_non_object(tmp_path: Path) -> None:
    """Test that a JSON array is not accepted as a document."""
    path = tmp_path / ".mcp.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ParseError, match="must contain a JSON object"):
        load_json_document(path, label="target file")


def test_save_json_document_formatting(tmp_path: Path) -> None:
    """Test 2-space indentation, trailing newline and key order."""
    path = tmp_path / "nested" / "settings.json"

    save_json_document(path, {"zeta": 1, "alpha": {"b": "é"}})

    content = path.read_text(encoding="utf-8")
    assert content == '{\n  "zeta": 1,\n  "alpha": {\n    "b": "é"\n  }\n}\n'
    assert not (path.parent / "settings.json.tmp").exists()


def test_save_json_document_failed_rename_keeps_original(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a failed rename leaves the original file and no temp file."""
    path = tmp_path / "settings.json"
    path.write_text('{"original": true}\n', encoding="utf-8")

    def failing_replace(self: Path, target: Path) -> Path:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "replace", failing_replace)

    with pytest.raises(FileSystemError, match="Failed to update settings file") as exc_info:
        save_json_document(path, {"original": False})

    assert exc_info.value.errno == 28
    assert json.loads(path.read_text(encoding="utf-8")) == {"original": True}
    assert not (tmp_path / "settings.json.tmp").exists()


def test_write_bytes_atomic_preserves_bytes(tmp_path: Path) -> None:
    """Test that content is written verbatim, CRLF line endings included."""
    path = tmp_path / "agents" / "agent.md"
    content = b"---\r\nname: x\r\n---\r\nbody\r\n"

    write_bytes_atomic(path, content)

    assert path.read_bytes() == content


def test_modify_json_document_preserves_unknown_keys(tmp_path: Path) -> None:
    """Test that keys the caller doesn't touch round-trip in order."""
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"model": "opus", "permissions": {"allow": ["Bash"]}, "env": {}}),
        encoding="utf-8",
    )

    with modify_json_document(path) as (document, save):
        document["hooks"] = {}
        save(document)

    result = json.loads(path.read_text(encoding="utf-8"))
    assert list(result) == ["model", "permissions", "env", "hooks"]
    assert result["permissions"] == {"allow": ["Bash"]}
