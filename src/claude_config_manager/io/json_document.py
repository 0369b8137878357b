"""I/O operations for Claude Code JSON documents.

This module provides safe read/write operations for settings.json,
settings.local.json, .mcp.json and ~/.claude.json with atomic writes.

Documents are handled as plain ordered dicts: only the keys an operation owns
are mutated, everything else round-trips verbatim and in its original order.
"""

import json
import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from claude_config_manager.errors import FileSystemError, ParseError

logger = logging.getLogger(__name__)


def temp_path_for(path: Path) -> Path:
    """Temp file used while writing ``path`` (``<path>.tmp``)."""
    return path.with_name(path.name + ".tmp")


def load_json_document(path: Path, *, label: str = "settings file") -> dict[str, Any]:
    """Load a JSON document from disk.

    Args:
        path: Path to the JSON file
        label: Human-readable name used in error messages

    Returns:
        Parsed document, or an empty dict if the file doesn't exist

    Raises:
        ParseError: If the file is not valid JSON or not a JSON object
        FileSystemError: If the file exists but cannot be read
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise FileSystemError(f"Failed to read {label}: {e}", errno=e.errno) from e

    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to read {label}: {path} contains invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ParseError(f"Failed to read {label}: {path} must contain a JSON object")
    return data


def serialize_document(document: dict[str, Any]) -> str:
    """Pretty-print a document with 2-space indentation and a trailing newline."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_bytes_atomic(path: Path, content: bytes, *, label: str = "file") -> None:
    """Write bytes to ``path`` through a temp file and rename.

    Content is written verbatim, line endings included.

    Creates parent directories if they don't exist. On failure the temp file
    is removed and the original file is left untouched.

    Raises:
        FileSystemError: If writing or renaming fails
    """
    temp_path = temp_path_for(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_bytes(content)
        temp_path.replace(path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise FileSystemError(f"Failed to update {label}: {e}", errno=e.errno) from e


def save_json_document(
    path: Path,
    document: dict[str, Any],
    *,
    label: str = "settings file",
) -> None:
    """Save a JSON document to disk atomically.

    Writes to ``<path>.tmp`` first, re-parses the temp file to make sure the
    output is valid JSON, then renames it over ``path``. A reader never
    observes a partially written document.

    Args:
        path: Destination file
        document: Document to write
        label: Human-readable name used in error messages

    Raises:
        ParseError: If the serialized output is not valid JSON
        FileSystemError: If writing or renaming fails
    """
    temp_path = temp_path_for(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(serialize_document(document), encoding="utf-8")

        try:
            json.loads(temp_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            temp_path.unlink(missing_ok=True)
            raise ParseError(f"Generated invalid JSON for {path}: {e}") from e

        temp_path.replace(path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise FileSystemError(f"Failed to update {label}: {e}", errno=e.errno) from e

    logger.info("Wrote %s", path)


@contextmanager
def modify_json_document(
    path: Path,
    *,
    label: str = "settings file",
) -> Generator[tuple[dict[str, Any], Callable[[dict[str, Any]], None]]]:
    """Context manager for read-modify-write access to a JSON document.

    Example:
        with modify_json_document(path) as (document, save):
            save(merge_hook_into_settings(document, event, matcher, hook))
    """
    document = load_json_document(path, label=label)

    def save_fn(new_document: dict[str, Any]) -> None:
        save_json_document(path, new_document, label=label)

    yield document, save_fn
