"""Conflict detection and resolution for copy targets."""

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from claude_config_manager.errors import CopyCancelled, ValidationError
from claude_config_manager.mcp.locations import get_servers
from claude_config_manager.models.artifact import ConflictStrategy
from claude_config_manager.models.result import ConflictInfo

logger = logging.getLogger(__name__)


def format_timestamp(mtime: float) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. ``2025-01-02T03:04:05.678Z``."""
    moment = datetime.fromtimestamp(mtime, tz=UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def detect_file_conflict(source: Path, target: Path) -> ConflictInfo | None:
    """Report a conflict when ``target`` already exists.

    A copy onto its own source is a conflict like any other. If either path
    can't be stat'ed the conflict check is skipped.
    """
    if not target.exists():
        return None

    try:
        source_mtime = source.stat().st_mtime
        target_mtime = target.stat().st_mtime
    except OSError as e:
        logger.warning("Could not stat %s or %s, skipping conflict check: %s", source, target, e)
        return None

    return ConflictInfo(
        target_path=str(target),
        source_modified=format_timestamp(source_mtime),
        target_modified=format_timestamp(target_mtime),
    )


def generate_unique_path(path: Path) -> Path:
    """Find the lowest ``-N`` suffixed sibling of ``path`` that doesn't exist.

    Files get the suffix before their last extension (``agent.config.md`` ->
    ``agent.config-2.md``); directories get it after the whole name.
    """
    if path.is_dir():
        stem, suffix = path.name, ""
    else:
        stem, suffix = path.stem, path.suffix

    counter = 2
    while True:
        candidate = path.with_name(f"{stem}-{counter}{suffix}")
        if not candidate.exists():
            return candidate
        counter += 1


def resolve_conflict(target: Path, strategy: str | None) -> Path:
    """Apply a conflict strategy to an existing target.

    Returns:
        Path the copy should be written to

    Raises:
        CopyCancelled: For the ``skip`` strategy
        ValidationError: For an unknown strategy
    """
    if strategy is None:
        return target

    match strategy:
        case ConflictStrategy.OVERWRITE:
            return target
        case ConflictStrategy.RENAME:
            return generate_unique_path(target)
        case ConflictStrategy.SKIP:
            raise CopyCancelled()
        case _:
            raise ValidationError(f"Unknown conflict strategy: {strategy}")


def detect_mcp_conflict(
    document: dict[str, Any], name: str, target_path: Path
) -> ConflictInfo | None:
    """Report a conflict when ``document`` already defines server ``name``."""
    existing = get_servers(document).get(name)
    if not isinstance(existing, dict):
        return None
    return ConflictInfo(target_path=str(target_path), server_name=name, existing_config=existing)
