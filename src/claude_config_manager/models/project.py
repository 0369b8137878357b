"""Project registry data model."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Project:
    """A Claude Code project known to the registry.

    Attributes:
        id: Identifier derived from the path (see project_id_from_path)
        path: Absolute project directory
        name: Directory basename
        exists: Whether the directory exists on disk
        config: Raw per-project entry from ~/.claude.json
    """

    id: str
    path: Path
    name: str
    exists: bool
    config: dict[str, Any] | None = None


def project_id_from_path(project_path: str | Path) -> str:
    """Derive a stable project id by dropping every non-alphanumeric character.

    Example:
        >>> project_id_from_path("/home/user/myproject")
        'homeusermyproject'
    """
    return re.sub(r"[^a-zA-Z0-9]", "", str(project_path))
