"""Find configuration files that mention an agent, command or skill.

The scan is advisory, like the MCP server scan: a plain substring search
reported with 1-based line numbers. The artifact's own file (or skill
directory) is never reported. A scan that outlives SCAN_TIMEOUT returns
whatever finished in time.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SCAN_TIMEOUT = 5.0


@dataclass(frozen=True)
class ArtifactReference:
    """A file that mentions the artifact, with the matching line numbers."""

    kind: str
    name: str
    location: Path
    lines: tuple[int, ...]

    def describe(self) -> str:
        line_list = ", ".join(str(n) for n in self.lines)
        label = "line" if len(self.lines) == 1 else "lines"
        return f"{self.kind} {self.name}: {self.location} ({label} {line_list})"

    def to_response(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "name": self.name,
            "location": str(self.location),
            "lines": list(self.lines),
        }


def search_file(path: Path, needle: str) -> tuple[int, ...]:
    """Line numbers of ``path`` containing ``needle``; empty if unreadable."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not check references in %s: %s", path, e)
        return ()
    return tuple(number for number, line in enumerate(text.splitlines(), start=1) if needle in line)


def reference_candidates(claude_dir: Path, mcp_json: Path | None) -> list[tuple[str, str, Path]]:
    """Files that may mention an artifact, as (kind, name, path) tuples."""
    candidates: list[tuple[str, str, Path]] = []

    agents_dir = claude_dir / "agents"
    if agents_dir.is_dir():
        candidates.extend(
            ("agent", path.stem, path) for path in sorted(agents_dir.glob("*.md")) if path.is_file()
        )

    commands_dir = claude_dir / "commands"
    if commands_dir.is_dir():
        candidates.extend(
            ("command", path.stem, path)
            for path in sorted(commands_dir.rglob("*.md"))
            if path.is_file()
        )

    skills_dir = claude_dir / "skills"
    if skills_dir.is_dir():
        candidates.extend(
            ("skill", path.name, path / "SKILL.md")
            for path in sorted(skills_dir.iterdir())
            if path.is_dir()
        )

    candidates.append(("settings", "settings.json", claude_dir / "settings.json"))
    if mcp_json is not None:
        candidates.append(("mcp", mcp_json.name, mcp_json))
    return candidates


async def find_artifact_references(
    name: str,
    claude_dir: Path,
    mcp_json: Path | None,
    exclude: Path,
) -> list[ArtifactReference]:
    """Scan a scope's configuration for mentions of ``name``.

    Args:
        name: Artifact name to search for (exact substring)
        claude_dir: The scope's ``.claude`` directory
        mcp_json: Project ``.mcp.json``, or None for the user scope
        exclude: The artifact's own file or directory
    """
    candidates = [
        candidate
        for candidate in reference_candidates(claude_dir, mcp_json)
        if not candidate[2].is_relative_to(exclude)
    ]
    if not candidates:
        return []

    tasks = [
        asyncio.create_task(asyncio.to_thread(search_file, path, name))
        for _kind, _name, path in candidates
    ]
    done, pending = await asyncio.wait(tasks, timeout=SCAN_TIMEOUT)
    if pending:
        logger.warning(
            "Reference scan timed out after %.0fs, returning partial results", SCAN_TIMEOUT
        )
        for task in pending:
            task.cancel()

    return [
        ArtifactReference(kind=kind, name=item_name, location=path, lines=task.result())
        for (kind, item_name, path), task in zip(candidates, tasks, strict=True)
        if task in done and task.result()
    ]
