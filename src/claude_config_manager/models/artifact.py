"""Artifact kinds, scopes and copy requests.

Copy requests form a tagged union: one frozen dataclass per artifact kind,
each carrying its own source locator. CopyService.copy() dispatches on the
variant with pattern matching.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArtifactKind(str, Enum):
    """Kinds of configuration artifacts."""

    AGENT = "agent"
    COMMAND = "command"
    HOOK = "hook"
    MCP = "mcp"
    SKILL = "skill"


class Scope(str, Enum):
    """Where an artifact is stored."""

    PROJECT = "project"
    USER = "user"


class ConflictStrategy(str, Enum):
    """Caller-supplied policy for a detected naming collision."""

    SKIP = "skip"
    OVERWRITE = "overwrite"
    RENAME = "rename"


@dataclass(frozen=True)
class AgentCopyRequest:
    """Copy an agent Markdown file."""

    source_path: str
    target_scope: str
    target_project_id: str | None = None
    conflict_strategy: str | None = None


@dataclass(frozen=True)
class CommandCopyRequest:
    """Copy a slash command Markdown file, preserving its nested subpath."""

    source_path: str
    target_scope: str
    target_project_id: str | None = None
    conflict_strategy: str | None = None


@dataclass(frozen=True)
class SkillCopyRequest:
    """Copy a skill directory (must contain SKILL.md)."""

    source_skill_path: str
    target_scope: str
    target_project_id: str | None = None
    conflict_strategy: str | None = None
    acknowledged_warnings: bool = False


@dataclass(frozen=True)
class HookCopyRequest:
    """Merge a hook into the target scope's settings.json.

    ``source_hook`` is the literal hook: event, matcher, type, command,
    enabled, timeout.
    """

    source_hook: dict[str, Any]
    target_scope: str
    target_project_id: str | None = None


@dataclass(frozen=True)
class McpCopyRequest:
    """Copy an MCP server definition under its name."""

    source_server_name: str
    source_mcp_config: dict[str, Any] = field(default_factory=dict)
    target_scope: str = Scope.USER.value
    target_project_id: str | None = None
    conflict_strategy: str | None = None


CopyRequest = (
    AgentCopyRequest | CommandCopyRequest | SkillCopyRequest | HookCopyRequest | McpCopyRequest
)
