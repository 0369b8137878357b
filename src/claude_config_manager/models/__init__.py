"""Data models for claude-config-manager."""

from claude_config_manager.models.artifact import (
    AgentCopyRequest,
    ArtifactKind,
    CommandCopyRequest,
    ConflictStrategy,
    CopyRequest,
    HookCopyRequest,
    McpCopyRequest,
    Scope,
    SkillCopyRequest,
)
from claude_config_manager.models.project import Project, project_id_from_path
from claude_config_manager.models.result import (
    ConflictInfo,
    CopyResult,
    DeleteResult,
    ErrorKind,
    UpdateResult,
)

__all__ = [
    "AgentCopyRequest",
    "ArtifactKind",
    "CommandCopyRequest",
    "ConflictInfo",
    "ConflictStrategy",
    "CopyRequest",
    "CopyResult",
    "DeleteResult",
    "ErrorKind",
    "HookCopyRequest",
    "McpCopyRequest",
    "Project",
    "Scope",
    "SkillCopyRequest",
    "UpdateResult",
    "project_id_from_path",
]
