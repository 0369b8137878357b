"""Target path computation for copy operations.

Resolution is pure: nothing is created on disk. Callers create parent
directories when they write.
"""

import errno
import os
from pathlib import Path, PurePath

from claude_config_manager.context import ManagerContext
from claude_config_manager.errors import (
    FileSystemError,
    NotFoundError,
    SecurityError,
    ValidationError,
)
from claude_config_manager.mcp.locations import locate
from claude_config_manager.models.artifact import ArtifactKind, Scope

VALID_KINDS = ", ".join(kind.value for kind in ArtifactKind)
VALID_SCOPES = ", ".join(scope.value for scope in Scope)
FILE_KINDS = frozenset({ArtifactKind.AGENT, ArtifactKind.COMMAND, ArtifactKind.SKILL})


def check_path_security(source_path: str, label: str = "source path") -> None:
    """Reject paths containing null bytes or ``..`` segments.

    Raises:
        SecurityError: If the path is unsafe
    """
    if "\0" in source_path:
        raise SecurityError(f"Invalid {label}: path contains null bytes")
    segments = source_path.replace("\\", "/").split("/")
    if ".." in segments:
        raise SecurityError(f'Path traversal detected: {label} contains ".." segments')


def _parse_kind(kind: str | ArtifactKind) -> ArtifactKind:
    if not isinstance(kind, str) or not kind:
        raise ValidationError("Invalid configType: must be a non-empty string")
    try:
        return ArtifactKind(kind)
    except ValueError:
        raise ValidationError(f"Invalid configType: must be one of {VALID_KINDS}") from None


def _parse_scope(scope: str | Scope) -> Scope:
    if not isinstance(scope, str) or not scope:
        raise ValidationError("Invalid targetScope: must be a non-empty string")
    try:
        return Scope(scope)
    except ValueError:
        raise ValidationError(f"Invalid targetScope: must be one of {VALID_SCOPES}") from None


def command_subpath(source_path: str, claude_dir_name: str = ".claude") -> PurePath:
    """Relative location of a command below its ``commands`` directory.

    Nested commands keep their namespace directories:
    ``/p/.claude/commands/git/commit.md`` gives ``git/commit.md``.
    """
    parts = PurePath(source_path.replace("\\", "/")).parts
    for index in range(len(parts) - 2):
        if parts[index] in (claude_dir_name, ".claude") and parts[index + 1] == "commands":
            return PurePath(*parts[index + 2 :])

    for index in range(len(parts) - 2, -1, -1):
        if parts[index] == "commands":
            return PurePath(*parts[index + 1 :])

    return PurePath(parts[-1])


def _is_within(target: Path, base: Path) -> bool:
    normalized_target = Path(os.path.normpath(target))
    normalized_base = Path(os.path.normpath(base))
    return normalized_target == normalized_base or normalized_target.is_relative_to(
        normalized_base
    )


class PathResolver:
    """Compute where an artifact lands in the target scope."""

    def __init__(self, context: ManagerContext) -> None:
        self._ctx = context

    async def resolve_base(self, scope: str | Scope, project_id: str | None) -> Path:
        """Return the project directory or the home directory for ``scope``.

        Raises:
            ValidationError: If scope is invalid or project id is missing
            NotFoundError: If the project is unknown or its directory is gone
        """
        parsed_scope = _parse_scope(scope)
        if parsed_scope is Scope.USER:
            return self._ctx.paths.home

        if not project_id:
            raise ValidationError('targetProjectId is required when targetScope is "project"')

        project = await self._ctx.project_registry.get_project(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        if not project.exists or not project.path.is_dir():
            raise NotFoundError(f"Project directory does not exist: {project.path}")
        return project.path

    def claude_dir(self, scope: str | Scope, base: Path) -> Path:
        if Scope(scope) is Scope.USER:
            return self._ctx.paths.user_claude_dir()
        return self._ctx.paths.project_claude_dir(base)

    async def resolve(
        self,
        kind: str | ArtifactKind,
        scope: str | Scope,
        project_id: str | None,
        source_path: str | None,
    ) -> Path:
        """Compute the target path of a copy.

        Args:
            kind: Artifact kind (agent, command, hook, mcp, skill)
            scope: Target scope (project or user)
            project_id: Registered project id, required for project scope
            source_path: Path of the artifact being copied; hooks and MCP
                servers have no source file and may pass None

        Returns:
            Absolute target path inside the scope's base directory

        Raises:
            SecurityError: Unsafe source path or target outside the base
            ValidationError: Invalid kind, scope or source path
            NotFoundError: Unknown project or missing project directory
        """
        if isinstance(source_path, str):
            check_path_security(source_path)

        parsed_kind = _parse_kind(kind)
        parsed_scope = _parse_scope(scope)
        source_path = source_path or ""
        if parsed_kind in FILE_KINDS and not source_path.strip():
            raise ValidationError("Invalid sourcePath: must be a non-empty string")

        base = await self.resolve_base(parsed_scope, project_id)
        claude_dir = self.claude_dir(parsed_scope, base)
        source_name = PurePath(source_path.replace("\\", "/")).name

        match parsed_kind:
            case ArtifactKind.AGENT:
                target = claude_dir / "agents" / source_name
            case ArtifactKind.COMMAND:
                subpath = command_subpath(source_path, self._ctx.paths.claude_dir_name)
                target = claude_dir / "commands" / subpath
            case ArtifactKind.SKILL:
                target = claude_dir / "skills" / source_name
            case ArtifactKind.HOOK:
                target = claude_dir / "settings.json"
            case ArtifactKind.MCP:
                target = locate(
                    self._ctx.paths,
                    parsed_scope,
                    base if parsed_scope is Scope.PROJECT else None,
                )

        if not _is_within(target, base):
            raise SecurityError(f"Security violation: target path {target} is outside {base}")
        return Path(os.path.normpath(target))


def validate_source_file(source_path: str) -> Path:
    """Check that ``source_path`` is a readable regular file.

    Returns:
        The resolved absolute path

    Raises:
        NotFoundError: If the file doesn't exist
        ValidationError: If the path is not a regular file
        FileSystemError: If the file is not readable
    """
    resolved = Path(source_path).resolve()
    if not resolved.exists():
        raise NotFoundError(f"Source file not found: {resolved}")
    if not resolved.is_file():
        raise ValidationError(f"Invalid source: {source_path} is not a regular file")
    if not os.access(resolved, os.R_OK):
        raise FileSystemError(
            f"Permission denied: cannot read {source_path}", errno=errno.EACCES
        )
    return resolved


def validate_source_dir(source_path: str) -> Path:
    """Check that ``source_path`` is a readable directory.

    Returns:
        The resolved absolute path
    """
    resolved = Path(source_path).resolve()
    if not resolved.exists():
        raise NotFoundError(f"Source directory not found: {resolved}")
    if not resolved.is_dir():
        raise ValidationError(f"Invalid source: {source_path} is not a directory")
    if not os.access(resolved, os.R_OK | os.X_OK):
        raise FileSystemError(
            f"Permission denied: cannot read {source_path}", errno=errno.EACCES
        )
    return resolved
