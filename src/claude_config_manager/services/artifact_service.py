"""Business logic for deleting agents, commands and skills."""

import logging
import os
import shutil
from pathlib import Path

from claude_config_manager.context import ManagerContext
from claude_config_manager.errors import (
    FileSystemError,
    NotFoundError,
    SecurityError,
    ValidationError,
)
from claude_config_manager.models.artifact import ArtifactKind, Scope
from claude_config_manager.models.result import DeleteResult
from claude_config_manager.operations.artifact_references import (
    ArtifactReference,
    find_artifact_references,
)
from claude_config_manager.operations.path_resolver import PathResolver, check_path_security

logger = logging.getLogger(__name__)

DELETABLE_KINDS = (ArtifactKind.AGENT, ArtifactKind.COMMAND, ArtifactKind.SKILL)


def _parse_deletable_kind(kind: str | ArtifactKind) -> ArtifactKind:
    try:
        parsed = ArtifactKind(kind)
    except ValueError:
        parsed = None
    if parsed not in DELETABLE_KINDS:
        raise ValidationError(
            f"Invalid artifact type: must be one of {', '.join(k.value for k in DELETABLE_KINDS)}"
        )
    return parsed


def _check_name(kind: ArtifactKind, name: str) -> str:
    """Validate an artifact name; commands may carry ``namespace/`` prefixes."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid {kind.value} name: must be a non-empty string")
    check_path_security(name, label=f"{kind.value} name")
    if name.startswith(("/", "\\")):
        raise SecurityError(f"Invalid {kind.value} name: must be relative")
    if kind is not ArtifactKind.COMMAND and ("/" in name or "\\" in name):
        raise ValidationError(f"Invalid {kind.value} name: must not contain path separators")
    return name.removesuffix(".md")


class ArtifactService:
    """Delete agents, commands and skills, reporting what still mentions them.

    The reference scan runs before the delete and never blocks it.
    """

    def __init__(self, ctx: ManagerContext) -> None:
        self._ctx = ctx
        self._resolver = PathResolver(ctx)

    async def _locate(
        self, kind: ArtifactKind, scope: str, project_id: str | None, name: str
    ) -> tuple[Path, Path | None, Path]:
        """Return (claude dir, project .mcp.json or None, artifact path)."""
        base = await self._resolver.resolve_base(scope, project_id)
        claude_dir = Path(os.path.normpath(self._resolver.claude_dir(Scope(scope), base)))
        mcp_json = None
        if Scope(scope) is Scope.PROJECT:
            mcp_json = self._ctx.paths.project_mcp_json(base)

        match kind:
            case ArtifactKind.AGENT:
                target = claude_dir / "agents" / f"{name}.md"
            case ArtifactKind.COMMAND:
                target = claude_dir / "commands" / f"{name}.md"
            case _:
                target = claude_dir / "skills" / name

        target = Path(os.path.normpath(target))
        if not target.is_relative_to(claude_dir):
            raise SecurityError(f"Security violation: {target} is outside {claude_dir}")
        return claude_dir, mcp_json, target

    async def find_references(
        self,
        kind: str | ArtifactKind,
        scope: str,
        project_id: str | None,
        name: str,
    ) -> list[ArtifactReference]:
        """List configuration files in the scope that mention the artifact."""
        parsed_kind = _parse_deletable_kind(kind)
        name = _check_name(parsed_kind, name)
        claude_dir, mcp_json, target = await self._locate(parsed_kind, scope, project_id, name)
        return await find_artifact_references(name, claude_dir, mcp_json, exclude=target)

    async def delete_artifact(
        self,
        kind: str | ArtifactKind,
        scope: str,
        project_id: str | None,
        name: str,
    ) -> DeleteResult:
        """Delete an agent or command file, or a whole skill directory.

        Raises:
            ValidationError: Unknown kind, bad name, or wrong file type at the path
            SecurityError: Name escapes the scope's ``.claude`` directory
            NotFoundError: Unknown project or missing artifact
            FileSystemError: The delete itself failed
        """
        parsed_kind = _parse_deletable_kind(kind)
        name = _check_name(parsed_kind, name)
        claude_dir, mcp_json, target = await self._locate(parsed_kind, scope, project_id, name)

        if not target.exists():
            raise NotFoundError(f"{parsed_kind.value.capitalize()} not found: {name}")

        references = await find_artifact_references(name, claude_dir, mcp_json, exclude=target)

        try:
            if parsed_kind is ArtifactKind.SKILL:
                if not target.is_dir():
                    raise ValidationError(f"Cannot delete: {target} is not a directory")
                shutil.rmtree(target)
            else:
                if not target.is_file():
                    raise ValidationError(f"Cannot delete: {target} is not a file")
                target.unlink()
        except OSError as e:
            raise FileSystemError(f"Failed to delete {target}: {e}", errno=e.errno) from e

        logger.info("Deleted %s %s (%s)", parsed_kind.value, name, target)
        return DeleteResult(
            success=True,
            message=f'{parsed_kind.value.capitalize()} "{name}" deleted successfully',
            file_path=str(target),
            references=[reference.describe() for reference in references] or None,
        )
