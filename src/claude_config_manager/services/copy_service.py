"""Business logic for copying configuration artifacts between scopes."""

import logging
import os
import shutil
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

from claude_config_manager.context import ManagerContext
from claude_config_manager.errors import (
    ConfigManagerError,
    CopyCancelled,
    FileSystemError,
    ValidationError,
)
from claude_config_manager.hooks.merge import (
    effective_matcher,
    find_hook,
    merge_hook_into_settings,
)
from claude_config_manager.hooks.validation import validate_hook
from claude_config_manager.io.frontmatter import has_frontmatter_block, parse_frontmatter
from claude_config_manager.io.json_document import (
    load_json_document,
    modify_json_document,
    save_json_document,
    write_bytes_atomic,
)
from claude_config_manager.mcp.locations import (
    find_server,
    project_candidates,
    remove_server,
    set_server,
)
from claude_config_manager.mcp.validation import validate_mcp_config
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
from claude_config_manager.models.result import CopyResult
from claude_config_manager.operations.conflicts import (
    detect_file_conflict,
    detect_mcp_conflict,
    resolve_conflict,
)
from claude_config_manager.operations.path_resolver import (
    PathResolver,
    check_path_security,
    validate_source_dir,
    validate_source_file,
)
from claude_config_manager.operations.skill_references import detect_external_references

logger = logging.getLogger(__name__)

SKILL_FILE = "SKILL.md"


def _check_markdown_frontmatter(content: bytes, label: str) -> None:
    text = content.decode("utf-8", errors="replace")
    if not has_frontmatter_block(text):
        raise ValidationError(
            f"Invalid {label} file: missing YAML frontmatter "
            "(file must start with a --- delimited block)"
        )
    parsed = parse_frontmatter(text)
    if parsed.has_error:
        raise ValidationError(
            f"Invalid {label} file: malformed YAML frontmatter ({parsed.parse_error})"
        )


def _count_tree(root: Path) -> tuple[int, int]:
    """Count files and subdirectories below ``root`` (``root`` itself excluded)."""
    file_count = 0
    dir_count = 0
    for _dirpath, dirnames, filenames in os.walk(root):
        dir_count += len(dirnames)
        file_count += len(filenames)
    return file_count, dir_count


class CopyService:
    """Copy agents, commands, skills, hooks and MCP servers into a target scope.

    Every operation re-reads the target, checks for conflicts, applies the
    caller's conflict strategy and writes atomically. Typed errors are
    returned as failed results rather than raised.
    """

    def __init__(self, ctx: ManagerContext) -> None:
        """Create CopyService with manager context.

        Args:
            ctx: Manager context with injected dependencies
        """
        self._ctx = ctx
        self._resolver = PathResolver(ctx)

    async def copy(self, request: CopyRequest) -> CopyResult:
        """Dispatch a copy request to the operation for its artifact kind."""
        match request:
            case AgentCopyRequest():
                return await self.copy_agent(request)
            case CommandCopyRequest():
                return await self.copy_command(request)
            case SkillCopyRequest():
                return await self.copy_skill(request)
            case HookCopyRequest():
                return await self.copy_hook(request)
            case McpCopyRequest():
                return await self.copy_mcp(request)
            case _:
                return CopyResult.failed(
                    ValidationError(f"Unsupported copy request: {type(request).__name__}")
                )

    async def copy_agent(self, request: AgentCopyRequest) -> CopyResult:
        """Copy an agent Markdown file into ``<claude>/agents/``."""
        return await self._run(
            self._copy_markdown(
                ArtifactKind.AGENT,
                request.source_path,
                request.target_scope,
                request.target_project_id,
                request.conflict_strategy,
            )
        )

    async def copy_command(self, request: CommandCopyRequest) -> CopyResult:
        """Copy a slash command into ``<claude>/commands/``, keeping its namespace."""
        return await self._run(
            self._copy_markdown(
                ArtifactKind.COMMAND,
                request.source_path,
                request.target_scope,
                request.target_project_id,
                request.conflict_strategy,
            )
        )

    async def copy_skill(self, request: SkillCopyRequest) -> CopyResult:
        """Copy a skill directory into ``<claude>/skills/``."""
        return await self._run(self._copy_skill(request))

    async def copy_hook(self, request: HookCopyRequest) -> CopyResult:
        """Merge a hook into the target scope's settings.json."""
        return await self._run(self._copy_hook(request))

    async def copy_mcp(self, request: McpCopyRequest) -> CopyResult:
        """Copy an MCP server definition into the target scope."""
        return await self._run(self._copy_mcp(request))

    async def _run(self, operation: Coroutine[Any, Any, CopyResult]) -> CopyResult:
        try:
            return await operation
        except CopyCancelled:
            return CopyResult.cancelled()
        except ConfigManagerError as e:
            logger.warning("Copy failed: %s", e.message)
            return CopyResult.failed(e)

    async def _copy_markdown(
        self,
        kind: ArtifactKind,
        source_path: str,
        target_scope: str,
        target_project_id: str | None,
        conflict_strategy: str | None,
    ) -> CopyResult:
        target = await self._resolver.resolve(kind, target_scope, target_project_id, source_path)
        source = validate_source_file(source_path)

        try:
            content = source.read_bytes()
        except OSError as e:
            raise FileSystemError(f"Failed to read source file: {e}", errno=e.errno) from e
        _check_markdown_frontmatter(content, kind.value)

        conflict = detect_file_conflict(source, target)
        if conflict is not None:
            if conflict_strategy is None:
                return CopyResult.conflicted(conflict)
            target = resolve_conflict(target, conflict_strategy)

        write_bytes_atomic(target, content, label=f"{kind.value} file")
        logger.info("Copied %s %s -> %s", kind.value, source, target)
        return CopyResult.copied(str(target), f"{kind.value.capitalize()} copied successfully")

    async def _copy_skill(self, request: SkillCopyRequest) -> CopyResult:
        check_path_security(request.source_skill_path)
        target = await self._resolver.resolve(
            ArtifactKind.SKILL,
            request.target_scope,
            request.target_project_id,
            request.source_skill_path,
        )
        source = validate_source_dir(request.source_skill_path)

        skill_file = source / SKILL_FILE
        if not skill_file.is_file():
            raise ValidationError(f"Invalid skill directory: {source} missing {SKILL_FILE}")

        try:
            content = skill_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(f"Failed to read {SKILL_FILE}: {e}") from e
        _check_markdown_frontmatter(content.encode("utf-8"), "skill")

        references = detect_external_references(source, content)
        if references and not request.acknowledged_warnings:
            return CopyResult.needs_acknowledgement([ref.to_response() for ref in references])

        conflict = detect_file_conflict(source, target)
        if conflict is not None:
            if request.conflict_strategy is None:
                return CopyResult.conflicted(conflict)
            target = resolve_conflict(target, request.conflict_strategy)

        self._copy_tree(source, target)
        file_count, dir_count = _count_tree(target)
        logger.info("Copied skill %s -> %s (%d files)", source, target, file_count)
        return CopyResult.copied(
            str(target),
            "Skill copied successfully",
            file_count=file_count,
            dir_count=dir_count,
        )

    def _copy_tree(self, source: Path, target: Path) -> None:
        """Copy a directory, replacing ``target`` only once the copy is complete."""
        staging = target.with_name(target.name + ".tmp")
        try:
            if staging.exists():
                shutil.rmtree(staging)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source, staging, symlinks=True)
            if target.exists():
                shutil.rmtree(target)
            staging.replace(target)
        except OSError as e:
            shutil.rmtree(staging, ignore_errors=True)
            raise FileSystemError(f"Failed to copy skill directory: {e}", errno=e.errno) from e

    async def _copy_hook(self, request: HookCopyRequest) -> CopyResult:
        hook = request.source_hook
        if not isinstance(hook, dict) or not hook:
            raise ValidationError("sourceHook is required")

        event = hook.get("event")
        if not event:
            raise ValidationError("Invalid hook configuration: event is required")
        if not isinstance(event, str):
            raise ValidationError(
                "Invalid hook configuration", details=validate_hook(hook, event)
            )
        command = hook.get("command")
        if not command:
            raise ValidationError("Invalid hook configuration: command is required")

        errors = validate_hook(hook, event)
        if errors:
            raise ValidationError("Invalid hook configuration", details=errors)

        target = await self._resolver.resolve(
            ArtifactKind.HOOK, request.target_scope, request.target_project_id, None
        )

        matcher, warning = effective_matcher(event, hook.get("matcher"))
        if warning is not None:
            logger.warning(warning)
        warnings = [warning] if warning is not None else None
        identity = {"event": event, "matcher": matcher, "command": command}

        with modify_json_document(target) as (settings, save):
            if find_hook(settings, event, matcher, command) is not None:
                return CopyResult.merged(
                    str(target),
                    "Hook already exists in target settings, no changes made",
                    hook=identity,
                    warnings=warnings,
                )
            save(merge_hook_into_settings(settings, event, matcher, hook))

        return CopyResult.merged(
            str(target), "Hook merged successfully", hook=identity, warnings=warnings
        )

    async def _copy_mcp(self, request: McpCopyRequest) -> CopyResult:
        name = request.source_server_name
        config = request.source_mcp_config
        if not isinstance(name, str) or not name:
            raise ValidationError("sourceServerName is required")
        if not isinstance(config, dict) or not config:
            raise ValidationError("sourceMcpConfig is required")

        errors = validate_mcp_config(name, config)
        if errors:
            raise ValidationError(
                f"Invalid MCP server configuration: {'; '.join(errors)}", details=errors
            )

        target = await self._resolver.resolve(
            ArtifactKind.MCP, request.target_scope, request.target_project_id, None
        )
        if Scope(request.target_scope) is Scope.PROJECT:
            candidates = project_candidates(self._ctx.paths, target.parent)
        else:
            candidates = [target]

        existing = find_server(candidates, name)
        if existing is not None:
            conflict = detect_mcp_conflict(existing.document, name, existing.path)
            match request.conflict_strategy:
                case None:
                    return CopyResult.conflicted(conflict)
                case ConflictStrategy.SKIP:
                    raise CopyCancelled()
                case ConflictStrategy.OVERWRITE:
                    pass
                case ConflictStrategy.RENAME:
                    raise ValidationError(
                        "Conflict strategy rename is not supported for MCP servers"
                    )
                case other:
                    raise ValidationError(f"Unknown conflict strategy: {other}")

        document = load_json_document(target, label="target file")
        save_json_document(target, set_server(document, name, config), label="target file")

        if existing is not None and existing.path != target:
            # One file holds the server; drop the legacy copy.
            save_json_document(
                existing.path, remove_server(existing.document, name), label="target file"
            )
            logger.info("Moved MCP server %s from %s to %s", name, existing.path, target)

        logger.info("Copied MCP server %s -> %s", name, target)
        return CopyResult.merged(str(target), "MCP server copied successfully", server_name=name)
