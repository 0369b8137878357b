"""Business logic for updating and deleting MCP servers."""

import logging
from pathlib import Path
from typing import Any

from claude_config_manager.context import ManagerContext
from claude_config_manager.errors import ConflictError, NotFoundError, ValidationError
from claude_config_manager.io.json_document import load_json_document, save_json_document
from claude_config_manager.mcp.locations import (
    find_server,
    project_candidates,
    remove_server,
    rename_server,
    set_server,
)
from claude_config_manager.mcp.validation import (
    apply_mcp_update,
    validate_mcp_config,
    validate_mcp_update,
)
from claude_config_manager.models.artifact import Scope
from claude_config_manager.models.result import DeleteResult, UpdateResult
from claude_config_manager.operations.path_resolver import PathResolver
from claude_config_manager.operations.references import find_all_mcp_server_references

logger = logging.getLogger(__name__)


class McpService:
    """Update and delete MCP server definitions wherever they are stored.

    Deletions report hooks and permissions that still refer to the server;
    the references are advisory and never block the deletion.
    """

    def __init__(self, ctx: ManagerContext) -> None:
        self._ctx = ctx
        self._resolver = PathResolver(ctx)

    async def _locations(self, scope: str, project_id: str | None) -> tuple[Path, list[Path]]:
        """Canonical file and all candidate files for ``scope``."""
        base = await self._resolver.resolve_base(scope, project_id)
        if Scope(scope) is Scope.USER:
            canonical = self._ctx.paths.user_claude_json()
            return canonical, [canonical]
        return self._ctx.paths.project_mcp_json(base), project_candidates(self._ctx.paths, base)

    async def delete_project_mcp_server(self, project_id: str, name: str) -> DeleteResult:
        """Delete a server from the first project file that defines it.

        Raises:
            NotFoundError: If the project or the server doesn't exist
        """
        project_path = await self._resolver.resolve_base(Scope.PROJECT, project_id)
        references = await find_all_mcp_server_references(
            name,
            [
                self._ctx.paths.project_settings(project_path),
                self._ctx.paths.project_local_settings(project_path),
            ],
        )

        location = find_server(project_candidates(self._ctx.paths, project_path), name)
        if location is None:
            raise NotFoundError(f"MCP server not found: {name}")

        save_json_document(location.path, remove_server(location.document, name))
        logger.info("Deleted MCP server %s from %s", name, location.path)
        return DeleteResult(
            success=True,
            message=f'MCP server "{name}" deleted successfully',
            file_path=str(location.path),
            references=references or None,
        )

    async def delete_user_mcp_server(self, name: str) -> DeleteResult:
        """Delete a server from ~/.claude.json.

        References are looked up in ~/.claude/settings.json.

        Raises:
            NotFoundError: If ~/.claude.json or the server doesn't exist
        """
        claude_json = self._ctx.paths.user_claude_json()
        if not claude_json.exists():
            raise NotFoundError(
                f"MCP server not found: {name} ({claude_json.name} does not exist)"
            )

        references = await find_all_mcp_server_references(
            name, [self._ctx.paths.user_settings()]
        )

        location = find_server([claude_json], name)
        if location is None:
            raise NotFoundError(f"MCP server not found: {name}")

        save_json_document(claude_json, remove_server(location.document, name))
        logger.info("Deleted user MCP server %s", name)
        return DeleteResult(
            success=True,
            message=f'MCP server "{name}" deleted successfully',
            references=references or None,
        )

    async def update_mcp_server(
        self,
        scope: str,
        project_id: str | None,
        name: str,
        updates: dict[str, Any],
    ) -> UpdateResult:
        """Apply a partial update to a server, optionally renaming it.

        A project server found in a legacy settings file is moved to
        ``.mcp.json`` as part of the update.

        Raises:
            NotFoundError: If the server doesn't exist
            ValidationError: If the update or the resulting server is invalid
            ConflictError: If the new name is already taken
        """
        canonical, candidates = await self._locations(scope, project_id)

        location = find_server(candidates, name)
        if location is None:
            raise NotFoundError(f"MCP server not found: {name}")

        errors = validate_mcp_update(updates, location.config)
        if errors:
            raise ValidationError("Validation failed", details=errors)

        new_name = updates.get("name", name)
        new_config = apply_mcp_update(location.config, updates)
        errors = validate_mcp_config(new_name, new_config)
        if errors:
            raise ValidationError("Validation failed", details=errors)

        if new_name != name and find_server(candidates, new_name) is not None:
            raise ConflictError("Server name already exists")

        if location.path == canonical:
            if new_name != name:
                document = rename_server(location.document, name, new_name, new_config)
            else:
                document = set_server(location.document, name, new_config)
            save_json_document(canonical, document, label="target file")
        else:
            migrated = set_server(
                load_json_document(canonical, label="target file"), new_name, new_config
            )
            save_json_document(canonical, migrated, label="target file")
            save_json_document(
                location.path, remove_server(location.document, name), label="target file"
            )
            logger.info("Moved MCP server %s from %s to %s", name, location.path, canonical)

        return UpdateResult(
            success=True,
            message=f'MCP server "{new_name}" updated successfully',
            server_name=new_name,
            file_path=str(canonical),
            server=new_config,
        )
