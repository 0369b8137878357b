"""Business logic for updating and removing hooks in settings.json."""

import logging
from pathlib import Path
from typing import Any

from claude_config_manager.context import ManagerContext
from claude_config_manager.errors import NotFoundError, ValidationError
from claude_config_manager.hooks.merge import (
    find_hook,
    hook_identity,
    remove_hook_from_settings,
    update_hook_in_settings,
)
from claude_config_manager.hooks.validation import validate_hook, validate_hook_update
from claude_config_manager.io.json_document import modify_json_document
from claude_config_manager.models.artifact import Scope
from claude_config_manager.models.result import DeleteResult, HookUpdateResult
from claude_config_manager.operations.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class HookService:
    """Update and remove individual hook commands in a scope's settings.json."""

    def __init__(self, ctx: ManagerContext) -> None:
        self._ctx = ctx
        self._resolver = PathResolver(ctx)

    async def _settings_path(self, scope: str, project_id: str | None) -> Path:
        base = await self._resolver.resolve_base(scope, project_id)
        settings_path = self._resolver.claude_dir(Scope(scope), base) / "settings.json"
        if not settings_path.exists():
            raise NotFoundError(f"Settings file not found: {settings_path}")
        return settings_path

    async def update_hook(
        self,
        scope: str,
        project_id: str | None,
        event: str,
        matcher: str | None,
        command: str,
        updates: dict[str, Any],
    ) -> HookUpdateResult:
        """Apply a partial update to one hook command.

        Raises:
            NotFoundError: If settings.json or the hook doesn't exist
            ValidationError: If the update or the resulting hook is invalid
            ConflictError: If the updated hook duplicates an existing one
        """
        settings_path = await self._settings_path(scope, project_id)

        with modify_json_document(settings_path) as (settings, save):
            existing = find_hook(settings, event, matcher, command)
            if existing is None:
                raise NotFoundError(f"Hook not found: {hook_identity(event, matcher, command)}")

            errors = validate_hook_update(updates, existing, event)
            if errors:
                raise ValidationError("Validation failed", details=errors)

            updated, new_matcher, entry = update_hook_in_settings(
                settings, event, matcher, command, updates
            )
            errors = validate_hook(entry, event)
            if errors:
                raise ValidationError("Validation failed", details=errors)
            save(updated)

        identity = hook_identity(event, new_matcher, entry.get("command", command))
        logger.info("Updated hook %s in %s", identity, settings_path)
        return HookUpdateResult(
            success=True,
            message=f"Hook {identity} updated successfully",
            file_path=str(settings_path),
            event=event,
            matcher=new_matcher,
            hook=entry,
        )

    async def delete_hook(
        self,
        scope: str,
        project_id: str | None,
        event: str,
        matcher: str | None,
        command: str,
    ) -> DeleteResult:
        """Delete one hook command; empty groups and events are removed with it.

        Raises:
            NotFoundError: If settings.json or the hook doesn't exist
        """
        settings_path = await self._settings_path(scope, project_id)

        with modify_json_document(settings_path) as (settings, save):
            save(remove_hook_from_settings(settings, event, matcher, command))

        identity = hook_identity(event, matcher, command)
        logger.info("Deleted hook %s from %s", identity, settings_path)
        return DeleteResult(
            success=True,
            message=f"Hook {identity} deleted successfully",
            file_path=str(settings_path),
        )
