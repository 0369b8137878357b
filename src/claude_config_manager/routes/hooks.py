"""HTTP route handlers for updating and deleting hooks."""

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from claude_config_manager.errors import ConfigManagerError
from claude_config_manager.models.artifact import Scope
from claude_config_manager.routes.responses import error_response, get_context
from claude_config_manager.services.hook_service import HookService

router = APIRouter(prefix="/api", tags=["hooks"])


async def _update_hook(
    request: Request,
    scope: Scope,
    project_id: str | None,
    event: str,
    matcher: str | None,
    command: str,
    updates: dict[str, Any],
) -> JSONResponse:
    try:
        result = await HookService(get_context(request)).update_hook(
            scope, project_id, event, matcher, command, updates
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())


async def _delete_hook(
    request: Request,
    scope: Scope,
    project_id: str | None,
    event: str,
    matcher: str | None,
    command: str,
) -> JSONResponse:
    try:
        result = await HookService(get_context(request)).delete_hook(
            scope, project_id, event, matcher, command
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())


@router.delete("/projects/{project_id}/hooks")
async def delete_project_hook(
    request: Request,
    project_id: str,
    event: str,
    command: str,
    matcher: str | None = None,
) -> JSONResponse:
    """Delete a hook command from a project's settings.json."""
    return await _delete_hook(request, Scope.PROJECT, project_id, event, matcher, command)


@router.delete("/user/hooks")
async def delete_user_hook(
    request: Request,
    event: str,
    command: str,
    matcher: str | None = None,
) -> JSONResponse:
    """Delete a hook command from ~/.claude/settings.json."""
    return await _delete_hook(request, Scope.USER, None, event, matcher, command)


@router.put("/projects/{project_id}/hooks")
async def update_project_hook(
    request: Request,
    project_id: str,
    event: str,
    command: str,
    matcher: str | None = None,
    updates: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Update a hook command in a project's settings.json."""
    return await _update_hook(
        request, Scope.PROJECT, project_id, event, matcher, command, updates
    )


@router.put("/user/hooks")
async def update_user_hook(
    request: Request,
    event: str,
    command: str,
    matcher: str | None = None,
    updates: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Update a hook command in ~/.claude/settings.json."""
    return await _update_hook(request, Scope.USER, None, event, matcher, command, updates)
