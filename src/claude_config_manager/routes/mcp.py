"""HTTP route handlers for updating and deleting MCP servers."""

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from claude_config_manager.errors import ConfigManagerError
from claude_config_manager.models.artifact import Scope
from claude_config_manager.routes.responses import error_response, get_context
from claude_config_manager.services.mcp_service import McpService

router = APIRouter(prefix="/api", tags=["mcp"])


def get_mcp_service(request: Request) -> McpService:
    return McpService(get_context(request))


@router.put("/projects/{project_id}/mcp/{server_name}")
async def update_project_mcp_server(
    request: Request,
    project_id: str,
    server_name: str,
    updates: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Update a project MCP server."""
    try:
        result = await get_mcp_service(request).update_mcp_server(
            Scope.PROJECT, project_id, server_name, updates
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())


@router.put("/user/mcp/{server_name}")
async def update_user_mcp_server(
    request: Request,
    server_name: str,
    updates: dict[str, Any] = Body(...),
) -> JSONResponse:
    """Update a user MCP server."""
    try:
        result = await get_mcp_service(request).update_mcp_server(
            Scope.USER, None, server_name, updates
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())


@router.delete("/projects/{project_id}/mcp/{server_name}")
async def delete_project_mcp_server(
    request: Request, project_id: str, server_name: str
) -> JSONResponse:
    """Delete a project MCP server, reporting hooks and permissions that refer to it."""
    try:
        result = await get_mcp_service(request).delete_project_mcp_server(
            project_id, server_name
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())


@router.delete("/user/mcp/{server_name}")
async def delete_user_mcp_server(request: Request, server_name: str) -> JSONResponse:
    """Delete a user MCP server."""
    try:
        result = await get_mcp_service(request).delete_user_mcp_server(server_name)
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())
