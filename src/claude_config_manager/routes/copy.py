"""HTTP route handlers for copying configuration artifacts."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from claude_config_manager.models.artifact import (
    AgentCopyRequest,
    CommandCopyRequest,
    HookCopyRequest,
    McpCopyRequest,
    SkillCopyRequest,
)
from claude_config_manager.routes.responses import copy_response, get_context
from claude_config_manager.services.copy_service import CopyService

router = APIRouter(prefix="/api/copy", tags=["copy"])


class CopyFileBody(BaseModel):
    """Request body for copying an agent or command file."""

    model_config = ConfigDict(populate_by_name=True)

    source_path: str = Field(default="", alias="sourcePath")
    target_scope: str = Field(default="", alias="targetScope")
    target_project_id: str | None = Field(default=None, alias="targetProjectId")
    conflict_strategy: str | None = Field(default=None, alias="conflictStrategy")


class CopySkillBody(BaseModel):
    """Request body for copying a skill directory."""

    model_config = ConfigDict(populate_by_name=True)

    source_skill_path: str = Field(default="", alias="sourceSkillPath")
    target_scope: str = Field(default="", alias="targetScope")
    target_project_id: str | None = Field(default=None, alias="targetProjectId")
    conflict_strategy: str | None = Field(default=None, alias="conflictStrategy")
    acknowledged_warnings: bool = Field(default=False, alias="acknowledgedWarnings")


class CopyHookBody(BaseModel):
    """Request body for merging a hook."""

    model_config = ConfigDict(populate_by_name=True)

    source_hook: dict[str, Any] = Field(default_factory=dict, alias="sourceHook")
    target_scope: str = Field(default="", alias="targetScope")
    target_project_id: str | None = Field(default=None, alias="targetProjectId")


class CopyMcpBody(BaseModel):
    """Request body for copying an MCP server."""

    model_config = ConfigDict(populate_by_name=True)

    source_server_name: str = Field(default="", alias="sourceServerName")
    source_mcp_config: dict[str, Any] = Field(default_factory=dict, alias="sourceMcpConfig")
    target_scope: str = Field(default="", alias="targetScope")
    target_project_id: str | None = Field(default=None, alias="targetProjectId")
    conflict_strategy: str | None = Field(default=None, alias="conflictStrategy")


def get_copy_service(request: Request) -> CopyService:
    return CopyService(get_context(request))


@router.post("/agent")
async def copy_agent(request: Request, body: CopyFileBody) -> JSONResponse:
    """Copy an agent to another scope."""
    result = await get_copy_service(request).copy(
        AgentCopyRequest(
            source_path=body.source_path,
            target_scope=body.target_scope,
            target_project_id=body.target_project_id,
            conflict_strategy=body.conflict_strategy,
        )
    )
    return copy_response(result)


@router.post("/command")
async def copy_command(request: Request, body: CopyFileBody) -> JSONResponse:
    """Copy a slash command to another scope."""
    result = await get_copy_service(request).copy(
        CommandCopyRequest(
            source_path=body.source_path,
            target_scope=body.target_scope,
            target_project_id=body.target_project_id,
            conflict_strategy=body.conflict_strategy,
        )
    )
    return copy_response(result)


@router.post("/skill")
async def copy_skill(request: Request, body: CopySkillBody) -> JSONResponse:
    """Copy a skill directory; returns 422 until external references are acknowledged."""
    result = await get_copy_service(request).copy(
        SkillCopyRequest(
            source_skill_path=body.source_skill_path,
            target_scope=body.target_scope,
            target_project_id=body.target_project_id,
            conflict_strategy=body.conflict_strategy,
            acknowledged_warnings=body.acknowledged_warnings,
        )
    )
    return copy_response(result)


@router.post("/hook")
async def copy_hook(request: Request, body: CopyHookBody) -> JSONResponse:
    """Merge a hook into the target settings.json."""
    result = await get_copy_service(request).copy(
        HookCopyRequest(
            source_hook=body.source_hook,
            target_scope=body.target_scope,
            target_project_id=body.target_project_id,
        )
    )
    return copy_response(result)


@router.post("/mcp")
async def copy_mcp(request: Request, body: CopyMcpBody) -> JSONResponse:
    """Copy an MCP server definition."""
    result = await get_copy_service(request).copy(
        McpCopyRequest(
            source_server_name=body.source_server_name,
            source_mcp_config=body.source_mcp_config,
            target_scope=body.target_scope,
            target_project_id=body.target_project_id,
            conflict_strategy=body.conflict_strategy,
        )
    )
    return copy_response(result)
