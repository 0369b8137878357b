"""HTTP route handlers for deleting agents, commands and skills."""

from enum import Enum

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from claude_config_manager.errors import ConfigManagerError
from claude_config_manager.models.artifact import ArtifactKind, Scope
from claude_config_manager.routes.responses import error_response, get_context
from claude_config_manager.services.artifact_service import ArtifactService

router = APIRouter(prefix="/api", tags=["artifacts"])


class ArtifactCollection(str, Enum):
    """URL segment naming a file-based artifact collection."""

    AGENTS = "agents"
    COMMANDS = "commands"
    SKILLS = "skills"

    @property
    def kind(self) -> ArtifactKind:
        return ArtifactKind(self.value.removesuffix("s"))


async def _delete(
    request: Request,
    collection: ArtifactCollection,
    scope: Scope,
    project_id: str | None,
    name: str,
) -> JSONResponse:
    try:
        result = await ArtifactService(get_context(request)).delete_artifact(
            collection.kind, scope, project_id, name
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(content=result.to_response())


async def _references(
    request: Request,
    collection: ArtifactCollection,
    scope: Scope,
    project_id: str | None,
    name: str,
) -> JSONResponse:
    try:
        references = await ArtifactService(get_context(request)).find_references(
            collection.kind, scope, project_id, name
        )
    except ConfigManagerError as err:
        return error_response(err)
    return JSONResponse(
        content={
            "success": True,
            "name": name,
            "references": [reference.to_response() for reference in references],
            "hasReferences": bool(references),
            "referenceCount": len(references),
        }
    )


@router.get("/projects/{project_id}/{collection}/{name:path}/references")
async def project_artifact_references(
    request: Request, project_id: str, collection: ArtifactCollection, name: str
) -> JSONResponse:
    """List project files that mention an agent, command or skill."""
    return await _references(request, collection, Scope.PROJECT, project_id, name)


@router.get("/user/{collection}/{name:path}/references")
async def user_artifact_references(
    request: Request, collection: ArtifactCollection, name: str
) -> JSONResponse:
    """List user files that mention an agent, command or skill."""
    return await _references(request, collection, Scope.USER, None, name)


@router.delete("/projects/{project_id}/{collection}/{name:path}")
async def delete_project_artifact(
    request: Request, project_id: str, collection: ArtifactCollection, name: str
) -> JSONResponse:
    """Delete a project agent, command or skill."""
    return await _delete(request, collection, Scope.PROJECT, project_id, name)


@router.delete("/user/{collection}/{name:path}")
async def delete_user_artifact(
    request: Request, collection: ArtifactCollection, name: str
) -> JSONResponse:
    """Delete a user agent, command or skill."""
    return await _delete(request, collection, Scope.USER, None, name)
