"""Shared response helpers for HTTP routes."""

from fastapi import Request
from fastapi.responses import JSONResponse

from claude_config_manager.context import ManagerContext
from claude_config_manager.errors import ConfigManagerError
from claude_config_manager.models.result import CopyResult, ErrorKind, classify_error

STATUS_BY_ERROR_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.SECURITY: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.PERMISSION: 403,
    ErrorKind.NO_SPACE: 507,
    ErrorKind.FILESYSTEM: 500,
    ErrorKind.PARSE: 500,
}


def get_context(request: Request) -> ManagerContext:
    """Get ManagerContext from application state."""
    return request.app.state.context


def copy_status(result: CopyResult) -> int:
    """HTTP status for a copy result."""
    if result.success:
        return 200
    if result.requires_acknowledgement:
        return 422
    if result.conflict is not None:
        return 409
    if result.skipped:
        return 200
    if result.error_kind is not None:
        return STATUS_BY_ERROR_KIND[result.error_kind]
    return 500


def copy_response(result: CopyResult) -> JSONResponse:
    return JSONResponse(status_code=copy_status(result), content=result.to_response())


def error_response(error: ConfigManagerError) -> JSONResponse:
    """Render a well-known error as ``{"success": false, "error": ...}``."""
    content: dict[str, object] = {"success": False, "error": error.message}
    if error.details:
        content["details"] = error.details
    return JSONResponse(
        status_code=STATUS_BY_ERROR_KIND[classify_error(error)],
        content=content,
    )
