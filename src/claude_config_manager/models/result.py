"""Uniform results returned by copy and delete operations."""

import errno as errno_codes
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from claude_config_manager.errors import (
    ConfigManagerError,
    ConflictError,
    FileSystemError,
    NotFoundError,
    ParseError,
    SecurityError,
    ValidationError,
)

SKIPPED_MESSAGE = "Copy cancelled by user"


class ErrorKind(str, Enum):
    """Error category kept alongside a failed result for status mapping."""

    VALIDATION = "validation"
    SECURITY = "security"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERMISSION = "permission"
    NO_SPACE = "no_space"
    FILESYSTEM = "filesystem"
    PARSE = "parse"


def classify_error(error: ConfigManagerError) -> ErrorKind:
    """Map an exception onto its ErrorKind."""
    match error:
        case SecurityError():
            return ErrorKind.SECURITY
        case ValidationError():
            return ErrorKind.VALIDATION
        case NotFoundError():
            return ErrorKind.NOT_FOUND
        case ConflictError():
            return ErrorKind.CONFLICT
        case ParseError():
            return ErrorKind.PARSE
        case FileSystemError(errno=errno_codes.EACCES) | FileSystemError(errno=errno_codes.EPERM):
            return ErrorKind.PERMISSION
        case FileSystemError(errno=errno_codes.ENOSPC):
            return ErrorKind.NO_SPACE
        case _:
            return ErrorKind.FILESYSTEM


@dataclass(frozen=True)
class ConflictInfo:
    """Describes an existing artifact found at the copy target.

    File artifacts report both modification times; MCP entries report the
    existing server configuration instead.
    """

    target_path: str
    source_modified: str | None = None
    target_modified: str | None = None
    server_name: str | None = None
    existing_config: dict[str, Any] | None = None

    def to_response(self) -> dict[str, Any]:
        data: dict[str, Any] = {"targetPath": self.target_path}
        if self.source_modified is not None:
            data["sourceModified"] = self.source_modified
        if self.target_modified is not None:
            data["targetModified"] = self.target_modified
        if self.server_name is not None:
            data["serverName"] = self.server_name
        if self.existing_config is not None:
            data["existingConfig"] = self.existing_config
        return data


@dataclass(frozen=True)
class CopyResult:
    """Outcome of a copy operation.

    Exactly one of copied_path/merged_into, conflict, skipped or error is set.
    Use the named constructors rather than building instances directly.
    """

    success: bool
    message: str | None = None
    copied_path: str | None = None
    merged_into: str | None = None
    conflict: ConflictInfo | None = None
    skipped: bool = False
    error: str | None = None
    error_kind: ErrorKind | None = None
    details: list[str] | None = None
    hook: dict[str, str] | None = None
    server_name: str | None = None
    file_count: int | None = None
    dir_count: int | None = None
    warnings: list[str] | None = None
    external_references: list[dict[str, Any]] | None = None
    requires_acknowledgement: bool = False

    @staticmethod
    def copied(path: str, message: str, **extra: Any) -> "CopyResult":
        return CopyResult(success=True, copied_path=path, message=message, **extra)

    @staticmethod
    def merged(path: str, message: str, **extra: Any) -> "CopyResult":
        return CopyResult(success=True, merged_into=path, message=message, **extra)

    @staticmethod
    def conflicted(conflict: ConflictInfo) -> "CopyResult":
        return CopyResult(success=False, conflict=conflict)

    @staticmethod
    def cancelled() -> "CopyResult":
        return CopyResult(success=False, skipped=True, message=SKIPPED_MESSAGE)

    @staticmethod
    def needs_acknowledgement(references: list[dict[str, Any]]) -> "CopyResult":
        return CopyResult(
            success=False,
            external_references=references,
            requires_acknowledgement=True,
            message=(
                "Skill contains external file references. "
                "Please review and acknowledge before copying."
            ),
        )

    @staticmethod
    def failed(error: ConfigManagerError) -> "CopyResult":
        return CopyResult(
            success=False,
            error=error.message,
            error_kind=classify_error(error),
            details=error.details,
        )

    def to_response(self) -> dict[str, Any]:
        """Render the camelCase wire shape, omitting absent fields."""
        data: dict[str, Any] = {"success": self.success}
        if self.message is not None:
            data["message"] = self.message
        if self.copied_path is not None:
            data["copiedPath"] = self.copied_path
        if self.merged_into is not None:
            data["mergedInto"] = self.merged_into
        if self.conflict is not None:
            data["conflict"] = self.conflict.to_response()
        if self.skipped:
            data["skipped"] = True
        if self.error is not None:
            data["error"] = self.error
        if self.details:
            data["details"] = self.details
        if self.hook is not None:
            data["hook"] = self.hook
        if self.server_name is not None:
            data["serverName"] = self.server_name
        if self.file_count is not None:
            data["fileCount"] = self.file_count
        if self.dir_count is not None:
            data["dirCount"] = self.dir_count
        if self.warnings:
            data["warnings"] = self.warnings
        if self.external_references is not None:
            data["warnings"] = {"externalReferences": self.external_references}
        if self.requires_acknowledgement:
            data["requiresAcknowledgement"] = True
        return data


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete operation.

    ``references`` is None (omitted from responses) when nothing referenced
    the deleted item; it is never an empty list.
    """

    success: bool
    message: str
    file_path: str | None = None
    references: list[str] | None = field(default=None)

    def to_response(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.file_path is not None:
            data["filePath"] = self.file_path
        if self.references:
            data["references"] = self.references
        return data


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an MCP server update."""

    success: bool
    message: str
    server_name: str
    file_path: str
    server: dict[str, Any]

    def to_response(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "serverName": self.server_name,
            "filePath": self.file_path,
            "server": self.server,
        }


@dataclass(frozen=True)
class HookUpdateResult:
    """Outcome of a hook update."""

    success: bool
    message: str
    file_path: str
    event: str
    matcher: str
    hook: dict[str, Any]

    def to_response(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "filePath": self.file_path,
            "hook": {**self.hook, "event": self.event, "matcher": self.matcher},
        }
