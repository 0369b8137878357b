"""Exception taxonomy for configuration operations.

Every error carries a human-readable message. Multi-field validators attach
the individual rule violations in ``details``.
"""


class ConfigManagerError(Exception):
    """Base class for well-known configuration errors."""

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(ConfigManagerError):
    """Malformed or missing required field, or unknown enum value."""


class SecurityError(ConfigManagerError):
    """Path traversal, null bytes, or a target escaping its base directory."""


class NotFoundError(ConfigManagerError):
    """Project, server, hook or file is absent."""


class ConflictError(ConfigManagerError):
    """Duplicate identity on rename.

    Distinct from the copy-conflict workflow, which reports conflicts as
    results rather than errors.
    """


class FileSystemError(ConfigManagerError):
    """I/O failure while reading, writing or renaming."""

    def __init__(
        self,
        message: str,
        details: list[str] | None = None,
        errno: int | None = None,
    ) -> None:
        super().__init__(message, details)
        self.errno = errno


class ParseError(ConfigManagerError):
    """Malformed JSON or YAML."""


class CopyCancelled(Exception):
    """Raised when the caller chose the ``skip`` conflict strategy."""

    def __init__(self) -> None:
        super().__init__("Copy cancelled by user")
