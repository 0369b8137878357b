"""Abstract base class for the project registry."""

from abc import ABC, abstractmethod

from claude_config_manager.models.project import Project


class ProjectRegistry(ABC):
    """Abstract interface for looking up registered projects.

    Implementations include:
    - FakeProjectRegistry: In-memory for testing
    - RealProjectRegistry: Reads the ``projects`` key of ~/.claude.json
    """

    @abstractmethod
    async def get_project(self, project_id: str) -> Project | None:
        """Get a project by ID.

        Args:
            project_id: Identifier derived from the project path

        Returns:
            The Project if registered, None otherwise
        """
        ...

    @abstractmethod
    async def list_projects(self) -> list[Project]:
        """List all registered projects, in registry order."""
        ...
