"""Fake in-memory project registry for testing."""

from pathlib import Path

from claude_config_manager.integrations.project_registry.abc import ProjectRegistry
from claude_config_manager.models.project import Project, project_id_from_path


class FakeProjectRegistry(ProjectRegistry):
    """In-memory fake implementation for testing.

    Projects are registered by path; ``exists`` reflects the directory's
    state on disk at lookup time so tests can remove a project directory
    after registering it.
    """

    def __init__(self, project_paths: list[Path] | None = None) -> None:
        self._paths: dict[str, Path] = {}
        self._lookups: list[str] = []
        for path in project_paths or []:
            self.register(path)

    @property
    def lookups(self) -> list[str]:
        """Project ids requested so far, for test assertions."""
        return list(self._lookups)

    def register(self, project_path: Path) -> str:
        """Register a project directory and return its id."""
        project_id = project_id_from_path(project_path)
        self._paths[project_id] = project_path
        return project_id

    def _project(self, project_id: str, path: Path) -> Project:
        return Project(id=project_id, path=path, name=path.name, exists=path.is_dir())

    async def get_project(self, project_id: str) -> Project | None:
        self._lookups.append(project_id)
        if project_id not in self._paths:
            return None
        return self._project(project_id, self._paths[project_id])

    async def list_projects(self) -> list[Project]:
        return [self._project(pid, path) for pid, path in self._paths.items()]
