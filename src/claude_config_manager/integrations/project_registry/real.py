"""Project registry backed by ~/.claude.json."""

import asyncio
import logging
from pathlib import Path

from claude_config_manager.errors import ConfigManagerError
from claude_config_manager.integrations.project_registry.abc import ProjectRegistry
from claude_config_manager.io.json_document import load_json_document
from claude_config_manager.models.project import Project, project_id_from_path

logger = logging.getLogger(__name__)


class RealProjectRegistry(ProjectRegistry):
    """Production registry reading the ``projects`` key of ~/.claude.json.

    The file is re-read on every call; Claude Code updates it while running.
    """

    def __init__(self, claude_json_path: Path, home: Path) -> None:
        """Create RealProjectRegistry.

        Args:
            claude_json_path: Path to ~/.claude.json
            home: Home directory used to expand ``~`` in registered paths
        """
        self._claude_json_path = claude_json_path
        self._home = home

    def _expand(self, raw_path: str) -> Path:
        if raw_path == "~" or raw_path.startswith("~/"):
            return self._home / raw_path[2:]
        return Path(raw_path)

    def _load_projects(self) -> list[Project]:
        try:
            document = load_json_document(self._claude_json_path, label="project registry")
        except ConfigManagerError as e:
            logger.warning("Could not read project registry: %s", e.message)
            return []

        registered = document.get("projects")
        if not isinstance(registered, dict):
            return []

        projects: list[Project] = []
        for raw_path, config in registered.items():
            path = self._expand(raw_path)
            projects.append(
                Project(
                    id=project_id_from_path(path),
                    path=path,
                    name=path.name,
                    exists=path.is_dir(),
                    config=config if isinstance(config, dict) else None,
                )
            )
        return projects

    async def list_projects(self) -> list[Project]:
        return await asyncio.to_thread(self._load_projects)

    async def get_project(self, project_id: str) -> Project | None:
        for project in await self.list_projects():
            if project.id == project_id:
                return project
        return None
