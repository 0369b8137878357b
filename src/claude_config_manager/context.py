"""Manager context for dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from claude_config_manager.config import ServerConfig
from claude_config_manager.integrations.project_registry.abc import ProjectRegistry
from claude_config_manager.integrations.project_registry.fake import FakeProjectRegistry
from claude_config_manager.integrations.project_registry.real import RealProjectRegistry
from claude_config_manager.paths import ClaudePaths


@dataclass(frozen=True)
class ManagerContext:
    """Context containing all dependencies of the configuration services.

    This is a frozen dataclass that holds the path layout and the project
    registry. Use from_config() in production and for_test() in tests.
    """

    paths: ClaudePaths
    project_registry: ProjectRegistry
    debug: bool = False

    @classmethod
    def from_config(cls, config: ServerConfig) -> "ManagerContext":
        """Create a production context backed by ~/.claude.json."""
        paths = ClaudePaths(home=config.home, dev_mode=config.dev_paths)
        return cls(
            paths=paths,
            project_registry=RealProjectRegistry(paths.user_claude_json(), home=config.home),
            debug=config.debug,
        )

    @classmethod
    def for_test(
        cls,
        *,
        home: Path,
        projects: list[Path] | None = None,
        dev_mode: bool = False,
    ) -> "ManagerContext":
        """Create a test context with a fake project registry.

        Args:
            home: Directory standing in for the user's home
            projects: Project directories to register
            dev_mode: Use ``.claude-dev`` naming

        Returns:
            ManagerContext with fake implementations
        """
        return cls(
            paths=ClaudePaths(home=home, dev_mode=dev_mode),
            project_registry=FakeProjectRegistry(project_paths=projects),
        )
