"""Tests for FakeProjectRegistry."""

from pathlib import Path

from claude_config_manager.integrations.project_registry import FakeProjectRegistry
from claude_config_manager.models.project import project_id_from_path


def test_project_id_from_path() -> None:
    assert project_id_from_path("/home/user/my-project") == "homeusermyproject"


class TestFakeProjectRegistry:
    """Tests for FakeProjectRegistry."""

    async def test_get_registered_project(self, tmp_path: Path) -> None:
        """A registered project can be looked up by id."""
        registry = FakeProjectRegistry()
        project_id = registry.register(tmp_path)

        project = await registry.get_project(project_id)

        assert project is not None
        assert project.path == tmp_path
        assert project.name == tmp_path.name
        assert project.exists

    async def test_get_unknown_project(self) -> None:
        """Unknown ids return None and are recorded."""
        registry = FakeProjectRegistry()

        assert await registry.get_project("nope") is None
        assert registry.lookups == ["nope"]

    async def test_exists_reflects_disk(self, tmp_path: Path) -> None:
        """Removing the directory after registration is visible."""
        project_dir = tmp_path / "gone"
        project_dir.mkdir()
        registry = FakeProjectRegistry(project_paths=[project_dir])
        project_dir.rmdir()

        projects = await registry.list_projects()

        assert len(projects) == 1
        assert not projects[0].exists
