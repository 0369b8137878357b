"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from claude_config_manager.context import ManagerContext
from claude_config_manager.main import create_app
from claude_config_manager.models.project import project_id_from_path
from claude_config_manager.services.artifact_service import ArtifactService
from claude_config_manager.services.copy_service import CopyService
from claude_config_manager.services.hook_service import HookService
from claude_config_manager.services.mcp_service import McpService

AGENT_CONTENT = "---\nname: reviewer\ndescription: Reviews code\n---\n\nYou review code.\n"


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Directory standing in for the user's home."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A registered project directory."""
    path = tmp_path / "work" / "myproject"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def project_id(project_dir: Path) -> str:
    return project_id_from_path(project_dir)


@pytest.fixture
def manager_context(home: Path, project_dir: Path) -> ManagerContext:
    """Create a ManagerContext with a fake project registry."""
    return ManagerContext.for_test(home=home, projects=[project_dir])


@pytest.fixture
def copy_service(manager_context: ManagerContext) -> CopyService:
    return CopyService(manager_context)


@pytest.fixture
def mcp_service(manager_context: ManagerContext) -> McpService:
    return McpService(manager_context)


@pytest.fixture
def artifact_service(manager_context: ManagerContext) -> ArtifactService:
    return ArtifactService(manager_context)


@pytest.fixture
def hook_service(manager_context: ManagerContext) -> HookService:
    return HookService(manager_context)


@pytest.fixture
def agent_file(tmp_path: Path) -> Path:
    """An agent Markdown file outside both scopes."""
    path = tmp_path / "source" / ".claude" / "agents" / "reviewer.md"
    path.parent.mkdir(parents=True)
    path.write_text(AGENT_CONTENT, encoding="utf-8")
    return path


@pytest.fixture
async def async_client(manager_context: ManagerContext) -> AsyncGenerator[AsyncClient]:
    """Create an async test client bound to the test context."""
    app = create_app(context=manager_context)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
