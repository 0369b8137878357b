"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from claude_config_manager.config import ServerConfig
from claude_config_manager.context import ManagerContext
from claude_config_manager.routes.artifacts import router as artifacts_router
from claude_config_manager.routes.copy import router as copy_router
from claude_config_manager.routes.hooks import router as hooks_router
from claude_config_manager.routes.mcp import router as mcp_router
from claude_config_manager.version import __version__

TITLE = "Claude Config Manager"
DESCRIPTION = "Copy and manage Claude Code agents, commands, skills, hooks and MCP servers"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler.

    Creates the production context from environment configuration on startup.
    """
    app.state.context = ManagerContext.from_config(ServerConfig.from_env())
    yield


def create_app(context: ManagerContext | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        context: Optional ManagerContext for testing. If None, uses lifespan
                 to create production context.

    Returns:
        Configured FastAPI application
    """
    if context is not None:
        app = FastAPI(title=TITLE, description=DESCRIPTION, version=__version__)
        app.state.context = context
    else:
        app = FastAPI(title=TITLE, description=DESCRIPTION, version=__version__, lifespan=lifespan)

    # Local UI only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(copy_router)
    app.include_router(mcp_router)
    app.include_router(hooks_router)
    # Catch-all collection paths; registered last so /mcp/ routes match first.
    app.include_router(artifacts_router)

    return app


def run(config: ServerConfig | None = None) -> None:
    """Run the server."""
    config = config or ServerConfig.from_env()
    uvicorn.run(
        create_app(ManagerContext.from_config(config)),
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    run()
