"""Run the HTTP API server."""

from dataclasses import replace

import click

from claude_config_manager.config import ServerConfig
from claude_config_manager.main import run


@click.command(name="serve")
@click.option("--host", help="Bind address (default: CLAUDE_CONFIG_HOST or 127.0.0.1)")
@click.option("--port", type=int, help="Port (default: CLAUDE_CONFIG_PORT or 8420)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Start the configuration API server."""
    config = ServerConfig.from_env()
    if host is not None:
        config = replace(config, host=host)
    if port is not None:
        config = replace(config, port=port)
    if ctx.find_root().obj.get("debug"):
        config = replace(config, debug=True)
    run(config)
