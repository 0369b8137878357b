"""MCP server management commands."""

import json

import anyio
import click

from claude_config_manager.cli.output import machine_output, user_output
from claude_config_manager.commands.common import get_manager_context, scope_for
from claude_config_manager.error_boundary import cli_error_boundary
from claude_config_manager.services.mcp_service import McpService


@click.group(name="mcp")
def mcp_group() -> None:
    """Manage MCP servers."""


@mcp_group.command(name="delete")
@click.argument("name")
@click.option("--project", "project_id", help="Project id (defaults to the user scope)")
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@click.pass_context
@cli_error_boundary
def delete_server(ctx: click.Context, name: str, project_id: str | None, as_json: bool) -> None:
    """Delete an MCP server."""
    service = McpService(get_manager_context(ctx))
    if project_id:
        result = anyio.run(service.delete_project_mcp_server, project_id, name)
    else:
        result = anyio.run(service.delete_user_mcp_server, name)

    if as_json:
        machine_output(json.dumps(result.to_response(), indent=2))
        return

    user_output(click.style(f"✓ {result.message}", fg="green"))
    if result.references:
        user_output(click.style("The following entries still refer to this server:", fg="yellow"))
        for reference in result.references:
            user_output(f"  - {reference}")


@mcp_group.command(name="update")
@click.argument("name")
@click.argument("updates_json")
@click.option("--project", "project_id", help="Project id (defaults to the user scope)")
@click.pass_context
@cli_error_boundary
def update_server(
    ctx: click.Context, name: str, updates_json: str, project_id: str | None
) -> None:
    """Update fields of an MCP server (JSON object; "name" renames it)."""
    try:
        updates = json.loads(updates_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="UPDATES_JSON") from e

    service = McpService(get_manager_context(ctx))
    result = anyio.run(
        service.update_mcp_server, scope_for(project_id), project_id, name, updates
    )
    user_output(click.style(f"✓ {result.message}", fg="green"))
    user_output(f"  {result.file_path}")
