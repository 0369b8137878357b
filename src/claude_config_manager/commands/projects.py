"""List registered projects."""

import json

import anyio
import click
from rich.console import Console
from rich.table import Table

from claude_config_manager.cli.output import machine_output, user_output
from claude_config_manager.commands.common import get_manager_context


@click.command(name="projects")
@click.option("--json", "as_json", is_flag=True, help="Output projects as JSON")
@click.pass_context
def projects(ctx: click.Context, as_json: bool) -> None:
    """List projects registered in ~/.claude.json and their ids."""
    registry = get_manager_context(ctx).project_registry
    registered = anyio.run(registry.list_projects)

    if as_json:
        machine_output(
            json.dumps(
                [
                    {"id": p.id, "name": p.name, "path": str(p.path), "exists": p.exists}
                    for p in registered
                ],
                indent=2,
            )
        )
        return

    if not registered:
        user_output("No projects registered.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("name", no_wrap=True)
    table.add_column("path")
    for project in registered:
        name = project.name if project.exists else f"[red]{project.name} (missing)[/red]"
        table.add_row(project.id, name, str(project.path))
    Console(stderr=True).print(table)
