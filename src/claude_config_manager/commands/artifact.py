"""Agent, command and skill management commands."""

import json

import anyio
import click

from claude_config_manager.cli.output import machine_output, user_output
from claude_config_manager.commands.common import get_manager_context, scope_for
from claude_config_manager.error_boundary import cli_error_boundary
from claude_config_manager.services.artifact_service import DELETABLE_KINDS, ArtifactService

KIND_CHOICE = click.Choice([kind.value for kind in DELETABLE_KINDS])


@click.group(name="artifact")
def artifact_group() -> None:
    """Manage agents, commands and skills."""


@artifact_group.command(name="delete")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@click.option("--project", "project_id", help="Project id (defaults to the user scope)")
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@click.pass_context
@cli_error_boundary
def delete_artifact(
    ctx: click.Context, kind: str, name: str, project_id: str | None, as_json: bool
) -> None:
    """Delete an agent, command (NAME may be namespace/name) or skill."""
    service = ArtifactService(get_manager_context(ctx))
    result = anyio.run(service.delete_artifact, kind, scope_for(project_id), project_id, name)

    if as_json:
        machine_output(json.dumps(result.to_response(), indent=2))
        return

    user_output(click.style(f"✓ {result.message}", fg="green"))
    if result.references:
        user_output(click.style(f"The following files still mention {name}:", fg="yellow"))
        for reference in result.references:
            user_output(f"  - {reference}")


@artifact_group.command(name="references")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@click.option("--project", "project_id", help="Project id (defaults to the user scope)")
@click.pass_context
@cli_error_boundary
def show_references(ctx: click.Context, kind: str, name: str, project_id: str | None) -> None:
    """List files that mention an agent, command or skill."""
    service = ArtifactService(get_manager_context(ctx))
    references = anyio.run(service.find_references, kind, scope_for(project_id), project_id, name)

    if not references:
        user_output(f"No references to {name}")
        return
    for reference in references:
        user_output(reference.describe())
