"""Hook management commands."""

import json

import anyio
import click

from claude_config_manager.cli.output import user_output
from claude_config_manager.commands.common import get_manager_context, scope_for
from claude_config_manager.error_boundary import cli_error_boundary
from claude_config_manager.hooks.events import VALID_HOOK_EVENTS
from claude_config_manager.services.hook_service import HookService


@click.group(name="hook")
def hook_group() -> None:
    """Manage hooks in settings.json."""


@hook_group.command(name="delete")
@click.option("--event", required=True, type=click.Choice(VALID_HOOK_EVENTS))
@click.option("--command", "hook_command", required=True)
@click.option("--matcher", help="Tool matcher (omit for all tools)")
@click.option("--project", "project_id", help="Project id (defaults to the user scope)")
@click.pass_context
@cli_error_boundary
def delete_hook(
    ctx: click.Context,
    event: str,
    hook_command: str,
    matcher: str | None,
    project_id: str | None,
) -> None:
    """Delete a hook command."""
    service = HookService(get_manager_context(ctx))
    result = anyio.run(
        service.delete_hook, scope_for(project_id), project_id, event, matcher, hook_command
    )
    user_output(click.style(f"✓ {result.message}", fg="green"))


@hook_group.command(name="update")
@click.argument("updates_json")
@click.option("--event", required=True, type=click.Choice(VALID_HOOK_EVENTS))
@click.option("--command", "hook_command", required=True)
@click.option("--matcher", help="Tool matcher (omit for all tools)")
@click.option("--project", "project_id", help="Project id (defaults to the user scope)")
@click.pass_context
@cli_error_boundary
def update_hook(
    ctx: click.Context,
    updates_json: str,
    event: str,
    hook_command: str,
    matcher: str | None,
    project_id: str | None,
) -> None:
    """Update fields of a hook command (JSON object, e.g. '{"timeout": 30}')."""
    try:
        updates = json.loads(updates_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="UPDATES_JSON") from e

    service = HookService(get_manager_context(ctx))
    result = anyio.run(
        service.update_hook,
        scope_for(project_id),
        project_id,
        event,
        matcher,
        hook_command,
        updates,
    )
    user_output(click.style(f"✓ {result.message}", fg="green"))
    user_output(f"  {result.file_path}")
