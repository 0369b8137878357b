"""Copy commands: agents, commands, skills, hooks and MCP servers."""

import json

import anyio
import click
from rich.console import Console
from rich.table import Table

from claude_config_manager.cli.output import machine_output, user_output
from claude_config_manager.commands.common import (
    STRATEGY_CHOICE,
    get_manager_context,
    scope_for,
)
from claude_config_manager.error_boundary import cli_error_boundary
from claude_config_manager.hooks.events import VALID_HOOK_EVENTS
from claude_config_manager.models.artifact import (
    AgentCopyRequest,
    CommandCopyRequest,
    CopyRequest,
    HookCopyRequest,
    McpCopyRequest,
    SkillCopyRequest,
)
from claude_config_manager.models.result import CopyResult
from claude_config_manager.services.copy_service import CopyService

project_option = click.option(
    "--project",
    "project_id",
    help="Target project id (defaults to the user scope)",
)
strategy_option = click.option(
    "--strategy",
    "conflict_strategy",
    type=STRATEGY_CHOICE,
    help="What to do if the target already exists",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Output result as JSON")


def _show_external_references(result: CopyResult) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("line", justify="right")
    table.add_column("reference", style="cyan")
    table.add_column("type")
    table.add_column("severity")
    for ref in result.external_references or []:
        style = "red" if ref["severity"] == "error" else "yellow"
        table.add_row(
            str(ref["line"]),
            ref["reference"],
            ref["type"],
            f"[{style}]{ref['severity']}[/{style}]",
        )
    Console(stderr=True).print(table)


def _report(result: CopyResult, as_json: bool) -> None:
    """Print a copy result and exit non-zero unless it succeeded or was skipped."""
    if as_json:
        machine_output(json.dumps(result.to_response(), indent=2))
    elif result.success:
        user_output(click.style(f"✓ {result.message}", fg="green"))
        user_output(f"  {result.copied_path or result.merged_into}")
        for warning in result.warnings or []:
            user_output(click.style(f"  ! {warning}", fg="yellow"))
    elif result.requires_acknowledgement:
        user_output(click.style(result.message or "", fg="yellow"))
        _show_external_references(result)
        user_output("Re-run with --acknowledge to copy anyway.")
    elif result.conflict is not None:
        user_output(f"Conflict: {result.conflict.target_path} already exists")
        if result.conflict.target_modified is not None:
            user_output(f"  source modified: {result.conflict.source_modified}")
            user_output(f"  target modified: {result.conflict.target_modified}")
        user_output("Re-run with --strategy skip, overwrite or rename.")
    elif result.skipped:
        user_output(result.message or "")
    else:
        user_output(f"Error: {result.error}")
        for detail in result.details or []:
            user_output(f"  - {detail}")

    if not result.success and not result.skipped:
        raise SystemExit(1)


def _copy(ctx: click.Context, request: CopyRequest) -> CopyResult:
    service = CopyService(get_manager_context(ctx))
    return anyio.run(service.copy, request)


@click.group(name="copy")
def copy_group() -> None:
    """Copy configuration into a project or the user scope."""


@copy_group.command(name="agent")
@click.argument("source", type=click.Path(dir_okay=False))
@project_option
@strategy_option
@json_option
@click.pass_context
@cli_error_boundary
def copy_agent(
    ctx: click.Context,
    source: str,
    project_id: str | None,
    conflict_strategy: str | None,
    as_json: bool,
) -> None:
    """Copy an agent file."""
    request = AgentCopyRequest(
        source_path=source,
        target_scope=scope_for(project_id),
        target_project_id=project_id,
        conflict_strategy=conflict_strategy,
    )
    _report(_copy(ctx, request), as_json)


@copy_group.command(name="command")
@click.argument("source", type=click.Path(dir_okay=False))
@project_option
@strategy_option
@json_option
@click.pass_context
@cli_error_boundary
def copy_command(
    ctx: click.Context,
    source: str,
    project_id: str | None,
    conflict_strategy: str | None,
    as_json: bool,
) -> None:
    """Copy a slash command, keeping its namespace directories."""
    request = CommandCopyRequest(
        source_path=source,
        target_scope=scope_for(project_id),
        target_project_id=project_id,
        conflict_strategy=conflict_strategy,
    )
    _report(_copy(ctx, request), as_json)


@copy_group.command(name="skill")
@click.argument("source", type=click.Path(file_okay=False))
@project_option
@strategy_option
@click.option(
    "--acknowledge",
    is_flag=True,
    help="Copy even if SKILL.md references files outside the skill",
)
@json_option
@click.pass_context
@cli_error_boundary
def copy_skill(
    ctx: click.Context,
    source: str,
    project_id: str | None,
    conflict_strategy: str | None,
    acknowledge: bool,
    as_json: bool,
) -> None:
    """Copy a skill directory."""
    request = SkillCopyRequest(
        source_skill_path=source,
        target_scope=scope_for(project_id),
        target_project_id=project_id,
        conflict_strategy=conflict_strategy,
        acknowledged_warnings=acknowledge,
    )
    _report(_copy(ctx, request), as_json)


@copy_group.command(name="hook")
@click.option("--event", required=True, type=click.Choice(VALID_HOOK_EVENTS))
@click.option("--command", "hook_command", required=True, help="Shell command to run")
@click.option("--matcher", help="Tool matcher (PreToolUse/PostToolUse only)")
@click.option("--timeout", type=int, help="Timeout in seconds (default 60)")
@click.option("--disabled", is_flag=True, help="Store the hook disabled")
@project_option
@json_option
@click.pass_context
@cli_error_boundary
def copy_hook(
    ctx: click.Context,
    event: str,
    hook_command: str,
    matcher: str | None,
    timeout: int | None,
    disabled: bool,
    project_id: str | None,
    as_json: bool,
) -> None:
    """Merge a hook into settings.json."""
    hook: dict[str, object] = {"event": event, "command": hook_command}
    if matcher is not None:
        hook["matcher"] = matcher
    if timeout is not None:
        hook["timeout"] = timeout
    if disabled:
        hook["enabled"] = False

    request = HookCopyRequest(
        source_hook=hook,
        target_scope=scope_for(project_id),
        target_project_id=project_id,
    )
    _report(_copy(ctx, request), as_json)


@copy_group.command(name="mcp")
@click.argument("name")
@click.argument("config_json")
@project_option
@click.option(
    "--strategy",
    "conflict_strategy",
    type=click.Choice(["skip", "overwrite"]),
    help="What to do if the server already exists",
)
@json_option
@click.pass_context
@cli_error_boundary
def copy_mcp(
    ctx: click.Context,
    name: str,
    config_json: str,
    project_id: str | None,
    conflict_strategy: str | None,
    as_json: bool,
) -> None:
    """Copy an MCP server definition given as a JSON object.

    Example: claude-config copy mcp github '{"command": "npx", "args": ["gh-mcp"]}'
    """
    try:
        config = json.loads(config_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="CONFIG_JSON") from e

    request = McpCopyRequest(
        source_server_name=name,
        source_mcp_config=config,
        target_scope=scope_for(project_id),
        target_project_id=project_id,
        conflict_strategy=conflict_strategy,
    )
    _report(_copy(ctx, request), as_json)
