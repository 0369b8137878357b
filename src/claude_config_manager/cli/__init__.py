import logging

import click

from claude_config_manager.cli.output import user_output
from claude_config_manager.config import ServerConfig
from claude_config_manager.context import ManagerContext
from claude_config_manager.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

# Track whether commands are registered
_commands_registered = False


class LazyGroup(click.Group):
    """Click Group that lazily loads commands."""

    def list_commands(self, ctx):
        """List available commands, registering them if needed."""
        if not _commands_registered:
            _register_commands()
        return super().list_commands(ctx)

    def get_command(self, ctx, cmd_name):
        """Get a command by name, registering if needed."""
        if not _commands_registered:
            _register_commands()
        return super().get_command(ctx, cmd_name)


@click.command(cls=LazyGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Show full stack traces and debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Copy and manage Claude Code configuration across projects."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Tests inject their own context through obj
    if "context" not in ctx.obj:
        ctx.obj["context"] = ManagerContext.from_config(ServerConfig.from_env())

    if ctx.invoked_subcommand is None:
        user_output(ctx.get_help())


def _register_commands() -> None:
    """Register all commands with the CLI group."""
    global _commands_registered

    if _commands_registered:
        return

    from claude_config_manager.commands.artifact import artifact_group
    from claude_config_manager.commands.copy import copy_group
    from claude_config_manager.commands.hook import hook_group
    from claude_config_manager.commands.mcp import mcp_group
    from claude_config_manager.commands.projects import projects
    from claude_config_manager.commands.serve import serve

    cli.add_command(serve)
    cli.add_command(projects)

    # Register command groups
    cli.add_command(artifact_group)
    cli.add_command(copy_group)
    cli.add_command(hook_group)
    cli.add_command(mcp_group)

    _commands_registered = True


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
