"""Helpers shared by CLI commands."""

import click

from claude_config_manager.context import ManagerContext
from claude_config_manager.models.artifact import ConflictStrategy, Scope

STRATEGY_CHOICE = click.Choice([strategy.value for strategy in ConflictStrategy])


def get_manager_context(ctx: click.Context) -> ManagerContext:
    """Get the ManagerContext stored on the root click context."""
    return ctx.find_root().obj["context"]


def scope_for(project_id: str | None) -> Scope:
    """Commands target a project when --project is given, the user otherwise."""
    return Scope.PROJECT if project_id else Scope.USER
