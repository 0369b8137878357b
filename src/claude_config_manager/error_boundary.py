"""Error boundary handling for CLI commands.

This module provides a decorator to catch well-known exceptions at CLI entry
points and display clean error messages without stack traces.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from claude_config_manager.errors import ConfigManagerError

T = TypeVar("T", bound=Callable[..., Any])


def _debug_enabled() -> bool:
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    obj = ctx.find_root().obj
    return isinstance(obj, dict) and bool(obj.get("debug"))


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - ConfigManagerError: Validation, security, not-found, conflict,
          filesystem and parse errors (details are printed one per line)
        - PermissionError: Permission denied errors

    With ``--debug`` the exception propagates with its full stack trace.
    All other exceptions bubble up normally.

    Example:
        @click.command()
        @cli_error_boundary
        def my_command():
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigManagerError as e:
            if _debug_enabled():
                raise
            click.echo(f"Error: {e.message}", err=True)
            for detail in e.details or []:
                click.echo(f"  - {detail}", err=True)
            raise SystemExit(1) from None
        except PermissionError as e:
            if _debug_enabled():
                raise
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
