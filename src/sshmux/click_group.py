"""Custom Click group with automatic help display on errors.

This module provides a custom Click Group class that automatically
displays contextual help when syntax errors occur.
"""

from typing import Any

import click


class SshmuxGroup(click.Group):
    """Click group that shows the relevant help text on usage errors."""

    def invoke(self, ctx: click.Context) -> Any:
        """Invoke the subcommand, showing its help if it is called wrongly."""
        try:
            return super().invoke(ctx)
        except (
            click.exceptions.UsageError,
            click.exceptions.BadParameter,
            click.exceptions.MissingParameter,
        ) as e:
            click.echo(f"Error: {e.format_message()}", err=True)

            # Prefer the subcommand context so its own help is shown
            error_ctx = e.ctx if e.ctx else ctx
            click.echo("")
            click.echo(error_ctx.get_help())
            error_ctx.exit(e.exit_code)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        """Show help when the command is not found."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            click.echo(f"Error: No such command '{args[0]}'.", err=True)
            click.echo("")
            click.echo(ctx.get_help())
            ctx.exit(2)


__all__ = ["SshmuxGroup"]
