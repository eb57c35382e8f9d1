"""Session management commands for sshmux.

This module provides commands to inspect and clean up live tmux sessions.

Commands:
    - list: Show live sessions with type, windows and status
    - kill: Terminate one session
    - cleanup: Terminate every live session (requires --force)
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sshmux.commands.cli_helpers import build_gateway
from sshmux.config_manager import ConfigError, ConfigManager
from sshmux.session_inventory import SessionInventory, format_activity, is_group_session
from sshmux.tmux_gateway import TmuxCommandError, TmuxError, TmuxUnavailableError

logger = logging.getLogger(__name__)

__all__ = ["session_group"]


def _open_inventory(config: str | None) -> SessionInventory:
    cfg = ConfigManager.load_config(config)
    gateway = build_gateway(cfg)
    if not gateway.is_available():
        raise TmuxUnavailableError(f"{cfg.tmux_binary} is not available on this system")
    return SessionInventory(gateway)


@click.group(name="sessions")
def session_group():
    """Manage live tmux sessions.

    View, list, and clean up tmux sessions created for SSH connections.

    \b
    Examples:
        sshmux sessions list              # List all live tmux sessions
        sshmux sessions kill <session>    # Kill a specific session
        sshmux sessions cleanup --force   # Kill every session
    """
    pass


@session_group.command(name="list")
@click.option("--config", help="Config file path", type=click.Path())
def list_sessions_command(config: str | None) -> None:
    """List all live tmux sessions.

    Shows individual server sessions and profile (group) sessions together
    with their window count, attachment status and last activity.
    """
    console = Console()

    try:
        inventory = _open_inventory(config)
        sessions = inventory.details()

        if not sessions:
            console.print("[yellow]No active tmux sessions found.[/yellow]")
            console.print(
                "[dim]Use 'sshmux connect <server>' or 'sshmux batch --profile <profile>' "
                "to create sessions.[/dim]"
            )
            return

        table = Table(title="tmux Sessions", show_header=True, header_style="bold")
        table.add_column("Session Name", style="cyan")
        table.add_column("Type")
        table.add_column("Windows", justify="right")
        table.add_column("Status")
        table.add_column("Last Activity", style="dim")

        for session in sessions:
            table.add_row(
                session.name,
                "Group" if is_group_session(session.name) else "Individual",
                str(session.windows),
                session.status,
                format_activity(session.activity),
            )

        console.print(table)
        console.print()
        console.print(f"[dim]Active sessions: {len(sessions)}[/dim]")
        console.print("[dim]Use 'sshmux sessions kill <session-name>' to terminate a session[/dim]")

    except (ConfigError, TmuxError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)


@session_group.command(name="kill")
@click.argument("session_name", type=str)
@click.option("--config", help="Config file path", type=click.Path())
def kill_command(session_name: str, config: str | None) -> None:
    """Kill a specific tmux session by name.

    This terminates the session and all windows within it, closing any
    SSH connections running there.

    \b
    Examples:
        sshmux sessions kill production-web
        sshmux sessions kill development
    """
    try:
        inventory = _open_inventory(config)

        if session_name not in inventory.snapshot():
            click.echo(f"Error: Session '{session_name}' not found", err=True)
            sys.exit(1)

        click.echo(f"Killing tmux session '{session_name}'...")
        inventory.gateway.kill_session(session_name)
        click.echo(f"Session '{session_name}' terminated successfully")

    except (ConfigError, TmuxError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@session_group.command(name="cleanup")
@click.option("--force", "-f", is_flag=True, help="Kill the sessions instead of only listing them")
@click.option("--config", help="Config file path", type=click.Path())
def cleanup_command(force: bool, config: str | None) -> None:
    """Clean up tmux sessions that may be left running.

    Without --force this only lists what would be terminated.
    Use with caution: this closes the SSH connections inside the sessions.
    """
    try:
        inventory = _open_inventory(config)
        sessions = inventory.snapshot()

        if not sessions:
            click.echo("No active tmux sessions found.")
            return

        click.echo(f"Found {len(sessions)} active tmux session(s):")
        for name in sessions:
            kind = "Group" if is_group_session(name) else "Individual"
            click.echo(f"   - {name} ({kind})")

        if not force:
            click.echo("\nSession cleanup will terminate all SSH connections in these sessions.")
            click.echo("Use 'sshmux sessions cleanup --force' to proceed with cleanup")
            return

        click.echo(f"\nTerminating {len(sessions)} session(s)...")
        terminated = 0
        for name in sessions:
            try:
                inventory.gateway.kill_session(name)
            except TmuxCommandError as e:
                click.echo(f"Failed to kill session '{name}': {e}", err=True)
                continue
            click.echo(f"Terminated session '{name}'")
            terminated += 1

        click.echo(f"\nCleanup complete: {terminated}/{len(sessions)} sessions terminated")

    except (ConfigError, TmuxError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
