"""Connection commands for sshmux CLI.

This module provides the commands that open SSH connections inside tmux:
    - connect: One server, one session
    - batch: One profile, one session with a window per server
"""

import logging
import sys

import click

from sshmux.commands.cli_helpers import build_orchestrator, print_manual_attach
from sshmux.config_manager import ConfigError, ConfigManager
from sshmux.connection_orchestrator import ConnectionOrchestratorError
from sshmux.models.server_models import ServerValidationError
from sshmux.tmux_gateway import TmuxAttachError, TmuxError

logger = logging.getLogger(__name__)

__all__ = ["batch", "connect"]


@click.command(name="connect")
@click.argument("server_name", type=str)
@click.option("--config", help="Config file path", type=click.Path())
@click.option("--no-attach", is_flag=True, help="Create the session but do not attach to it")
def connect(server_name: str, config: str | None, no_attach: bool) -> None:
    """Connect to a server via SSH in a tmux session.

    Creates a tmux session named after the server and starts ssh in it, or
    reuses the session if it is still running from an earlier connect.
    Dots in server names become underscores (tmux does the same).

    \b
    Examples:
        sshmux connect production-api
        sshmux connect cloudcrafters.cloud    # session: cloudcrafters_cloud
        sshmux connect staging-db --no-attach
    """
    try:
        cfg = ConfigManager.load_config(config)
        server = ConfigManager.get_server(cfg, server_name)
        orchestrator = build_orchestrator(cfg)

        click.echo(
            f"Connecting to {server.name} ({server.username}@{server.hostname}:{server.port})..."
        )
        result = orchestrator.connect_to_server(server)

        if result.was_existing:
            click.echo(f"Found existing tmux session: {result.session_name}")
            click.echo("Reattaching to existing session")
        else:
            click.echo(f"Created tmux session: {result.session_name}")
            click.echo("SSH command sent to session")

        if no_attach:
            click.echo(f"Session {result.session_name} is ready for connection!")
            return

        try:
            orchestrator.attach(result.session_name)
        except TmuxAttachError as e:
            logger.debug(f"Attach failed: {e}")
            print_manual_attach(result.session_name, cfg.tmux_binary)
            click.echo(f"Session {result.session_name} is ready for connection!")
            return

        click.echo(f"Connected to {server.name} successfully!")

    except (ConfigError, ServerValidationError, TmuxError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled")
        sys.exit(130)


@click.command(name="batch")
@click.option("--profile", "-p", "profile_name", required=True, help="Profile to connect to")
@click.option("--config", help="Config file path", type=click.Path())
@click.option("--no-attach", is_flag=True, help="Create the session but do not attach to it")
def batch(profile_name: str, config: str | None, no_attach: bool) -> None:
    """Connect to every server of a profile in one tmux session.

    Window N of the session runs server N of the profile, in the order the
    profile lists them. Running batch again for the same profile reuses the
    session instead of opening a second one.

    \b
    Examples:
        sshmux batch --profile development
        sshmux batch -p staging --no-attach
    """
    try:
        cfg = ConfigManager.load_config(config)
        servers = ConfigManager.get_profile_servers(cfg, profile_name)
        orchestrator = build_orchestrator(cfg)

        click.echo(
            f"Creating group session for profile '{profile_name}' with {len(servers)} server(s)..."
        )
        result = orchestrator.connect_to_profile(profile_name, servers)

        if result.was_existing:
            click.echo(f"Found existing group session: {result.session_name}")
            click.echo("Reattaching to existing session")
        else:
            click.echo(f"Created group session: {result.session_name}")
            for index, server in enumerate(servers):
                click.echo(
                    f"   Window {index}: {server.name} "
                    f"({server.username}@{server.hostname}:{server.port})"
                )

        if no_attach:
            click.echo(f"Group session {result.session_name} is ready!")
            return

        try:
            orchestrator.attach(result.session_name)
        except TmuxAttachError as e:
            logger.debug(f"Attach failed: {e}")
            print_manual_attach(result.session_name, cfg.tmux_binary)
            click.echo("To switch between windows, use Ctrl+b then the window number")
            click.echo(f"Group session {result.session_name} is ready!")
            return

        click.echo(f"Connected to profile '{profile_name}' group session successfully!")

    except (ConfigError, ConnectionOrchestratorError, ServerValidationError, TmuxError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled")
        sys.exit(130)
