"""Shared helper functions for CLI commands.

Functions in this module should be:
- Side-effect minimal (construction and printing only)
- Reusable across multiple commands
"""

import logging
from functools import partial

import click

from sshmux.config_manager import SshmuxConfig
from sshmux.connection_orchestrator import ConnectionOrchestrator
from sshmux.modules.ssh_command_builder import build_ssh_command
from sshmux.session_inventory import SessionInventory
from sshmux.tmux_gateway import TmuxGateway

logger = logging.getLogger(__name__)


def build_gateway(config: SshmuxConfig) -> TmuxGateway:
    """Create a TmuxGateway using the configured binary and timeout."""
    return TmuxGateway(binary=config.tmux_binary, timeout=config.command_timeout)


def build_orchestrator(config: SshmuxConfig, gateway: TmuxGateway | None = None) -> ConnectionOrchestrator:
    """Create a ConnectionOrchestrator wired from configuration."""
    gateway = gateway or build_gateway(config)
    return ConnectionOrchestrator(
        gateway,
        SessionInventory(gateway),
        command_builder=partial(
            build_ssh_command,
            keepalive_interval=config.keepalive_interval,
            keepalive_count_max=config.keepalive_count_max,
        ),
        retry_on_name_conflict=config.retry_on_name_conflict,
        cleanup_on_failure=config.cleanup_on_failure,
    )


def print_manual_attach(session_name: str, binary: str = "tmux") -> None:
    """Explain how to attach by hand after automatic attach failed."""
    click.echo("Automatic attach failed (this can happen in non-TTY environments)")
    click.echo("To manually attach to your session, run:")
    click.echo(f"   {binary} attach-session -t {session_name}")


__all__ = ["build_gateway", "build_orchestrator", "print_manual_attach"]
