"""Server listing command for sshmux CLI."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sshmux.config_manager import ConfigError, ConfigManager

__all__ = ["servers"]


@click.command(name="servers")
@click.option("--config", help="Config file path", type=click.Path())
def servers(config: str | None) -> None:
    """List configured servers and profiles.

    Servers and profiles are read from ~/.sshmux/config.toml (or
    $SSHMUX_CONFIG_DIR/config.toml).
    """
    console = Console()

    try:
        cfg = ConfigManager.load_config(config)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if not cfg.servers:
        console.print("[yellow]No servers configured.[/yellow]")
        config_path = ConfigManager.get_config_path(config)
        console.print(f"[dim]Add {escape('[[servers]]')} entries to {config_path}[/dim]")
        return

    table = Table(title="Servers", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Address")
    table.add_column("Auth")
    table.add_column("Key", style="dim")

    for server in cfg.servers:
        table.add_row(
            server.name,
            f"{server.username}@{server.hostname}:{server.port}",
            str(server.auth_type),
            server.key_path or "-",
        )
    console.print(table)

    if cfg.profiles:
        profiles = Table(title="Profiles", show_header=True, header_style="bold")
        profiles.add_column("Profile", style="cyan")
        profiles.add_column("Servers (window order)")
        for name, members in cfg.profiles.items():
            profiles.add_row(name, ", ".join(members))
        console.print(profiles)
