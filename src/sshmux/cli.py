"""CLI entry point for sshmux.

Commands:
    sshmux connect <server>          # SSH to a server inside a tmux session
    sshmux batch --profile <name>    # One tmux window per server of a profile
    sshmux sessions list|kill|cleanup
    sshmux servers                   # Show configured servers and profiles
"""

import logging

import click

from sshmux import __version__
from sshmux.click_group import SshmuxGroup
from sshmux.commands import batch, connect, servers, session_group


@click.group(
    cls=SshmuxGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging (tmux calls)")
@click.pass_context
@click.version_option(version=__version__)
def main(ctx: click.Context, verbose: bool) -> None:
    """sshmux - SSH connections inside persistent tmux sessions.

    Every connection runs inside a tmux session, so it survives a closed
    terminal. Running the same connect again reattaches instead of opening
    a second connection.

    \b
    CONNECTION COMMANDS:
        connect       Connect to one server (session named after the server)
        batch         Connect to all servers of a profile (one window each)

    \b
    SESSION COMMANDS:
        sessions list     List live tmux sessions
        sessions kill     Kill one session
        sessions cleanup  Kill all sessions (with --force)

    \b
    CONFIGURATION:
        servers       List configured servers and profiles
        Config file: ~/.sshmux/config.toml (override with $SSHMUX_CONFIG_DIR)

    For help on any command: sshmux <command> --help
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


main.add_command(connect)
main.add_command(batch)
main.add_command(session_group)
main.add_command(servers)


if __name__ == "__main__":
    main()
