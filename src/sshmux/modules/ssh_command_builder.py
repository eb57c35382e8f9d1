"""
SSH Command Builder Module

Build the ssh invocation typed into a tmux pane for a server.

Security Requirements:
- No credentials in the command (key path only, never passwords)
- Deterministic output for a given record
- No side effects (no file or network access)
"""

from sshmux.models.server_models import AuthType, ServerRecord

DEFAULT_SSH_PORT = 22
KEEPALIVE_INTERVAL = 60
KEEPALIVE_COUNT_MAX = 3


def build_ssh_command(
    server: ServerRecord,
    keepalive_interval: int = KEEPALIVE_INTERVAL,
    keepalive_count_max: int = KEEPALIVE_COUNT_MAX,
) -> str:
    """
    Build the ssh command line for a validated server record.

    The command always requests a pseudo-terminal (-t) so interactive
    programs behave inside the tmux pane, and always carries keep-alive
    options so idle panes keep their connection.

    Args:
        server: Server record (callers validate it first)
        keepalive_interval: ServerAliveInterval in seconds
        keepalive_count_max: ServerAliveCountMax

    Returns:
        str: Command line to send to the pane

    Example:
        >>> build_ssh_command(ServerRecord("web", "10.0.0.5", "deploy", port=2222,
        ...                                auth_type="password"))
        'ssh -t deploy@10.0.0.5 -p 2222 -o ServerAliveInterval=60 -o ServerAliveCountMax=3'
    """
    parts = ["ssh", "-t", f"{server.username}@{server.hostname}"]

    if server.port != DEFAULT_SSH_PORT:
        parts.extend(["-p", str(server.port)])

    if server.auth_type == AuthType.KEY and server.key_path:
        parts.extend(["-i", server.key_path])

    parts.extend(
        [
            "-o",
            f"ServerAliveInterval={keepalive_interval}",
            "-o",
            f"ServerAliveCountMax={keepalive_count_max}",
        ]
    )

    return " ".join(parts)


__all__ = ["DEFAULT_SSH_PORT", "KEEPALIVE_COUNT_MAX", "KEEPALIVE_INTERVAL", "build_ssh_command"]
