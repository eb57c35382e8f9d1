"""Command groups for sshmux CLI."""

from sshmux.commands.connect import batch, connect
from sshmux.commands.servers import servers
from sshmux.commands.sessions import session_group

__all__ = ["batch", "connect", "servers", "session_group"]
