"""Session inventory module.

Read-only view of the sessions tmux currently reports. Nothing is cached:
tmux is shared state that other terminals and scripts change at any time,
so every call asks tmux again.
"""

import logging
import time

from sshmux.models.session_models import SessionDetails
from sshmux.tmux_gateway import TmuxCommandError, TmuxGateway

logger = logging.getLogger(__name__)


def is_group_session(session_name: str) -> bool:
    """Guess whether a session holds a profile (group) rather than one server.

    Server sessions usually come from host-like names, so they carry an
    underscore (a normalized dot) or a dash. Plain single-word names are
    treated as profile sessions.
    """
    return "_" not in session_name and "-" not in session_name


def format_activity(timestamp: int | None, now: float | None = None) -> str:
    """Render a tmux activity timestamp (epoch seconds) as a relative age.

    Example:
        >>> format_activity(1000, now=1000 + 7200)
        '2h ago'
    """
    if timestamp is None:
        return "unknown"

    current = time.time() if now is None else now
    elapsed = max(0, int(current - timestamp))

    if elapsed < 60:
        return "just now"
    if elapsed < 3600:
        return f"{elapsed // 60}m ago"
    if elapsed < 86400:
        return f"{elapsed // 3600}h ago"
    return f"{elapsed // 86400}d ago"


class SessionInventory:
    """Query live tmux sessions through a TmuxGateway."""

    def __init__(self, gateway: TmuxGateway):
        self.gateway = gateway

    def snapshot(self) -> list[str]:
        """Fetch the current session names.

        Raises:
            TmuxCommandError: If tmux fails for a reason other than "no server"
        """
        return self.gateway.list_sessions()

    def session_exists(self, session_name: str) -> bool:
        """Return True if the session is live; False if it is not or tmux fails."""
        try:
            return session_name in self.snapshot()
        except TmuxCommandError as e:
            logger.debug(f"Could not list sessions: {e}")
            return False

    def details(self) -> list[SessionDetails]:
        """Fetch window count, attachment state and activity for every session."""
        return self.gateway.list_session_details()

    def get_details(self, session_name: str) -> SessionDetails | None:
        """Fetch details for one session, or None if it is not live."""
        for session in self.details():
            if session.name == session_name:
                return session
        return None

    def window_count(self, session_name: str) -> int:
        """Count the windows of a live session.

        Raises:
            TmuxCommandError: If the session does not exist
        """
        return len(self.gateway.list_windows(session_name))


__all__ = ["SessionInventory", "format_activity", "is_group_session"]
