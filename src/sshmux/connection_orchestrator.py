"""Connection orchestrator module.

Decides whether a connect request reuses a live tmux session or creates a
new one, and drives the gateway through session/window creation and
command injection.

Flow per call:
    availability check -> existing-session check -> reattach | create
    (-> one window per server, for profiles)

Reattaching never re-sends the ssh command: the shell already running in
the session may be in the middle of something.
"""

import logging
from collections.abc import Callable, Collection, Sequence

from sshmux.models.server_models import ServerRecord, ServerValidationError, validate_server
from sshmux.models.session_models import ConnectionResult, WindowSpec
from sshmux.modules.session_naming import normalize_session_name, resolve_unique_session_name
from sshmux.modules.ssh_command_builder import build_ssh_command
from sshmux.session_inventory import SessionInventory
from sshmux.tmux_gateway import (
    TmuxCommandError,
    TmuxGateway,
    TmuxSessionExistsError,
    TmuxUnavailableError,
)

logger = logging.getLogger(__name__)


class ConnectionOrchestratorError(Exception):
    """Raised when a connect request cannot be started."""

    pass


def plan_windows(servers: Sequence[ServerRecord]) -> list[WindowSpec]:
    """Map servers to windows: window i runs servers[i], named after it."""
    return [
        WindowSpec(index=index, window_name=server.name, server=server)
        for index, server in enumerate(servers)
    ]


class ConnectionOrchestrator:
    """Create or reattach tmux sessions for servers and profiles.

    Each call reads a fresh session inventory; the orchestrator keeps no
    state between calls, so one instance can serve any number of requests.

    Example:
        >>> orchestrator = ConnectionOrchestrator(TmuxGateway())
        >>> result = orchestrator.connect_to_server(server)
        >>> orchestrator.attach(result.session_name)
    """

    def __init__(
        self,
        gateway: TmuxGateway,
        inventory: SessionInventory | None = None,
        *,
        command_builder: Callable[[ServerRecord], str] = build_ssh_command,
        retry_on_name_conflict: bool = True,
        cleanup_on_failure: bool = False,
    ):
        """
        Args:
            gateway: tmux gateway used for every tmux call
            inventory: Session inventory (default: built on the same gateway)
            command_builder: Turns a validated server into the pane command
            retry_on_name_conflict: Re-resolve the name once if new-session
                reports a duplicate created by someone else
            cleanup_on_failure: Kill a session this call created when a later
                step fails (default leaves it for inspection)
        """
        self.gateway = gateway
        self.inventory = inventory or SessionInventory(gateway)
        self.command_builder = command_builder
        self.retry_on_name_conflict = retry_on_name_conflict
        self.cleanup_on_failure = cleanup_on_failure

    def connect_to_server(self, server: ServerRecord) -> ConnectionResult:
        """
        Open (or reuse) the session for a single server.

        The record is validated and its command built before tmux is touched.

        Raises:
            TmuxUnavailableError: If tmux is not usable
            ServerValidationError: If the server record is invalid
            TmuxCommandError: If a tmux step fails
        """
        validate_server(server)
        command = self.command_builder(server)
        return self.connect_to_session(server.name, command)

    def connect_to_session(self, requested_name: str, command: str) -> ConnectionResult:
        """
        Open (or reuse) a session named after `requested_name` running `command`.

        Returns:
            ConnectionResult; was_existing=True means nothing was created or sent

        Raises:
            TmuxUnavailableError: If tmux is not usable
            TmuxCommandError: If creating the session or sending keys fails
        """
        self._require_available()

        live = self._live_sessions()
        existing = self._find_existing(requested_name, live)
        if existing:
            return existing

        session_name = self._create_unique_session(requested_name, live)
        try:
            self.gateway.send_keys(session_name, command)
        except TmuxCommandError:
            self._handle_partial_failure(session_name)
            raise

        logger.info(f"Created session {session_name}")
        return ConnectionResult(session_name=session_name, was_existing=False)

    def connect_to_profile(
        self, profile_name: str, servers: Sequence[ServerRecord]
    ) -> ConnectionResult:
        """
        Open (or reuse) one session for a profile, one window per server.

        Window i is named after servers[i] and runs its ssh command. Window 0
        is the default window tmux creates with the session, renamed.

        Raises:
            ConnectionOrchestratorError: If the profile has no servers
            TmuxUnavailableError: If tmux is not usable
            ServerValidationError: If any server is invalid; the whole
                profile is aborted
            TmuxCommandError: If a tmux step fails
        """
        if not servers:
            raise ConnectionOrchestratorError(f"Profile '{profile_name}' has no servers")

        self._require_available()

        live = self._live_sessions()
        existing = self._find_existing(profile_name, live)
        if existing:
            return existing

        session_name = self._create_unique_session(profile_name, live)
        try:
            for window in plan_windows(servers):
                self._populate_window(session_name, window)
        except (ServerValidationError, TmuxCommandError):
            self._handle_partial_failure(session_name)
            raise

        logger.info(f"Created session {session_name} with {len(servers)} window(s)")
        return ConnectionResult(session_name=session_name, was_existing=False)

    def attach(self, session_name: str) -> None:
        """Attach the calling terminal to a session.

        Raises:
            TmuxAttachError: If attaching fails (callers usually recover)
        """
        self.gateway.attach_session(session_name)

    def _populate_window(self, session_name: str, window: WindowSpec) -> None:
        server = window.server
        try:
            validate_server(server)
        except ServerValidationError as e:
            raise ServerValidationError(
                f"Invalid server configuration for '{server.name}' (window {window.index}): {e}",
                server_name=server.name,
            ) from e

        command = self.command_builder(server)

        if window.index == 0:
            self.gateway.rename_window(session_name, 0, window.window_name)
        else:
            self.gateway.create_window(session_name, window.window_name)

        self.gateway.send_keys(f"{session_name}:{window.index}", command)

    def _require_available(self) -> None:
        if not self.gateway.is_available():
            raise TmuxUnavailableError(f"{self.gateway.binary} is not available on this system")

    def _live_sessions(self) -> Collection[str]:
        # Naming still works without an inventory: fall back to the base name
        try:
            return self.inventory.snapshot()
        except TmuxCommandError as e:
            logger.warning(f"Could not list tmux sessions, assuming none: {e}")
            return []

    def _find_existing(
        self, requested_name: str, live: Collection[str]
    ) -> ConnectionResult | None:
        normalized = normalize_session_name(requested_name)
        if normalized in live:
            logger.info(f"Reusing existing session {normalized}")
            return ConnectionResult(session_name=normalized, was_existing=True)
        return None

    def _create_unique_session(self, requested_name: str, live: Collection[str]) -> str:
        session_name = resolve_unique_session_name(requested_name, live)
        try:
            self.gateway.create_session(session_name)
        except TmuxSessionExistsError:
            if not self.retry_on_name_conflict:
                raise
            logger.warning(f"Session {session_name} appeared concurrently, picking a new name")
            session_name = resolve_unique_session_name(requested_name, self._live_sessions())
            self.gateway.create_session(session_name)
        return session_name

    def _handle_partial_failure(self, session_name: str) -> None:
        if not self.cleanup_on_failure:
            logger.warning(
                f"Session {session_name} left partially set up; "
                f"remove it with: tmux kill-session -t {session_name}"
            )
            return
        try:
            self.gateway.kill_session(session_name)
            logger.info(f"Removed partially created session {session_name}")
        except TmuxCommandError as e:
            logger.warning(f"Could not remove session {session_name}: {e}")


__all__ = ["ConnectionOrchestrator", "ConnectionOrchestratorError", "plan_windows"]
