"""tmux gateway module.

Single boundary between sshmux and the tmux binary. Every method maps to one
tmux invocation; nothing here decides names or reacts to session state.

Security:
- Argument lists only (no shell=True)
- Commands for panes are passed to send-keys as a single argument
"""

import logging

from sshmux.models.session_models import SessionDetails, WindowInfo
from sshmux.modules.subprocess_helper import ProcessRunner, SubprocessResult, SubprocessRunner

logger = logging.getLogger(__name__)

# stderr fragments tmux prints when there is simply nothing running yet
_NO_SERVER_MARKERS = ("no server running", "error connecting to", "no sessions")

_DETAIL_FIELDS = (
    "#{session_name}",
    "#{session_windows}",
    "#{session_attached}",
    "#{session_many_attached}",
    "#{session_activity}",
    "#{session_created}",
)
SESSION_DETAIL_FORMAT = "\t".join(_DETAIL_FIELDS)
WINDOW_FORMAT = "#{window_index}\t#{window_name}"


class TmuxError(Exception):
    """Base class for tmux gateway errors."""

    pass


class TmuxUnavailableError(TmuxError):
    """Raised when the tmux binary is missing or not working."""

    pass


class TmuxCommandError(TmuxError):
    """Raised when a tmux subcommand exits non-zero.

    Attributes:
        operation: tmux subcommand that failed (e.g. "new-session")
        target: Session or window the command was aimed at
        returncode: Exit status of tmux
        stderr: Error output of tmux, stripped
    """

    def __init__(self, operation: str, target: str, returncode: int, stderr: str = ""):
        self.operation = operation
        self.target = target
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"tmux {operation} failed for '{target}' (exit {returncode}){detail}")


class TmuxSessionExistsError(TmuxCommandError):
    """Raised when new-session is refused because the name is taken."""

    pass


class TmuxAttachError(TmuxCommandError):
    """Raised when attaching fails, typically because there is no terminal."""

    pass


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


class TmuxGateway:
    """Run tmux subcommands through an injected ProcessRunner.

    Example:
        >>> gateway = TmuxGateway()
        >>> if gateway.is_available():
        ...     gateway.list_sessions()
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        binary: str = "tmux",
        timeout: int | None = 30,
    ):
        self.runner: ProcessRunner = runner or SubprocessRunner()
        self.binary = binary
        self.timeout = timeout

    def _run(self, *args: str) -> SubprocessResult:
        cmd = [self.binary, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        return self.runner.run(cmd, timeout=self.timeout)

    def _check(self, result: SubprocessResult, operation: str, target: str) -> None:
        if result.ok:
            return
        stderr = result.stderr
        if result.timed_out:
            stderr = f"timed out after {self.timeout}s {stderr}".strip()
        raise TmuxCommandError(operation, target, result.returncode, stderr)

    def is_available(self) -> bool:
        """Return True if `tmux -V` succeeds. Never raises."""
        try:
            result = self._run("-V")
        except Exception as e:
            logger.debug(f"tmux availability check failed: {e}")
            return False
        if result.ok:
            logger.debug(f"tmux available: {result.stdout.strip()}")
        return result.ok

    def list_sessions(self) -> list[str]:
        """
        List live session names in tmux order.

        Returns:
            Session names; empty when no tmux server is running

        Raises:
            TmuxCommandError: If tmux fails for any other reason
        """
        result = self._run("list-sessions", "-F", "#{session_name}")
        if not result.ok:
            if self._is_no_server(result):
                return []
            self._check(result, "list-sessions", "*")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def list_session_details(self) -> list[SessionDetails]:
        """
        List live sessions with window count, attachment and activity data.

        Rows tmux returns in an unexpected shape are skipped.

        Raises:
            TmuxCommandError: If tmux fails for a reason other than no server
        """
        result = self._run("list-sessions", "-F", SESSION_DETAIL_FORMAT)
        if not result.ok:
            if self._is_no_server(result):
                return []
            self._check(result, "list-sessions", "*")

        details: list[SessionDetails] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            fields = line.split("\t")
            if len(fields) != len(_DETAIL_FIELDS):
                logger.debug(f"Skipping unexpected session row: {line!r}")
                continue
            name, windows, attached, many_attached, activity, created = fields
            details.append(
                SessionDetails(
                    name=name,
                    windows=_to_int(windows) or 0,
                    attached=(_to_int(attached) or 0) > 0,
                    many_attached=many_attached == "1",
                    activity=_to_int(activity),
                    created=_to_int(created),
                )
            )
        return details

    def list_windows(self, session_name: str) -> list[WindowInfo]:
        """List the windows of a session as (index, name) pairs."""
        result = self._run("list-windows", "-t", session_name, "-F", WINDOW_FORMAT)
        self._check(result, "list-windows", session_name)

        windows: list[WindowInfo] = []
        for line in result.stdout.splitlines():
            index, _, name = line.partition("\t")
            parsed = _to_int(index)
            if parsed is not None:
                windows.append(WindowInfo(index=parsed, name=name))
        return windows

    def create_session(self, session_name: str) -> None:
        """Create a detached session with one default window.

        Raises:
            TmuxSessionExistsError: If tmux reports a duplicate session
            TmuxCommandError: For any other failure
        """
        result = self._run("new-session", "-d", "-s", session_name)
        if not result.ok and "duplicate session" in result.stderr:
            raise TmuxSessionExistsError("new-session", session_name, result.returncode, result.stderr)
        self._check(result, "new-session", session_name)
        logger.debug(f"Created tmux session: {session_name}")

    def kill_session(self, session_name: str) -> None:
        """Terminate a session and every window in it."""
        result = self._run("kill-session", "-t", session_name)
        self._check(result, "kill-session", session_name)
        logger.debug(f"Killed tmux session: {session_name}")

    def send_keys(self, target: str, command: str) -> None:
        """Type `command` into `target` (session or session:window) and press Enter."""
        result = self._run("send-keys", "-t", target, command, "Enter")
        self._check(result, "send-keys", target)

    def create_window(self, session_name: str, window_name: str) -> None:
        """Append a new named window to a session."""
        result = self._run("new-window", "-t", session_name, "-n", window_name)
        self._check(result, "new-window", f"{session_name} ({window_name})")

    def rename_window(self, session_name: str, window_index: int, new_name: str) -> None:
        """Rename window `window_index` of a session."""
        target = f"{session_name}:{window_index}"
        result = self._run("rename-window", "-t", target, new_name)
        self._check(result, "rename-window", target)

    def attach_session(self, session_name: str) -> None:
        """
        Hand the calling terminal over to a session until the user detaches.

        Raises:
            TmuxAttachError: If tmux exits non-zero (e.g. no controlling terminal)
        """
        cmd = [self.binary, "attach-session", "-t", session_name]
        logger.debug(f"Running interactively: {' '.join(cmd)}")
        returncode = self.runner.run_interactive(cmd)
        if returncode != 0:
            raise TmuxAttachError("attach-session", session_name, returncode)

    @staticmethod
    def _is_no_server(result: SubprocessResult) -> bool:
        stderr = result.stderr.lower()
        return any(marker in stderr for marker in _NO_SERVER_MARKERS)


__all__ = [
    "SESSION_DETAIL_FORMAT",
    "WINDOW_FORMAT",
    "TmuxAttachError",
    "TmuxCommandError",
    "TmuxError",
    "TmuxGateway",
    "TmuxSessionExistsError",
    "TmuxUnavailableError",
]
