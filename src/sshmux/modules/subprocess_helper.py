"""Process execution for the tmux gateway.

Philosophy:
- Single responsibility: Run external commands, report what happened
- Standard library only (no external dependencies)
- Injected, never global: callers receive a ProcessRunner instance

Public API (the "studs"):
    SubprocessResult: Result dataclass
    ProcessRunner: Protocol the gateway depends on
    SubprocessRunner: Default ProcessRunner backed by subprocess
    safe_run: Captured execution with pipe deadlock prevention
    run_interactive: Execution that inherits the caller's terminal
"""

import logging
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Protocol

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


@dataclass
class SubprocessResult:
    """Result of subprocess execution."""

    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


class ProcessRunner(Protocol):
    """Anything that can run a command line for the gateway."""

    def run(self, cmd: list[str], timeout: int | None = 30) -> SubprocessResult: ...

    def run_interactive(self, cmd: list[str]) -> int: ...


def _drain(pipe: IO[bytes], storage: list[bytes]) -> None:
    try:
        data = pipe.read()
        if data:
            storage.append(data)
    except OSError:
        # Pipe closed during termination
        pass


def safe_run(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: int | None = 30,
    env: dict[str, str] | None = None,
) -> SubprocessResult:
    """
    Execute a command and capture its output without pipe deadlocks.

    Background threads drain stdout/stderr so that a chatty process cannot
    block on a full pipe buffer while we wait for it.

    Args:
        cmd: Command and arguments
        cwd: Working directory
        timeout: Timeout in seconds (None = no timeout)
        env: Environment variables

    Returns:
        SubprocessResult with output and exit code. A missing binary is
        reported as exit code 127, never raised.

    Example:
        >>> result = safe_run(["tmux", "-V"])
        >>> result.ok
        True
    """
    try:
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=env,
        )
    except FileNotFoundError:
        return SubprocessResult(
            returncode=COMMAND_NOT_FOUND,
            stdout="",
            stderr=f"Command not found: {cmd[0] if cmd else 'unknown'}",
        )
    except OSError as e:
        return SubprocessResult(returncode=1, stdout="", stderr=f"Error executing command: {e!s}")

    stdout_data: list[bytes] = []
    stderr_data: list[bytes] = []

    threads = [
        threading.Thread(target=_drain, args=(process.stdout, stdout_data), daemon=True),
        threading.Thread(target=_drain, args=(process.stderr, stderr_data), daemon=True),
    ]
    for thread in threads:
        thread.start()

    timed_out = False
    try:
        process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        timed_out = True
        logger.warning(f"Command timed out after {timeout}s: {cmd[0]}")
        process.terminate()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            process.kill()

    for thread in threads:
        thread.join(timeout=1)

    returncode = process.returncode if process.returncode is not None else -1

    return SubprocessResult(
        returncode=returncode,
        stdout=stdout_data[0].decode("utf-8", errors="replace") if stdout_data else "",
        stderr=stderr_data[0].decode("utf-8", errors="replace") if stderr_data else "",
        timed_out=timed_out,
    )


def run_interactive(cmd: list[str]) -> int:
    """
    Run a command attached to the calling process's terminal.

    stdin, stdout and stderr are inherited, so programs like
    `tmux attach-session` take over the user's terminal until they exit.

    Returns:
        Exit code of the command (127 if the binary is missing)
    """
    try:
        return subprocess.run(cmd, check=False).returncode
    except FileNotFoundError:
        logger.debug(f"Command not found: {cmd[0] if cmd else 'unknown'}")
        return COMMAND_NOT_FOUND


class SubprocessRunner:
    """Default ProcessRunner: real processes via safe_run/run_interactive."""

    def run(self, cmd: list[str], timeout: int | None = 30) -> SubprocessResult:
        return safe_run(cmd, timeout=timeout)

    def run_interactive(self, cmd: list[str]) -> int:
        return run_interactive(cmd)


__all__ = [
    "COMMAND_NOT_FOUND",
    "ProcessRunner",
    "SubprocessResult",
    "SubprocessRunner",
    "run_interactive",
    "safe_run",
]
