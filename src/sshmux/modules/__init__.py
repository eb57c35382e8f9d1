"""sshmux modules - Self-contained bricks following the brick philosophy

Each module is a self-contained component with clear contracts:
- Subprocess Helper: Run external commands (captured or interactive)
- Session Naming: Normalize names and resolve collisions, pure functions
- SSH Command Builder: Turn a server record into an ssh command line
"""

from . import session_naming, ssh_command_builder, subprocess_helper

__all__ = ["session_naming", "ssh_command_builder", "subprocess_helper"]
