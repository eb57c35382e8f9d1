"""
Server Data Models

Read-only description of one SSH target, as consumed by the session engine.

Philosophy:
- Immutable record plus free functions (no accessor interface)
- Zero dependencies: No imports from other sshmux modules
- Validation lives next to the data it checks
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class AuthType(StrEnum):
    """How the SSH client authenticates against the server."""

    KEY = "key"
    PASSWORD = "password"


class ServerValidationError(ValueError):
    """Raised when a server record is incomplete or inconsistent."""

    def __init__(self, message: str, server_name: str | None = None):
        super().__init__(message)
        self.server_name = server_name


@dataclass(frozen=True)
class ServerRecord:
    """Connection details for a single server.

    Attributes:
        name: Unique server name, also used as the tmux session/window name
        hostname: Host name or IP address
        username: Remote login user
        port: SSH port (default 22)
        auth_type: Authentication type, "key" or "password"
        key_path: Private key path, required when auth_type is "key"
    """

    name: str
    hostname: str
    username: str
    port: int = 22
    auth_type: AuthType | str = AuthType.KEY
    key_path: str | None = None

    def validate(self) -> None:
        """Validate this record (see validate_server)."""
        validate_server(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        data: dict[str, Any] = {
            "name": self.name,
            "hostname": self.hostname,
            "username": self.username,
            "port": self.port,
            "auth_type": str(self.auth_type),
        }
        if self.key_path is not None:
            data["key_path"] = self.key_path
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerRecord":
        """Create from a config-file table.

        Unknown auth types are kept as plain strings so that validate_server
        can report them instead of failing here.
        """
        raw_auth = str(data.get("auth_type", AuthType.KEY.value))
        try:
            auth_type: AuthType | str = AuthType(raw_auth)
        except ValueError:
            auth_type = raw_auth

        return cls(
            name=str(data.get("name", "")),
            hostname=str(data.get("hostname", "")),
            username=str(data.get("username", "")),
            port=int(data.get("port", 22)),
            auth_type=auth_type,
            key_path=data.get("key_path"),
        )


def validate_server(server: ServerRecord) -> None:
    """
    Check that a server record can be turned into an SSH command.

    Args:
        server: Record to validate

    Raises:
        ServerValidationError: If a required field is missing or invalid
    """
    label = server.name or "<unnamed>"

    if not server.name.strip():
        raise ServerValidationError("server name is required", server_name=server.name)

    if not server.hostname.strip():
        raise ServerValidationError(f"{label}: hostname is required", server_name=server.name)

    if not server.username.strip():
        raise ServerValidationError(f"{label}: username is required", server_name=server.name)

    if not (1 <= server.port <= 65535):
        raise ServerValidationError(
            f"{label}: port must be between 1 and 65535 (got {server.port})",
            server_name=server.name,
        )

    if server.auth_type not in (AuthType.KEY, AuthType.PASSWORD):
        raise ServerValidationError(
            f"{label}: auth_type must be 'key' or 'password' (got '{server.auth_type}')",
            server_name=server.name,
        )

    if server.auth_type == AuthType.KEY and not (server.key_path or "").strip():
        raise ServerValidationError(
            f"{label}: key_path is required when auth_type is 'key'",
            server_name=server.name,
        )


__all__ = ["AuthType", "ServerRecord", "ServerValidationError", "validate_server"]
