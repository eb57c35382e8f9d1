"""Configuration management module.

Reads the sshmux configuration file (TOML): tmux settings, server records
and profiles. sshmux never writes this file; edit it by hand.

Example config.toml:

    tmux_binary = "tmux"
    cleanup_on_failure = false

    [[servers]]
    name = "web-1"
    hostname = "10.0.0.5"
    username = "deploy"
    auth_type = "key"
    key_path = "~/.ssh/id_ed25519"

    [profiles]
    dev = ["web-1"]

Security:
- Config file permissions: 0600 (owner read/write only)
- No secrets: passwords are never read from this file
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomli  # type: ignore[import]
except ImportError:
    # Fallback for older Python versions
    try:
        import tomllib as tomli  # type: ignore[import]
    except ImportError as e:
        raise ImportError("toml library not available. Install with: pip install tomli") from e

from sshmux.models.server_models import ServerRecord

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "SSHMUX_CONFIG_DIR"


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class SshmuxConfig:
    """sshmux configuration data."""

    tmux_binary: str = "tmux"
    command_timeout: int = 30
    retry_on_name_conflict: bool = True
    cleanup_on_failure: bool = False
    keepalive_interval: int = 60
    keepalive_count_max: int = 3
    servers: list[ServerRecord] = field(default_factory=list)
    profiles: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SshmuxConfig":
        """Create from dictionary.

        Raises:
            ConfigError: If servers or profiles have the wrong shape
        """
        raw_servers = data.get("servers", [])
        if not isinstance(raw_servers, list):
            raise ConfigError("'servers' must be an array of tables ([[servers]])")

        servers = []
        for entry in raw_servers:
            if not isinstance(entry, dict):
                raise ConfigError("Each [[servers]] entry must be a table")
            try:
                servers.append(ServerRecord.from_dict(entry))
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid server entry {entry.get('name', '?')}: {e}") from e

        raw_profiles = data.get("profiles", {})
        if not isinstance(raw_profiles, dict):
            raise ConfigError("'profiles' must be a table of name = [server, ...]")

        profiles: dict[str, list[str]] = {}
        for profile_name, members in raw_profiles.items():
            if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
                raise ConfigError(f"Profile '{profile_name}' must be a list of server names")
            profiles[profile_name] = list(members)

        return cls(
            tmux_binary=data.get("tmux_binary", "tmux"),
            command_timeout=int(data.get("command_timeout", 30)),
            retry_on_name_conflict=bool(data.get("retry_on_name_conflict", True)),
            cleanup_on_failure=bool(data.get("cleanup_on_failure", False)),
            keepalive_interval=int(data.get("keepalive_interval", 60)),
            keepalive_count_max=int(data.get("keepalive_count_max", 3)),
            servers=servers,
            profiles=profiles,
        )


class ConfigManager:
    """Load sshmux configuration.

    Configuration is read from ~/.sshmux/config.toml unless SSHMUX_CONFIG_DIR
    or an explicit path says otherwise.
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".sshmux"
    CONFIG_FILE_NAME = "config.toml"

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file

        Raises:
            ConfigError: If an explicit path does not exist
        """
        if custom_path:
            path = Path(custom_path).expanduser().resolve()
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return path

        env_dir = os.environ.get(CONFIG_DIR_ENV)
        if env_dir:
            return Path(env_dir).expanduser() / cls.CONFIG_FILE_NAME

        return cls.DEFAULT_CONFIG_DIR / cls.CONFIG_FILE_NAME

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> SshmuxConfig:
        """Load configuration from file.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            SshmuxConfig object (defaults if the file does not exist)

        Raises:
            ConfigError: If the file cannot be read or is inconsistent
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            logger.debug("Config file not found, using defaults")
            return SshmuxConfig()

        try:
            mode = config_path.stat().st_mode & 0o777
            if mode & 0o077:
                logger.warning(
                    f"Config file has insecure permissions: {oct(mode)}. Fixing to 0600..."
                )
                os.chmod(config_path, 0o600)

            with open(config_path, "rb") as f:
                data = tomli.load(f)  # type: ignore[attr-defined]
        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        config = SshmuxConfig.from_dict(data)
        cls._check_consistency(config)
        logger.debug(f"Loaded config from: {config_path}")
        return config

    @classmethod
    def get_server(cls, config: SshmuxConfig, name: str) -> ServerRecord:
        """Look up a server by name.

        Raises:
            ConfigError: If no server has that name
        """
        for server in config.servers:
            if server.name == name:
                return server
        raise ConfigError(f"Server '{name}' not found. Use 'sshmux servers' to see available servers")

    @classmethod
    def get_profile_servers(cls, config: SshmuxConfig, profile_name: str) -> list[ServerRecord]:
        """Return a profile's servers in declared order.

        Raises:
            ConfigError: If the profile does not exist
        """
        if profile_name not in config.profiles:
            raise ConfigError(f"Profile '{profile_name}' not found")
        return [cls.get_server(config, name) for name in config.profiles[profile_name]]

    @classmethod
    def _check_consistency(cls, config: SshmuxConfig) -> None:
        seen: set[str] = set()
        for server in config.servers:
            if server.name in seen:
                raise ConfigError(f"Duplicate server name in config: '{server.name}'")
            seen.add(server.name)

        for profile_name, members in config.profiles.items():
            unknown = [name for name in members if name not in seen]
            if unknown:
                raise ConfigError(
                    f"Profile '{profile_name}' references unknown server(s): {', '.join(unknown)}"
                )


__all__ = ["CONFIG_DIR_ENV", "ConfigError", "ConfigManager", "SshmuxConfig"]
