"""
Shared test fixtures and configuration for sshmux tests.

This module provides common fixtures used across all test types:
- A fake tmux server and the gateway/orchestrator wired to it
- Server record factories
- Config files in temporary directories
"""

import pytest

from sshmux.connection_orchestrator import ConnectionOrchestrator
from sshmux.models.server_models import AuthType, ServerRecord
from sshmux.session_inventory import SessionInventory
from sshmux.tmux_gateway import TmuxGateway
from tests.mocks.tmux_mock import FakeTmuxRunner

# ============================================================================
# TMUX FIXTURES
# ============================================================================


@pytest.fixture
def fake_tmux():
    """Empty in-memory tmux server (no sessions, tmux available)."""
    return FakeTmuxRunner()


@pytest.fixture
def gateway(fake_tmux):
    """TmuxGateway talking to the fake tmux server."""
    return TmuxGateway(runner=fake_tmux)


@pytest.fixture
def inventory(gateway):
    """SessionInventory over the fake gateway."""
    return SessionInventory(gateway)


@pytest.fixture
def orchestrator(gateway):
    """ConnectionOrchestrator with default options over the fake gateway."""
    return ConnectionOrchestrator(gateway)


# ============================================================================
# SERVER FIXTURES
# ============================================================================


@pytest.fixture
def make_server():
    """Factory for valid server records; override any field by keyword.

    Example:
        def test_x(make_server):
            server = make_server("web", port=2222)
    """

    def _make(name: str = "web-1", **overrides) -> ServerRecord:
        fields = {
            "name": name,
            "hostname": f"{name}.example.com",
            "username": "deploy",
            "port": 22,
            "auth_type": AuthType.KEY,
            "key_path": "~/.ssh/id_ed25519",
        }
        fields.update(overrides)
        return ServerRecord(**fields)

    return _make


# ============================================================================
# CONFIG FIXTURES
# ============================================================================

SAMPLE_CONFIG = """\
tmux_binary = "tmux"
command_timeout = 15

[[servers]]
name = "web-1"
hostname = "10.0.0.5"
username = "deploy"
key_path = "~/.ssh/id_ed25519"

[[servers]]
name = "db.internal"
hostname = "10.0.0.6"
username = "postgres"
port = 2222
auth_type = "password"

[profiles]
development = ["web-1", "db.internal"]
"""


@pytest.fixture
def sample_config_file(isolated_config):
    """Write SAMPLE_CONFIG to $SSHMUX_CONFIG_DIR/config.toml (mode 0600)."""
    config_file = isolated_config / "config.toml"
    config_file.write_text(SAMPLE_CONFIG)
    config_file.chmod(0o600)
    return config_file


# ============================================================================
# CLI FIXTURES
# ============================================================================


@pytest.fixture
def cli_tmux(fake_tmux, monkeypatch):
    """Route every CLI command's tmux calls to the fake tmux server."""
    from sshmux.commands import cli_helpers
    from sshmux.commands import sessions as sessions_module

    def _build_gateway(config):
        return TmuxGateway(runner=fake_tmux, binary=config.tmux_binary)

    monkeypatch.setattr(cli_helpers, "build_gateway", _build_gateway)
    monkeypatch.setattr(sessions_module, "build_gateway", _build_gateway)
    return fake_tmux
