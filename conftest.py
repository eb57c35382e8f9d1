"""Pytest configuration and fixtures for sshmux tests.

CRITICAL: Protects the user's configuration and tmux server from tests.
"""

import os
import shutil
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def protect_production_config():
    """Protect ~/.sshmux/config.toml from being modified by tests.

    This fixture:
    1. Backs up the real config.toml before any tests run
    2. Restores it after all tests complete
    """
    config_path = Path.home() / ".sshmux" / "config.toml"
    backup_path = Path.home() / ".sshmux" / ".config.toml.pytest-backup"

    config_existed = config_path.exists()
    if config_existed:
        shutil.copy2(config_path, backup_path)
        print(f"\n[PYTEST] Protected config.toml - backup at {backup_path}")

    yield

    if config_existed and backup_path.exists():
        shutil.copy2(backup_path, config_path)
        backup_path.unlink()
        print("\n[PYTEST] Restored config.toml from backup")
    elif backup_path.exists():
        backup_path.unlink()


@pytest.fixture(scope="session", autouse=True)
def prevent_real_tmux_operations():
    """Mark test mode so nothing touches the user's default tmux server.

    Integration tests that need a real tmux run it on a private socket and
    only when RUN_TMUX_TESTS=true.
    """
    os.environ["SSHMUX_TEST_MODE"] = "true"

    if os.environ.get("RUN_TMUX_TESTS") == "true":
        print("\n" + "=" * 70)
        print("WARNING: RUN_TMUX_TESTS=true - integration tests will start a real tmux server")
        print("=" * 70 + "\n")

    yield

    if "SSHMUX_TEST_MODE" in os.environ:
        del os.environ["SSHMUX_TEST_MODE"]


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point SSHMUX_CONFIG_DIR at an empty temporary directory.

    Example:
        def test_something(isolated_config):
            (isolated_config / "config.toml").write_text(...)
    """
    config_dir = tmp_path / ".sshmux"
    config_dir.mkdir()
    monkeypatch.setenv("SSHMUX_CONFIG_DIR", str(config_dir))
    return config_dir
