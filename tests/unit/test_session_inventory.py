"""Unit tests for session_inventory module."""

import pytest

from sshmux.session_inventory import format_activity, is_group_session
from sshmux.tmux_gateway import TmuxCommandError


class TestIsGroupSession:
    @pytest.mark.parametrize("name", ["development", "staging", "dev"])
    def test_plain_names_are_groups(self, name):
        assert is_group_session(name) is True

    @pytest.mark.parametrize("name", ["cloudcrafters_cloud", "web-1", "dev-2"])
    def test_host_like_names_are_individual(self, name):
        assert is_group_session(name) is False


class TestFormatActivity:
    @pytest.mark.parametrize(
        "elapsed,expected",
        [
            (0, "just now"),
            (59, "just now"),
            (60, "1m ago"),
            (3599, "59m ago"),
            (7200, "2h ago"),
            (86400 * 3, "3d ago"),
        ],
    )
    def test_relative_age(self, elapsed, expected):
        assert format_activity(1000, now=1000 + elapsed) == expected

    def test_unknown(self):
        assert format_activity(None) == "unknown"

    def test_clock_skew_is_just_now(self):
        assert format_activity(2000, now=1000) == "just now"


class TestSessionInventory:
    def test_snapshot_empty_without_server(self, inventory):
        """Test a tmux with no server running is an empty snapshot."""
        assert inventory.snapshot() == []

    def test_snapshot_reflects_live_state(self, inventory, fake_tmux):
        fake_tmux.add_session("dev")
        assert inventory.snapshot() == ["dev"]

        fake_tmux.add_session("web_prod")
        assert inventory.snapshot() == ["dev", "web_prod"]

    def test_session_exists(self, inventory, fake_tmux):
        fake_tmux.add_session("dev")
        assert inventory.session_exists("dev") is True
        assert inventory.session_exists("prod") is False

    def test_session_exists_false_on_tmux_failure(self, inventory, fake_tmux):
        fake_tmux.add_session("dev")
        fake_tmux.fail("list-sessions", stderr="protocol version mismatch")
        assert inventory.session_exists("dev") is False

    def test_snapshot_propagates_tmux_failure(self, inventory, fake_tmux):
        fake_tmux.add_session("dev")
        fake_tmux.fail("list-sessions", stderr="protocol version mismatch")
        with pytest.raises(TmuxCommandError):
            inventory.snapshot()

    def test_get_details(self, inventory, fake_tmux):
        fake_tmux.add_session("dev", windows=["web", "db"], attached=1)

        details = inventory.get_details("dev")

        assert details is not None
        assert details.windows == 2
        assert details.status == "attached"
        assert inventory.get_details("missing") is None

    def test_window_count(self, inventory, fake_tmux):
        fake_tmux.add_session("dev", windows=["a", "b", "c"])
        assert inventory.window_count("dev") == 3
