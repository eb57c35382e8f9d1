"""Tests for session_naming module."""

import pytest

from sshmux.modules.session_naming import normalize_session_name, resolve_unique_session_name


class TestNormalizeSessionName:
    """Tests for normalize_session_name."""

    @pytest.mark.parametrize(
        "requested,expected",
        [
            ("cloudcrafters.cloud", "cloudcrafters_cloud"),
            ("a.b.c", "a_b_c"),
            ("host:22", "host_22"),
            ("web-1", "web-1"),
            ("plain", "plain"),
            ("", ""),
        ],
    )
    def test_rewrites_characters_tmux_rewrites(self, requested, expected):
        """Test dots and colons become underscores, everything else is kept."""
        assert normalize_session_name(requested) == expected

    @pytest.mark.parametrize("name", ["cloudcrafters.cloud", "x:y.z", "already_ok", "dev-2"])
    def test_is_idempotent(self, name):
        """Test normalizing twice gives the same result as normalizing once."""
        once = normalize_session_name(name)
        assert normalize_session_name(once) == once


class TestResolveUniqueSessionName:
    """Tests for resolve_unique_session_name."""

    def test_returns_normalized_name_when_free(self):
        """Test no suffix is added when nothing collides."""
        assert resolve_unique_session_name("cloudcrafters.cloud", []) == "cloudcrafters_cloud"

    def test_empty_inventory_gives_normalized_name(self):
        """Test an empty live set always yields the normalized base."""
        assert resolve_unique_session_name("web.prod", set()) == "web_prod"

    def test_first_collision_gets_suffix_1(self):
        """Test a taken base name gets -1."""
        assert resolve_unique_session_name("dev", ["dev"]) == "dev-1"

    def test_picks_lowest_free_suffix(self):
        """Test gaps in the suffix sequence are filled from the bottom."""
        assert resolve_unique_session_name("x", {"x", "x-2", "x-5"}) == "x-1"

    def test_skips_consecutive_taken_suffixes(self):
        """Test suffixes are tried in order until one is free."""
        live = {"x", "x-1", "x-2", "x-3"}
        assert resolve_unique_session_name("x", live) == "x-4"

    def test_collision_is_checked_after_normalization(self):
        """Test a dotted request collides with its normalized live session."""
        live = ["cloudcrafters_cloud"]
        assert resolve_unique_session_name("cloudcrafters.cloud", live) == "cloudcrafters_cloud-1"

    def test_unrelated_sessions_do_not_matter(self):
        """Test only the requested base and its suffixes are considered."""
        assert resolve_unique_session_name("db", ["web", "web-1", "dev"]) == "db"

    def test_result_never_in_live_set(self):
        """Test the resolved name is unique for a range of live sets."""
        live_sets = [
            [],
            ["api"],
            ["api", "api-1"],
            ["api-1", "api-2"],
            ["api", "api-1", "api-3"],
        ]
        for live in live_sets:
            assert resolve_unique_session_name("api", live) not in live
