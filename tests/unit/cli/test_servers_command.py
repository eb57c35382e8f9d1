"""Tests for the servers command and top-level CLI behavior."""

from click.testing import CliRunner

from sshmux import __version__
from sshmux.cli import main


class TestServersCommand:
    def test_lists_servers_and_profiles(self, sample_config_file):
        result = CliRunner().invoke(main, ["servers"])

        assert result.exit_code == 0, result.output
        assert "web-1" in result.output
        assert "postgres@10.0.0.6:2222" in result.output
        assert "password" in result.output
        assert "Profiles" in result.output
        assert "development" in result.output

    def test_no_servers(self, isolated_config):
        result = CliRunner().invoke(main, ["servers"])

        assert result.exit_code == 0, result.output
        assert "No servers configured." in result.output
        assert "[[servers]]" in result.output

    def test_broken_config(self, isolated_config):
        config_file = isolated_config / "config.toml"
        config_file.write_text("not = [valid")
        config_file.chmod(0o600)

        result = CliRunner().invoke(main, ["servers"])

        assert result.exit_code == 1
        assert "Failed to load config" in result.output


class TestMainGroup:
    def test_no_command_shows_help(self):
        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0
        assert "connect" in result.output
        assert "batch" in result.output

    def test_unknown_command(self):
        result = CliRunner().invoke(main, ["conect"])

        assert result.exit_code == 2
        assert "No such command 'conect'" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
