"""
Tests for web_baseline_mcp.cli.commands.config and cache commands.
"""

import yaml

from web_baseline_mcp import cache
from web_baseline_mcp.cli.main import cli


class TestConfigInit:
    def test_init_writes_defaults(self, cli_runner, tmp_path):
        path = tmp_path / "config.yaml"
        result = cli_runner.invoke(cli, ["-c", str(path), "config", "init"])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(path.read_text())
        assert data["dataset"]["ttl_seconds"] == 3600
        assert data["mcp"]["transports"] == ["stdio"]

    def test_init_with_source(self, cli_runner, tmp_path):
        path = tmp_path / "config.yaml"
        cli_runner.invoke(
            cli,
            ["-c", str(path), "config", "init", "--source", "https://example.test/d.json"],
        )
        data = yaml.safe_load(path.read_text())
        assert data["dataset"]["source"] == "https://example.test/d.json"

    def test_init_existing_file_cancelled(self, cli_runner, mock_config_file):
        before = mock_config_file.read_text()
        result = cli_runner.invoke(
            cli, ["-c", str(mock_config_file), "config", "init"], input="n\n"
        )

        assert "cancelled" in result.output
        assert mock_config_file.read_text() == before

    def test_init_force_overwrites(self, cli_runner, mock_config_file):
        result = cli_runner.invoke(
            cli, ["-c", str(mock_config_file), "config", "init", "--force"]
        )
        assert result.exit_code == 0
        assert yaml.safe_load(mock_config_file.read_text())["mcp"]["port"] == 3001


class TestConfigShowValidate:
    def test_show(self, cli_runner, mock_config_file):
        result = cli_runner.invoke(cli, ["-c", str(mock_config_file), "config", "show"])

        assert result.exit_code == 0, result.output
        shown = yaml.safe_load(result.output)
        assert shown["mcp"]["port"] == 18888

    def test_validate(self, cli_runner, mock_config_file):
        result = cli_runner.invoke(
            cli, ["-c", str(mock_config_file), "config", "validate"]
        )
        assert result.exit_code == 0
        assert "Configuration file is valid" in result.output

    def test_validate_invalid(self, cli_runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"mcp": {"transports": ["telnet"]}}))

        result = cli_runner.invoke(cli, ["-c", str(path), "config", "validate"])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestCacheClear:
    def test_clear(self, cli_runner):
        cache.disk_set("a", "1")
        result = cli_runner.invoke(cli, ["cache", "clear"])
        assert result.exit_code == 0
        assert "Cleared 1 cached entries." in result.output
