"""
Shared fixtures and utilities for CLI tests.
"""

import json

import pytest
import yaml
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_config_file(tmp_path):
    """A config file that serves the bundled sample data."""
    config_content = {
        "dataset": {"source": None, "ttl_seconds": 3600},
        "mcp": {
            "transports": ["stdio"],
            "address": "localhost",
            "port": 18888,
            "debug": False,
        },
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config_content))
    return path


class CLITestCase:
    """Base class for CLI test cases with common utilities."""

    def assert_cli_success(self, result, expected_exit_code=0):
        assert result.exit_code == expected_exit_code, (
            f"CLI Output: {result.output}\nException: {result.exception}"
        )

    def assert_cli_error(self, result, expected_message: str = None):
        assert result.exit_code != 0
        if expected_message:
            assert expected_message in result.output

    def assert_json_output(self, result, expected_keys: list = None):
        try:
            output_data = json.loads(result.output)
        except json.JSONDecodeError:
            pytest.fail(f"Output is not valid JSON: {result.output}")
        for key in expected_keys or []:
            assert key in output_data
        return output_data


@pytest.fixture
def cli_test_base():
    """Fixture providing CLI test utilities."""
    return CLITestCase()
