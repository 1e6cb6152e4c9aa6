"""Tests for the root storefront CLI."""

import pytest
from click.testing import CliRunner

from storefront import __version__
from storefront.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "storefront" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_shop")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/nonexistent-storefront.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_shop")
def test_invalid_toml_is_reported(cli_runner: CliRunner, tmp_path) -> None:
    (tmp_path / "storefront.toml").write_text("[storage\n")
    result = cli_runner.invoke(cli, ["products"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output


@pytest.mark.usefixtures("_isolated_shop")
def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["wishlist"])
    assert result.exit_code == 2
