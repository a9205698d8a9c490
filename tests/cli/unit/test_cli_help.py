"""CLI smoke tests."""

from click.testing import CliRunner
from schemamix.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "mix" in result.output
    assert "generate-config" in result.output
    assert "--log-level" in result.output
