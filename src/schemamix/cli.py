"""Command line interface entry point."""

from __future__ import annotations

import sys

import click

from schemamix.configuration import DEFAULT_CONFIG_FILENAME, write_placeholder_configuration
from schemamix.logging_setup import LOG_LEVELS, configure_logging
from schemamix.mix_execution import MixExecutionError, MixRequest, execute_mix_request


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schemamix")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Minimum level of log records written to stderr",
)
def cli(log_level: str) -> None:
    """Compose partial schema documents into one generated schema."""
    configure_logging(log_level)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML mixer configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML mixer configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="mix")
@click.option(
    "--config",
    "config_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON mixer configuration file",
)
@click.option(
    "--base-dir",
    "base_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=str),
    help="Directory that input patterns and outputs resolve against "
    "(defaults to the configuration file's directory)",
)
def mix(config_path: str, base_dir: str | None) -> None:
    """Compose the input schemas of every configured mixer."""
    try:
        outcomes = execute_mix_request(MixRequest(config_path=config_path, base_dir=base_dir))
    except MixExecutionError as exc:
        raise CliError(str(exc)) from exc

    failed = [outcome for outcome in outcomes if not outcome.succeeded]
    for outcome in outcomes:
        if outcome.succeeded:
            click.echo(str(outcome.output_path))
    if failed:
        details = "; ".join(f"{outcome.output_path}: {outcome.error}" for outcome in failed)
        raise CliError(f"{len(failed)} mixer(s) could not be written: {details}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
