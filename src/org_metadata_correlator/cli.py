"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from org_metadata_correlator.bulk_retrieval import BulkRetrievalError
from org_metadata_correlator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from org_metadata_correlator.correlation import DuplicateCanonicalIdError, EntityNotFoundError
from org_metadata_correlator.entity_models import EntityConstructionError
from org_metadata_correlator.org_snapshot import SnapshotError
from org_metadata_correlator.run_execution import (
    RunExecutionError,
    RunOutcome,
    RunRequest,
    execute_flow_correlation_run,
    execute_object_description_run,
)

_RUN_ERRORS = (
    RunExecutionError,
    EntityNotFoundError,
    BulkRetrievalError,
    EntityConstructionError,
    DuplicateCanonicalIdError,
    SnapshotError,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="org-metadata-correlator")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log correlation progress.")
def cli(verbose: bool) -> None:
    """Org metadata correlation utility."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="flows")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Output file; .xlsx writes a workbook, anything else JSON. Defaults to stdout.",
)
def flows(config_path: str, output_path: str | None) -> None:
    """Correlate flow definitions with their versions."""
    try:
        outcome = execute_flow_correlation_run(
            RunRequest(config_path=config_path, output_path=output_path)
        )
    except _RUN_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_outcome(outcome)


@cli.command(name="object")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option(
    "--name",
    "object_name",
    required=True,
    help="Object API name, for example Account or ns__Invoice__c",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Output file; .xlsx writes a workbook, anything else JSON. Defaults to stdout.",
)
def describe_object(config_path: str, object_name: str, output_path: str | None) -> None:
    """Describe one object merged with its sub-resources."""
    try:
        outcome = execute_object_description_run(
            RunRequest(config_path=config_path, output_path=output_path, object_name=object_name)
        )
    except _RUN_ERRORS as exc:
        raise CliError(str(exc)) from exc
    _echo_outcome(outcome)


def _echo_outcome(outcome: RunOutcome) -> None:
    if outcome.rendered_json is not None:
        click.echo(outcome.rendered_json)
    else:
        click.echo(str(outcome.output_path))


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
