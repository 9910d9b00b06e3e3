"""Main CLI entry point for RBI Registry.

This module provides the main Click command group for the rbi-registry CLI.
"""

from pathlib import Path
from typing import Optional

import click

from rbi_registry import __version__
from rbi_registry.cli.classify_commands import (
    classify_command,
    demographics_command,
    stats_command,
)
from rbi_registry.cli.csv_commands import csv
from rbi_registry.config import load_config
from rbi_registry.logging_audit import (
    configure_logging,
    configure_operation_logging_from_config,
)
from rbi_registry.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="rbi-registry")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-pii",
    is_flag=True,
    help="Redact PII (resident names, birthdates) from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_pii: bool,
) -> None:
    """RBI Registry - resident classification and statistics for barangay rosters.

    Derives sectoral flags, migration status and vulnerability tags for each
    resident, and aggregates them into group statistics and demographics.

    Common usage:

        # Check a roster for data-quality problems
        rbi-registry csv validate residents.csv

        # Classify each resident
        rbi-registry classify residents.csv

        # Group statistics as of a fixed date, as JSON
        rbi-registry stats residents.csv --as-of 2024-06-30 --json

        # Enable verbose logging for debugging
        rbi-registry --verbose demographics residents.csv

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["redact_pii"] = redact_pii
    ctx.obj["log_file"] = log_file

    # Precedence: CLI flags > config file > defaults
    log_level = "DEBUG" if verbose else config_obj.logging.level
    log_file_path = log_file if log_file else config_obj.logging.log_file
    redact_pii_setting = redact_pii if redact_pii else config_obj.logging.redact_pii

    configure_logging(
        level=log_level, log_file=log_file_path, redact_pii=redact_pii_setting
    )
    configure_operation_logging_from_config(config_obj.operation_logging)


# Register commands
cli.add_command(csv)
cli.add_command(classify_command)
cli.add_command(stats_command)
cli.add_command(demographics_command)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        rbi-registry config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)

        click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
        click.echo(f"\nConfiguration file: {config_file}")

        reference_date = config_obj.classification.reference_date
        click.echo("\nClassification:")
        click.echo(f"  Reference date: {reference_date.isoformat() if reference_date else 'today'}")

        click.echo("\nCSV:")
        click.echo(f"  Encoding:       {config_obj.csv.encoding}")
        click.echo(f"  Max age:        {config_obj.csv.max_reasonable_age}")

        click.echo("\nLogging:")
        click.echo(f"  Level:          {config_obj.logging.level}")
        click.echo(f"  Log file:       {config_obj.logging.log_file}")
        click.echo(f"  Redact PII:     {config_obj.logging.redact_pii}")

        ops = config_obj.operation_logging
        click.echo("\nOperation logging:")
        click.echo(f"  CSV:            {ops.csv_log_level}")
        click.echo(f"  Classification: {ops.classification_log_level}")
        click.echo(f"  Statistics:     {ops.statistics_log_level}")

    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"rbi-registry version {__version__}")


if __name__ == "__main__":
    cli()
