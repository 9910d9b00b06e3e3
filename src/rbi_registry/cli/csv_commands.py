"""Roster CSV CLI commands for RBI Registry.

This module provides CLI commands for resident roster validation and error
reporting.
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from rbi_registry.cli.output import echo_json, quiet_console, resolve_reference_date
from rbi_registry.csv_parser.parser import parse_residents_csv
from rbi_registry.csv_parser.validator import export_invalid_rows
from rbi_registry.logging_audit import log_audit_event
from rbi_registry.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


@click.group()
def csv() -> None:
    """Roster CSV operations and validation commands."""
    pass


@csv.command("validate")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--export-errors",
    type=click.Path(path_type=Path),
    help="Export invalid rows to CSV file",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date for age checks (YYYY-MM-DD, default: today)",
)
@click.pass_context
def validate_csv_command(
    ctx: click.Context,
    file: Path,
    export_errors: Optional[Path],
    json_output: bool,
    as_of: Optional[datetime],
) -> None:
    """Validate a resident roster CSV file.

    Performs data-quality validation including:
    - Birthdate checks (missing, unparseable, future, unreasonable age)
    - Recognised employment and education values
    - Sex, transfer date and duration of stay formats
    - Batch validation (duplicate resident IDs)

    Exits with code 0 for success (warnings are OK), code 1 for validation errors.

    Examples:

        # Basic validation with color-coded output
        rbi-registry csv validate residents.csv

        # Validate and export invalid rows to a separate file
        rbi-registry csv validate residents.csv --export-errors invalid_rows.csv

        # Output validation results in JSON format for automation
        rbi-registry csv validate residents.csv --json
    """
    config = ctx.obj["config"] if ctx.obj else None
    encoding = config.csv.encoding if config else "utf-8"
    max_age = config.csv.max_reasonable_age if config else 120
    start = time.perf_counter()

    with quiet_console(json_output):
        try:
            logger.info(f"Validating roster CSV file: {file}")
            df, result = parse_residents_csv(
                file,
                validate=True,
                encoding=encoding,
                today=resolve_reference_date(ctx, as_of),
                max_reasonable_age=max_age,
            )

            if json_output:
                echo_json(ctx, result.to_dict())
            else:
                report = result.format_report()
                if result.has_errors:
                    click.secho(report, fg="red", err=True)
                elif result.has_warnings:
                    click.secho(report, fg="yellow")
                else:
                    click.secho(report, fg="green")

            log_audit_event("ROSTER_VALIDATED", {
                "input_file": str(file),
                "record_count": result.total_rows,
                "status": "failure" if result.has_errors else "success",
                "duration": time.perf_counter() - start,
                "error_count": len(result.all_errors),
                "warning_count": len(result.all_warnings),
            })

            if result.has_errors:
                if export_errors:
                    export_invalid_rows(df, result, export_errors)
                    if not json_output:
                        click.echo(f"\nInvalid rows exported to: {export_errors}")
                logger.error("Validation failed with errors")
                sys.exit(1)

            logger.info("Validation complete. Exit code: 0")
            sys.exit(0)

        except ValidationError as e:
            click.secho(f"Validation Error: {e}", fg="red", err=True)
            logger.error(f"Validation error: {e}")
            sys.exit(1)
        except FileNotFoundError as e:
            click.secho(f"File not found: {e}", fg="red", err=True)
            logger.error(f"File not found: {e}")
            sys.exit(1)
