"""Classification, statistics and demographics CLI commands.

Each command loads a resident roster CSV, runs the classification engine
against one reference date and prints either a readable summary or JSON.
"""

import logging
import sys
import time
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import click
import pandas as pd

from rbi_registry.classification import (
    build_population_pyramid,
    calculate_civil_status_distribution,
    calculate_dependency_ratios,
    calculate_employment_status_distribution,
    calculate_sex_distribution,
    calculate_resident_statistics,
    classify_residents,
)
from rbi_registry.classification.age import today_utc
from rbi_registry.cli.output import echo_json, quiet_console, resolve_reference_date
from rbi_registry.csv_parser.parser import dataframe_to_contexts, parse_residents_csv
from rbi_registry.logging_audit import log_audit_event
from rbi_registry.models.context import ClassificationContext
from rbi_registry.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

json_option = click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
as_of_option = click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date for ages and migration recency (YYYY-MM-DD, default: today)",
)


def _load_roster(
    ctx: click.Context, file: Path
) -> tuple[pd.DataFrame, list[ClassificationContext]]:
    """Parse the roster without validation; warnings belong to 'csv validate'."""
    config = ctx.obj["config"] if ctx.obj else None
    encoding = config.csv.encoding if config else "utf-8"
    df, _ = parse_residents_csv(file, validate=False, encoding=encoding)
    return df, dataframe_to_contexts(df)


def _run(ctx: click.Context, event_type: str, file: Path, json_output: bool, body) -> None:
    """Run a command body with console suppression, auditing and error handling.

    Args:
        ctx: Click context holding the loaded configuration
        event_type: Audit event name
        file: Roster CSV path
        json_output: Whether console logging should be silenced
        body: Callable taking (df, contexts) that writes the output
    """
    start = time.perf_counter()
    with quiet_console(json_output):
        try:
            df, contexts = _load_roster(ctx, file)
            body(df, contexts)
            log_audit_event(event_type, {
                "input_file": str(file),
                "record_count": len(contexts),
                "status": "success",
                "duration": time.perf_counter() - start,
            })
        except ValidationError as e:
            click.secho(f"Validation Error: {e}", fg="red", err=True)
            log_audit_event(event_type, {
                "input_file": str(file),
                "status": "failure",
                "error_message": str(e),
                "duration": time.perf_counter() - start,
            })
            sys.exit(1)
        except FileNotFoundError as e:
            click.secho(f"File not found: {e}", fg="red", err=True)
            logger.error(f"File not found: {e}")
            sys.exit(1)


def _resident_label(row: pd.Series, row_num: int) -> str:
    resident_id = row.get("resident_id")
    if isinstance(resident_id, str) and resident_id.strip():
        return resident_id.strip()
    return f"row {row_num}"


@click.command("classify")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@json_option
@as_of_option
@click.pass_context
def classify_command(
    ctx: click.Context, file: Path, json_output: bool, as_of: Optional[datetime]
) -> None:
    """Classify every resident in a roster CSV.

    Prints sectoral flags, migration status and vulnerability tags per resident.

    Examples:

        rbi-registry classify residents.csv

        rbi-registry classify residents.csv --as-of 2024-06-30 --json
    """
    reference = resolve_reference_date(ctx, as_of) or today_utc()

    def body(df: pd.DataFrame, contexts: list[ClassificationContext]) -> None:
        classifications = classify_residents(contexts, reference)
        records: list[dict[str, Any]] = []
        for idx, classification in enumerate(classifications):
            row = df.iloc[idx]
            record = {"row_number": idx + 2, "resident": _resident_label(row, idx + 2)}
            record.update(classification.to_dict())
            records.append(record)

        if json_output:
            echo_json(ctx, {"reference_date": reference.isoformat(), "residents": records})
            return

        click.echo(f"Classification as of {reference.isoformat()} ({len(records)} residents)")
        click.echo("=" * 60)
        for record in records:
            sectoral = [name for name, value in record["sectoral"].items() if value]
            migration = record["migration"]
            click.echo(f"{record['resident']} | age {record['age']}")
            click.echo(f"  Sectoral:        {', '.join(sectoral) or 'none'}")
            if migration["is_migrant"]:
                click.echo(
                    f"  Migration:       migrant"
                    f" (reason: {migration['migration_reason'] or 'unknown'},"
                    f" type: {migration['migration_type'] or 'unknown'})"
                )
            tags = record["vulnerabilities"]
            if tags:
                click.secho(f"  Vulnerabilities: {', '.join(tags)}", fg="yellow")
            else:
                click.echo("  Vulnerabilities: none")

    _run(ctx, "RESIDENTS_CLASSIFIED", file, json_output, body)


@click.command("stats")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@json_option
@as_of_option
@click.pass_context
def stats_command(
    ctx: click.Context, file: Path, json_output: bool, as_of: Optional[datetime]
) -> None:
    """Compute group statistics for a roster CSV.

    Examples:

        rbi-registry stats residents.csv

        rbi-registry stats residents.csv --json
    """
    reference = resolve_reference_date(ctx, as_of) or today_utc()

    def body(df: pd.DataFrame, contexts: list[ClassificationContext]) -> None:
        stats = calculate_resident_statistics(contexts, reference)

        if json_output:
            payload = {"reference_date": reference.isoformat()}
            payload.update(stats.to_dict())
            echo_json(ctx, payload)
            return

        data = stats.to_dict()
        click.echo(f"Resident statistics as of {reference.isoformat()}")
        click.echo("=" * 60)
        click.echo(f"Total residents: {stats.total}")
        for title in ("sectoral", "migration", "vulnerabilities"):
            click.echo(f"\n{title.capitalize()}:")
            if not data[title]:
                click.echo("  (none)")
            for name, count in data[title].items():
                click.echo(f"  {name:<28} {count}")

    _run(ctx, "STATISTICS_COMPUTED", file, json_output, body)


def _demographics_payload(
    contexts: list[ClassificationContext], reference: date
) -> dict[str, Any]:
    pyramid = build_population_pyramid(contexts, reference)
    return {
        "reference_date": reference.isoformat(),
        "total": len(contexts),
        "population_pyramid": [
            {
                "age_range": group.age_range,
                "male": group.male,
                "female": group.female,
                "male_percentage": round(group.male_percentage, 2),
                "female_percentage": round(group.female_percentage, 2),
            }
            for group in pyramid
        ],
        "dependency_ratios": calculate_dependency_ratios(pyramid).to_dict(),
        "sex_distribution": calculate_sex_distribution(contexts),
        "civil_status_distribution": calculate_civil_status_distribution(contexts),
        "employment_status_distribution": calculate_employment_status_distribution(contexts),
    }


@click.command("demographics")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@json_option
@as_of_option
@click.pass_context
def demographics_command(
    ctx: click.Context, file: Path, json_output: bool, as_of: Optional[datetime]
) -> None:
    """Population pyramid, dependency ratios and distributions for a roster CSV.

    Examples:

        rbi-registry demographics residents.csv

        rbi-registry demographics residents.csv --as-of 2024-01-01 --json
    """
    reference = resolve_reference_date(ctx, as_of) or today_utc()

    def body(df: pd.DataFrame, contexts: list[ClassificationContext]) -> None:
        payload = _demographics_payload(contexts, reference)

        if json_output:
            echo_json(ctx, payload)
            return

        click.echo(f"Demographics as of {payload['reference_date']} ({payload['total']} residents)")
        click.echo("=" * 60)
        click.echo(f"{'Age':<8}{'Male':>8}{'Female':>8}")
        for group in payload["population_pyramid"]:
            if group["male"] or group["female"]:
                click.echo(f"{group['age_range']:<8}{group['male']:>8}{group['female']:>8}")

        ratios = payload["dependency_ratios"]
        click.echo("\nDependency ratios (per 100 working-age):")
        click.echo(f"  Total: {ratios['dependency_ratio']:.1f}")
        click.echo(f"  Young: {ratios['young_dependency_ratio']:.1f}")
        click.echo(f"  Old:   {ratios['old_dependency_ratio']:.1f}")

        for title, key in (
            ("Sex", "sex_distribution"),
            ("Civil status", "civil_status_distribution"),
            ("Employment status", "employment_status_distribution"),
        ):
            click.echo(f"\n{title}:")
            for name, value in payload[key].items():
                if isinstance(value, float):
                    click.echo(f"  {name:<24} {value:.1f}")
                else:
                    click.echo(f"  {name:<24} {value}")

    _run(ctx, "DEMOGRAPHICS_COMPUTED", file, json_output, body)
