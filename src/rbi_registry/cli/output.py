"""Output helpers shared by CLI commands."""

import json as json_lib
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator, Optional

import click

from rbi_registry.config import Config


@contextmanager
def quiet_console(enabled: bool) -> Iterator[None]:
    """Silence console log handlers while machine-readable output is written.

    File handlers are left alone so the log file still records the run.
    """
    silenced: list[tuple[logging.Handler, int]] = []

    if enabled:
        for handler in logging.getLogger().handlers:
            if isinstance(handler, logging.StreamHandler) and not hasattr(handler, "baseFilename"):
                silenced.append((handler, handler.level))
                handler.setLevel(logging.CRITICAL + 1)  # Effectively disable
    try:
        yield
    finally:
        for handler, original_level in silenced:
            handler.setLevel(original_level)


def echo_json(ctx: click.Context, payload: Any) -> None:
    """Write payload as JSON using the configured indentation."""
    config: Optional[Config] = (ctx.obj or {}).get("config")
    indent = config.output.json_indent if config else 2
    click.echo(json_lib.dumps(payload, indent=indent or None, default=str))


def resolve_reference_date(ctx: click.Context, as_of: Optional[datetime]) -> Optional[date]:
    """Reference date with precedence: --as-of > configured reference_date > None (today)."""
    if as_of is not None:
        return as_of.date()
    config: Optional[Config] = (ctx.obj or {}).get("config")
    if config is not None:
        return config.classification.reference_date
    return None
