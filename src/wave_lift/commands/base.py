"""Shared CLI utilities."""

import asyncio
import logging
from functools import wraps
from pathlib import Path

import click

from ..config import Settings
from ..db import get_db_path
from ..engine.errors import InvalidState
from ..services.errors import ConfirmationError, NotFoundError

logger = logging.getLogger(__name__)


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def handle_errors(f):
    """Turn domain errors into a red message and exit code 1."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (NotFoundError, ConfirmationError, InvalidState, ValueError) as e:
            logger.debug("Command failed", exc_info=True)
            echo_error(str(e))
            raise click.exceptions.Exit(1) from e

    return wrapper


def get_data_dir() -> Path:
    """Get the data directory path."""
    return Settings.from_env().data_dir


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'wave-lift init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)),
        "".join("-" * w + " " * padding for w in widths),
    ]
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)


def format_weight(weight: float | None) -> str:
    """Render a weight in kg, dropping a trailing .0."""
    if weight is None:
        return "-"
    return f"{weight:g}kg"
