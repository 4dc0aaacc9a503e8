"""Terminal output helpers.

Thin wrappers around click.secho so every part of the pipeline prints
progress, warnings and errors the same way.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

import click

from .models import ChangeRecord


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    click.secho(f"\n{'─' * 60}\n{msg}\n{'─' * 60}", fg="blue", bold=True)


def info(msg: str) -> None:
    click.secho(msg, dim=True)


def success(msg: str) -> None:
    click.secho(f"✓ {msg}", fg="green")


def processing(msg: str) -> None:
    click.secho(msg, fg="cyan", bold=True)


def warn(msg: str) -> None:
    """Print a warning to stderr. Used for problems that skip one file."""
    click.secho(f"⚠  {msg}", fg="yellow", err=True)


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    click.secho(f"ERROR: {msg}", fg="red", bold=True, err=True)
    sys.exit(1)


HEADERS = ("Platform", "Item", "Before", "After")


def format_changes(changes: Sequence[ChangeRecord]) -> list[str]:
    """Lay out the change log as plain table rows (header first)."""
    rows = [HEADERS] + [
        (c.platform, c.item, str(c.old_value), str(c.new_value)) for c in changes
    ]
    widths = [max(len(row[i]) for row in rows) for i in range(len(HEADERS))]
    lines = []
    for n, row in enumerate(rows):
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
        if n == 0:
            lines.append("  ".join("─" * w for w in widths))
    return lines


def render_changes(changes: Sequence[ChangeRecord]) -> None:
    """Print the summary table of every recorded change."""
    click.secho("\nVersion bump completed successfully!", fg="green", bold=True)
    if not changes:
        click.secho("No changes were made.", fg="yellow")
        return

    header, rule, *body = format_changes(changes)
    click.echo()
    click.secho(header, fg="green", bold=True)
    click.secho(rule, dim=True)
    for line in body:
        click.echo(line)
