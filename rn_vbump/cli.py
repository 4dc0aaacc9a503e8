"""CLI entry point for rn-vbump."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from rn_vbump.models import BumpOptions
from rn_vbump.pipeline import run_bump
from rn_vbump.versions import FormatError


def _optional_value(name: str, metavar: str, help_text: str):
    """An option usable bare (auto-increment) or with an explicit value."""
    return click.option(
        name,
        is_flag=False,
        flag_value="",
        default=None,
        metavar=f"[{metavar}]",
        help=help_text,
    )


def _cancelled() -> None:
    click.secho("\nOperation cancelled by user.", fg="yellow")
    sys.exit(0)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="rn-vbump")
@click.option(
    "-p",
    "--project-path",
    type=click.Path(path_type=Path),
    help="Path to the React Native project (auto-detected if not specified).",
)
@click.option(
    "-c", "--config", type=click.Path(path_type=Path), help="Path to a config file."
)
@click.option(
    "-a", "--android", is_flag=True, help="Update Android (app version + build number)."
)
@click.option("-i", "--ios", is_flag=True, help="Update iOS (app version + build number).")
@click.option(
    "--build-numbers",
    is_flag=True,
    help="Update build numbers only, on both platforms.",
)
@_optional_value(
    "--android-build-number",
    "NUMBER",
    "Update Android versionCode only; auto-increments if no number is given.",
)
@_optional_value(
    "--android-app-version",
    "VERSION",
    "Update Android versionName only; auto-increments if no version is given.",
)
@_optional_value(
    "--ios-build-number",
    "NUMBER",
    "Update iOS CURRENT_PROJECT_VERSION only; auto-increments if no number is given.",
)
@_optional_value(
    "--ios-app-version",
    "VERSION",
    "Update iOS MARKETING_VERSION only; auto-increments if no version is given.",
)
@click.option(
    "--increment",
    metavar="[major|minor|patch]",
    help="Increment type for app versions.",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would be updated without making changes."
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    help="Never prompt; use defaults (both platforms, patch) and skip confirmation.",
)
def cli(
    project_path: Path | None,
    config: Path | None,
    android: bool,
    ios: bool,
    build_numbers: bool,
    android_build_number: str | None,
    android_app_version: str | None,
    ios_build_number: str | None,
    ios_app_version: str | None,
    increment: str | None,
    dry_run: bool,
    yes: bool,
) -> None:
    """Bump version numbers for React Native Android and iOS projects."""
    options = BumpOptions(
        project_path=project_path,
        config=config,
        android=android,
        ios=ios,
        build_numbers=build_numbers,
        android_build_number=android_build_number,
        android_app_version=android_app_version,
        ios_build_number=ios_build_number,
        ios_app_version=ios_app_version,
        increment=increment,
        dry_run=dry_run,
        interactive=not yes and sys.stdin.isatty(),
    )

    try:
        ctx = run_bump(options)
    except click.Abort:
        ctx = None
    except (FormatError, json.JSONDecodeError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc

    if ctx is None:
        _cancelled()
