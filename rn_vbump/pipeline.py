"""Version bump pipeline: locate → configure → resolve → select → update → report.

This module orchestrates a single rn-vbump run:
1. Find the React Native project root (or use the one given)
2. Load the project config and resolve Android/iOS file patterns
3. Decide which platforms and fields to update (flags, prompt or default)
4. Decide the increment type for app versions
5. Confirm with the user unless this is a dry run
6. Rewrite the platform files and keep package.json in step
7. Print a summary of every change

Steps that need a decision from the user fall back to fixed defaults when
the run is not interactive.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from .android import update_android_versions
from .console import fatal, info, render_changes, step, success, warn
from .detection import detect_project_root, load_project_config
from .files import resolve_file_paths
from .ios import update_ios_versions
from .models import BumpOptions, FieldUpdate, RunContext, Target
from .package_json import read_version
from .prompts import prompt_for_confirmation, prompt_for_increment, prompt_for_targets
from .versions import parse_build_number, validate_increment

DEFAULT_TARGETS = [Target.ANDROID, Target.IOS]
FALLBACK_VERSION = "0.1.0"


def locate_project(options: BumpOptions) -> Path:
    """Return the project root, exiting if none can be found."""
    if options.project_path is not None:
        root = Path(options.project_path).resolve()
        if not root.is_dir():
            fatal(f"Project path is not a directory: {root}")
        return root

    root = detect_project_root(Path.cwd())
    if root is None:
        fatal(
            "Could not detect React Native project.\n"
            "Make sure you are in a React Native project directory "
            "or specify --project-path."
        )
    return root


def determine_targets(options: BumpOptions) -> list[Target]:
    """Pick what to update from the flags, asking the user if none were given.

    Flags are checked in a fixed order and the first match wins.
    """
    if options.android and options.ios:
        return [Target.ANDROID, Target.IOS]
    if options.android:
        return [Target.ANDROID]
    if options.ios:
        return [Target.IOS]
    if options.android_build_number is not None:
        return [Target.ANDROID_BUILD_NUMBER_ONLY]
    if options.android_app_version is not None:
        return [Target.ANDROID_APP_VERSION_ONLY]
    if options.ios_build_number is not None:
        return [Target.IOS_BUILD_NUMBER_ONLY]
    if options.ios_app_version is not None:
        return [Target.IOS_APP_VERSION_ONLY]
    if options.build_numbers:
        return [Target.BUILD_NUMBERS_ONLY]

    if not options.interactive:
        return list(DEFAULT_TARGETS)
    return prompt_for_targets()


def check_target_files(
    targets: list[Target], android_files: list[Path], ios_files: list[Path]
) -> None:
    """Exit if a selected platform has no files to update."""
    if any(t.needs_android for t in targets) and not android_files:
        fatal(
            "No Android files found.\n"
            "Check your file paths or create a vbump.config.py file."
        )
    if any(t.needs_ios for t in targets) and not ios_files:
        fatal(
            "No iOS files found.\n"
            "Check your file paths or create a vbump.config.py file."
        )


def determine_increment(
    options: BumpOptions, targets: list[Target], package_json_path: Path | None
) -> str:
    """Resolve the increment type for auto-incremented app versions.

    An explicit --increment always wins. Otherwise the user is only asked
    when app versions are going to be auto-incremented.

    Raises:
        FormatError: If --increment is not major, minor or patch.
    """
    if options.increment is not None:
        return validate_increment(options.increment)

    if options.android_app_version or options.ios_app_version:
        return "patch"

    if not any(t.updates_app_version for t in targets) or not options.interactive:
        return "patch"

    return prompt_for_increment(_current_version(package_json_path))


def _current_version(package_json_path: Path | None) -> str:
    """Version shown in the increment prompt's examples."""
    if package_json_path is None:
        return FALLBACK_VERSION
    try:
        version = read_version(package_json_path)["version"]
    except (OSError, json.JSONDecodeError):
        info("Could not read current version from package.json, using generic examples")
        return FALLBACK_VERSION
    return str(version) if version else FALLBACK_VERSION


def build_requests(options: BumpOptions) -> dict[str, FieldUpdate]:
    """Turn the raw field options into updates for the selected fields.

    Explicit build numbers are validated here, before any file is touched.

    Raises:
        FormatError: If an explicit build number is not an integer.
    """
    requests = {
        "android_build_number": FieldUpdate.from_option(options.android_build_number),
        "android_app_version": FieldUpdate.from_option(options.android_app_version),
        "ios_build_number": FieldUpdate.from_option(options.ios_build_number),
        "ios_app_version": FieldUpdate.from_option(options.ios_app_version),
    }
    for name in ("android_build_number", "ios_build_number"):
        request = requests[name]
        if request.value is not None:
            parse_build_number(request.value)
    return requests


def confirm_changes(options: BumpOptions) -> bool:
    """Ask for confirmation before writing. Dry runs never ask."""
    if options.dry_run or not options.interactive:
        return True
    click.secho("\nYou are about to modify version files!", fg="yellow", bold=True)
    return prompt_for_confirmation()


def execute_updates(
    targets: list[Target],
    android_files: list[Path],
    ios_files: list[Path],
    requests: dict[str, FieldUpdate],
    ctx: RunContext,
) -> None:
    """Run the platform mutators for every selected target."""
    skip = FieldUpdate.skip()
    android_code = requests["android_build_number"]
    android_name = requests["android_app_version"]
    ios_build = requests["ios_build_number"]
    ios_marketing = requests["ios_app_version"]

    for target in targets:
        if target is Target.ANDROID:
            update_android_versions(android_files, android_code, android_name, ctx)
        elif target is Target.ANDROID_BUILD_NUMBER_ONLY:
            update_android_versions(android_files, android_code, skip, ctx)
        elif target is Target.ANDROID_APP_VERSION_ONLY:
            update_android_versions(android_files, skip, android_name, ctx)
        elif target is Target.IOS:
            update_ios_versions(ios_files, ios_build, ios_marketing, ctx)
        elif target is Target.IOS_BUILD_NUMBER_ONLY:
            update_ios_versions(ios_files, ios_build, skip, ctx)
        elif target is Target.IOS_APP_VERSION_ONLY:
            update_ios_versions(ios_files, skip, ios_marketing, ctx)
        elif target is Target.BUILD_NUMBERS_ONLY:
            update_android_versions(android_files, android_code, skip, ctx)
            update_ios_versions(ios_files, ios_build, skip, ctx)


def show_next_steps(ctx: RunContext) -> None:
    click.secho("\nNext steps:", fg="blue", bold=True)
    info("   git add .")
    info('   git commit -m "chore: bump version"')
    if ctx.package_json_updated:
        info("   Note: package.json version was also updated")
    if ctx.dry_run:
        warn("This was a dry run - no files were modified.")
        warn("Remove --dry-run to apply the changes.")


def run_bump(options: BumpOptions) -> RunContext | None:
    """Run the full version bump.

    Returns:
        The run context with the change log, or None if the user declined
        the confirmation prompt.

    Raises:
        FormatError: For an invalid increment type or explicit build number.
        click.Abort: If the user interrupts a prompt.
        SystemExit: For run-level failures (no project, no files, or
            every selected file holding an invalid version).
    """
    step("react-native-vbump")

    project_root = locate_project(options)
    success(f"Detected React Native project: {project_root}")

    config = load_project_config(project_root, options.config)
    android_files = resolve_file_paths(config.android.files, project_root)
    ios_files = resolve_file_paths(config.ios.files, project_root)

    if not android_files and not ios_files:
        fatal(
            "No Android or iOS files found.\n"
            "Check your file paths or create a vbump.config.py file."
        )
    info(f"Found {len(android_files)} Android file(s), {len(ios_files)} iOS file(s)")

    ctx = RunContext(
        project_root=project_root,
        dry_run=options.dry_run,
        package_json_path=(
            project_root / config.package_json if config.package_json else None
        ),
    )

    targets = determine_targets(options)
    check_target_files(targets, android_files, ios_files)
    ctx.increment = determine_increment(options, targets, ctx.package_json_path)
    requests = build_requests(options)

    if not confirm_changes(options):
        return None

    execute_updates(targets, android_files, ios_files, requests, ctx)
    if ctx.invalid_files and not ctx.changes:
        invalid = ", ".join(ctx.relative(p) for p in ctx.invalid_files)
        fatal(f"No files were updated. Invalid current version in: {invalid}")

    render_changes(ctx.changes)
    show_next_steps(ctx)
    return ctx
