"""iOS project.pbxproj version handling.

An Xcode project repeats ``CURRENT_PROJECT_VERSION`` and
``MARKETING_VERSION`` once per build configuration (Debug, Release, ...).
The first occurrence is taken as the current value and every occurrence is
rewritten to the same new value.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from .console import processing, warn
from .files import read_text, write_text
from .models import FieldUpdate, FileVersions, RunContext
from .package_json import sync_package_version
from .versions import (
    FormatError,
    calculate_new_build_number,
    calculate_new_semantic_version,
)

PLATFORM = "iOS"

PROJECT_VERSION_RE = re.compile(r"CURRENT_PROJECT_VERSION = ([0-9]+);")
MARKETING_VERSION_RE = re.compile(r"MARKETING_VERSION = ([^;]+);")


def update_ios_versions(
    files: list[Path],
    project_version: FieldUpdate,
    marketing_version: FieldUpdate,
    ctx: RunContext,
) -> list[FileVersions]:
    """Update CURRENT_PROJECT_VERSION and/or MARKETING_VERSION in each file.

    Files that are missing or lack either field are skipped with a warning;
    the remaining files are still processed.

    Returns:
        The resulting values for every file that was processed.
    """
    results: list[FileVersions] = []
    for path in files:
        result = _process_file(Path(path), project_version, marketing_version, ctx)
        if result is not None:
            results.append(result)
    return results


def _process_file(
    path: Path,
    project_version: FieldUpdate,
    marketing_version: FieldUpdate,
    ctx: RunContext,
) -> FileVersions | None:
    if not path.is_file():
        warn(f"iOS project.pbxproj not found: {path}")
        return None

    content = read_text(path)
    build_match = PROJECT_VERSION_RE.search(content)
    marketing_match = MARKETING_VERSION_RE.search(content)
    if not build_match or not marketing_match:
        warn(f"Could not find version values in: {path}")
        return None

    processing(f"Processing iOS file: {ctx.relative(path)}")

    current_build = build_match.group(1)
    current_marketing = marketing_match.group(1)

    try:
        new_build: int | str = current_build
        if not project_version.skipped:
            new_build = calculate_new_build_number(
                project_version.user_value(), current_build
            )
        new_marketing = current_marketing
        if not marketing_version.skipped:
            new_marketing = calculate_new_semantic_version(
                marketing_version.user_value(), current_marketing, ctx.increment
            )
    except FormatError as exc:
        warn(f"Skipping {path}: {exc}")
        ctx.invalid_files.append(path)
        return None

    if not project_version.skipped:
        content = PROJECT_VERSION_RE.sub(
            f"CURRENT_PROJECT_VERSION = {new_build};", content
        )
    if not marketing_version.skipped:
        content = MARKETING_VERSION_RE.sub(
            lambda _: f"MARKETING_VERSION = {new_marketing};", content
        )

    if not ctx.dry_run:
        write_text(path, content)

    if not project_version.skipped:
        ctx.record(
            PLATFORM, path, "CURRENT_PROJECT_VERSION", current_build, new_build
        )
    if not marketing_version.skipped:
        ctx.record(
            PLATFORM, path, "MARKETING_VERSION", current_marketing, new_marketing
        )
        sync_package_version(new_marketing, ctx)

    return FileVersions(path=path, build_number=new_build, app_version=new_marketing)


def parse_ios_versions(path: Path) -> dict[str, Any]:
    """Read the first CURRENT_PROJECT_VERSION and MARKETING_VERSION.

    Returns:
        ``{"currentProjectVersion": int | None, "marketingVersion": str | None}``.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"iOS project.pbxproj not found at: {path}")

    content = read_text(path)
    build_match = PROJECT_VERSION_RE.search(content)
    marketing_match = MARKETING_VERSION_RE.search(content)
    return {
        "currentProjectVersion": int(build_match.group(1)) if build_match else None,
        "marketingVersion": marketing_match.group(1) if marketing_match else None,
    }
