"""Android build.gradle version handling.

Reads and rewrites ``versionCode <int>`` and ``versionName "<version>"``
with plain text substitution; the Gradle file is never parsed.
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

PLATFORM = "Android"

VERSION_CODE_RE = re.compile(r"versionCode\s+([0-9]+)")
VERSION_NAME_RE = re.compile(r'versionName\s+"([^"]+)"')


def update_android_versions(
    files: list[Path],
    version_code: FieldUpdate,
    version_name: FieldUpdate,
    ctx: RunContext,
) -> list[FileVersions]:
    """Update versionCode and/or versionName in each build.gradle file.

    Files that are missing or lack either field are skipped with a warning;
    the remaining files are still processed.

    Args:
        files: Resolved build.gradle paths.
        version_code: How to change versionCode.
        version_name: How to change versionName.
        ctx: Run state; receives change records.

    Returns:
        The resulting values for every file that was processed.
    """
    results: list[FileVersions] = []
    for path in files:
        result = _process_file(Path(path), version_code, version_name, ctx)
        if result is not None:
            results.append(result)
    return results


def _process_file(
    path: Path,
    version_code: FieldUpdate,
    version_name: FieldUpdate,
    ctx: RunContext,
) -> FileVersions | None:
    if not path.is_file():
        warn(f"Android build.gradle not found: {path}")
        return None

    content = read_text(path)
    code_match = VERSION_CODE_RE.search(content)
    name_match = VERSION_NAME_RE.search(content)
    if not code_match or not name_match:
        warn(f"Could not find version values in: {path}")
        return None

    processing(f"Processing Android file: {ctx.relative(path)}")

    current_code = code_match.group(1)
    current_name = name_match.group(1)

    try:
        new_code: int | str = current_code
        if not version_code.skipped:
            new_code = calculate_new_build_number(
                version_code.user_value(), current_code
            )
        new_name = current_name
        if not version_name.skipped:
            new_name = calculate_new_semantic_version(
                version_name.user_value(), current_name, ctx.increment
            )
    except FormatError as exc:
        warn(f"Skipping {path}: {exc}")
        ctx.invalid_files.append(path)
        return None

    if not version_code.skipped:
        content = VERSION_CODE_RE.sub(f"versionCode {new_code}", content)
    if not version_name.skipped:
        content = VERSION_NAME_RE.sub(lambda _: f'versionName "{new_name}"', content)

    if not ctx.dry_run:
        write_text(path, content)

    if not version_code.skipped:
        ctx.record(PLATFORM, path, "versionCode", current_code, new_code)
    if not version_name.skipped:
        ctx.record(PLATFORM, path, "versionName", current_name, new_name)
        sync_package_version(new_name, ctx)

    return FileVersions(path=path, build_number=new_code, app_version=new_name)


def parse_android_versions(path: Path) -> dict[str, Any]:
    """Read versionCode and versionName without changing the file.

    Returns:
        ``{"versionCode": int | None, "versionName": str | None}``.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Android build.gradle not found at: {path}")

    content = read_text(path)
    code_match = VERSION_CODE_RE.search(content)
    name_match = VERSION_NAME_RE.search(content)
    return {
        "versionCode": int(code_match.group(1)) if code_match else None,
        "versionName": name_match.group(1) if name_match else None,
    }
