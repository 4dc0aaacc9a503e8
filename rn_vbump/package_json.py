"""package.json version handling.

Keeps the JavaScript package version in step with the app version written
to the platform files. The file is rewritten with its original indentation
and trailing newline so the diff only touches the version line.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from .console import processing, warn
from .files import read_text, write_text
from .models import RunContext

_INDENT_RE = re.compile(r'^([ \t]+)"', re.MULTILINE)


def read_version(path: Path) -> dict[str, Any]:
    """Read the current version without changing anything.

    Returns:
        ``{"version": value}`` where value is whatever the file holds
        (string, number, ...) or None when there is no version field.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"package.json not found at: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    version = data.get("version") if isinstance(data, dict) else None
    return {"version": version}


def update_version(path: Path, new_version: str, ctx: RunContext) -> dict[str, Any] | None:
    """Set the top-level ``version`` field and record the change.

    Returns:
        ``{"version": new_version}``, or None when the file is missing or
        has no version to replace.

    Raises:
        json.JSONDecodeError: If the file exists but is not valid JSON.
    """
    path = Path(path)
    if not path.is_file():
        warn(f"package.json not found: {path}")
        return None

    content = read_text(path)
    data = json.loads(content)
    current = data.get("version") if isinstance(data, dict) else None
    if not current:
        warn(f"Could not find current version in {ctx.relative(path)}")
        return None

    processing("Processing package.json version...")
    data["version"] = new_version

    ctx.record("Package.json", path, "version", current, new_version)

    if not ctx.dry_run:
        write_text(path, _dump_like(data, content))

    return {"version": new_version}


def sync_package_version(new_version: str, ctx: RunContext) -> None:
    """Update the shared package.json once per run.

    The first platform file whose app version changes triggers the update;
    later calls in the same run are no-ops.
    """
    if ctx.package_json_updated or ctx.package_json_path is None:
        return
    update_version(ctx.package_json_path, new_version, ctx)
    ctx.package_json_updated = True


def _dump_like(data: Any, original: str) -> str:
    """Serialize ``data`` with the indentation and final newline of ``original``."""
    match = _INDENT_RE.search(original)
    indent: str | int = match.group(1) if match else 2
    text = json.dumps(data, indent=indent, ensure_ascii=False)
    if original.endswith("\n"):
        text += "\n"
    return text
