"""File pattern resolution.

Config patterns are either plain paths (relative to the project root or
absolute) or contain one wildcard path segment of the form ``*<suffix>``,
e.g. ``ios/*.xcodeproj/project.pbxproj``, where the Xcode project bundle's
name is not known in advance.
"""

from __future__ import annotations

from pathlib import Path

from .console import warn


def resolve_file_paths(patterns: list[str], project_root: Path) -> list[Path]:
    """Expand config patterns into existing file paths.

    Patterns that match nothing are dropped silently; an empty result means
    the platform is not present in this project.

    Args:
        patterns: Paths or single-wildcard patterns from the config.
        project_root: Directory relative patterns are resolved against.

    Returns:
        Existing files, in pattern order.
    """
    resolved: list[Path] = []
    for pattern in patterns:
        if "*" in pattern:
            resolved.extend(_resolve_wildcard(pattern, Path(project_root)))
        else:
            # Joining onto the root keeps absolute patterns unchanged
            path = Path(project_root) / pattern
            if path.is_file():
                resolved.append(path)
    return resolved


def _resolve_wildcard(pattern: str, project_root: Path) -> list[Path]:
    parts = Path(pattern).parts
    wild = [i for i, part in enumerate(parts) if "*" in part]
    segment = parts[wild[0]]
    if len(wild) != 1 or not segment.startswith("*") or "*" in segment[1:]:
        warn(f"Unsupported file pattern (only '*<suffix>' directories): {pattern}")
        return []

    suffix = segment[1:]
    search_dir = project_root.joinpath(*parts[: wild[0]])
    rest = parts[wild[0] + 1 :]
    if not search_dir.is_dir():
        return []

    matches: list[Path] = []
    for child in sorted(search_dir.iterdir()):
        if child.is_dir() and child.name.endswith(suffix):
            candidate = child.joinpath(*rest)
            if candidate.is_file():
                matches.append(candidate)
    return matches


def read_text(path: Path) -> str:
    """Read a whole file, keeping its line endings as they are."""
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def write_text(path: Path, content: str) -> None:
    """Write a whole file without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)
