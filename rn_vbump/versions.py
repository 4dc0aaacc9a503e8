"""Version parsing and bumping utilities.

Semantic versions are strict ``major.minor.patch`` triples; prerelease and
build metadata are rejected. Build numbers are plain integers stored as text
in the platform files.
"""

from __future__ import annotations

import re
from typing import Union

import semver

INCREMENT_TYPES = ("patch", "minor", "major")

_SEMVER_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")
_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")

# Raw values as they arrive from the command line or a caller:
# True means "auto-increment", anything else non-empty is an explicit value.
UserValue = Union[str, int, bool, None]


class FormatError(ValueError):
    """Raised for malformed version strings, build numbers or increment types."""


def parse_version(version_str: str) -> semver.Version:
    """Parse a strict ``major.minor.patch`` string into a semver.Version.

    Leading zeros are tolerated ("01.2.3" → 1.2.3), anything else is not.

    Raises:
        FormatError: If the string is not exactly three dot-separated integers.
    """
    match = _SEMVER_RE.fullmatch(str(version_str))
    if not match:
        raise FormatError(f"Invalid version format: {version_str}")
    major, minor, patch = (int(g) for g in match.groups())
    return semver.Version(major, minor, patch)


def validate_increment(increment: str) -> str:
    """Return ``increment`` if it is a known increment type."""
    if increment not in INCREMENT_TYPES:
        raise FormatError(
            f"Invalid increment type: {increment} "
            f"(expected one of: {', '.join(INCREMENT_TYPES)})"
        )
    return increment


def bump_version(version_str: str, increment: str = "patch") -> str:
    """Increment a semantic version and return it as a string.

    Examples:
        bump_version("1.2.3") → "1.2.4"
        bump_version("1.2.3", "minor") → "1.3.0"
        bump_version("1.2.3", "major") → "2.0.0"
    """
    validate_increment(increment)
    version = parse_version(version_str)
    if increment == "major":
        version = version.bump_major()
    elif increment == "minor":
        version = version.bump_minor()
    else:
        version = version.bump_patch()
    return str(version)


def is_auto(user_value: UserValue) -> bool:
    """True when a raw value means "derive from the current value".

    ``None``, booleans and the empty string all fall back to auto-increment.
    Zero (``0`` or ``"0"``) is an explicit value.
    """
    return user_value is None or isinstance(user_value, bool) or user_value == ""


def parse_build_number(value: str | int) -> int:
    """Parse a build number, raising FormatError when it is not an integer."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not _INT_RE.fullmatch(str(value)):
        raise FormatError(f"Invalid build number: {value}")
    return int(value)


def calculate_new_semantic_version(
    user_value: UserValue, current_value: str, increment: str = "patch"
) -> str:
    """Resolve the next app version.

    An explicit value is returned verbatim, without validation. Otherwise
    ``current_value`` is bumped by ``increment``.
    """
    if not is_auto(user_value):
        return str(user_value)
    return bump_version(current_value, increment)


def calculate_new_build_number(user_value: UserValue, current_value: str | int) -> int:
    """Resolve the next build number.

    An explicit value is used as-is (zero and negatives included); otherwise
    the current value plus one.
    """
    if not is_auto(user_value):
        return parse_build_number(user_value)
    return parse_build_number(current_value) + 1
