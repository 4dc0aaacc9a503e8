"""Project detection and configuration loading.

A React Native project root is a directory holding a package.json that
depends on React Native, next to an ``android/`` or ``ios/`` directory.
The config file is optional; anything wrong with it falls back to defaults.
"""

from __future__ import annotations

import json
import runpy
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import ValidationError

from .console import warn
from .models import ProjectConfig

REACT_NATIVE_PACKAGES = ("react-native", "@react-native-community/cli", "react-native-cli")
PLATFORM_DIRS = ("android", "ios")

# Probed in order in the project root; the first one that loads wins.
CONFIG_FILES = (
    "vbump.config.py",
    "vbump.config.json",
    "vbump.config.toml",
    ".vbump.config.py",
    ".vbump.config.json",
    ".vbump.config.toml",
)

DEFAULT_CONFIG: dict[str, Any] = {
    "android": {"files": ["android/app/build.gradle"]},
    "ios": {"files": ["ios/*.xcodeproj/project.pbxproj"]},
    "packageJson": "package.json",
}


def detect_project_root(start_dir: Path | None = None) -> Path | None:
    """Search upward from ``start_dir`` for a React Native project root.

    Unreadable or invalid package.json files are skipped and the search
    continues in the parent directory.

    Returns:
        The project root, or None once the filesystem root is reached.
    """
    current = Path(start_dir or Path.cwd()).resolve()
    while current != current.parent:
        package_json = current / "package.json"
        if package_json.is_file() and _is_react_native_project(package_json):
            if any((current / d).exists() for d in PLATFORM_DIRS):
                return current
        current = current.parent
    return None


def _is_react_native_project(package_json: Path) -> bool:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    if not isinstance(data, dict):
        return False

    all_deps: dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        deps = data.get(key)
        if isinstance(deps, dict):
            all_deps.update(deps)
    return any(all_deps.get(name) for name in REACT_NATIVE_PACKAGES)


def get_default_config() -> ProjectConfig:
    """Return a fresh copy of the default configuration."""
    return ProjectConfig.model_validate(DEFAULT_CONFIG)


def load_project_config(
    project_root: Path, config_path: Path | str | None = None
) -> ProjectConfig:
    """Load the project's config file merged over the defaults.

    ``config_path`` is tried first when given, then each of CONFIG_FILES in
    the project root. Candidates that are missing, fail to load or do not
    validate are skipped (with a warning for the latter two).

    Never raises; returns the defaults when nothing usable is found.
    """
    candidates: list[Path] = []
    if config_path:
        candidates.append(Path(config_path))
    candidates.extend(Path(project_root) / name for name in CONFIG_FILES)

    for path in candidates:
        config = _load_config_file(path)
        if config is not None:
            return config
    return get_default_config()


def _load_config_file(path: Path) -> ProjectConfig | None:
    if not path.is_file():
        return None
    try:
        raw = _read_config(path)
        if not isinstance(raw, dict):
            raise ValueError(f"expected a mapping, got {type(raw).__name__}")
        if "package_json" in raw:
            raw = dict(raw)
            raw["packageJson"] = raw.pop("package_json")
        return ProjectConfig.model_validate(merge_config(DEFAULT_CONFIG, raw))
    except ValidationError as exc:
        warn(
            f"Could not load config from {path.name}: "
            f"invalid structure ({exc.error_count()} error(s))"
        )
    except Exception as exc:  # noqa: BLE001
        warn(f"Could not load config from {path.name}: {exc}")
    return None


def _read_config(path: Path) -> Any:
    if path.suffix == ".py":
        return _load_python_config(path)
    if path.suffix == ".toml":
        return tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()
    return json.loads(path.read_text(encoding="utf-8"))


def _load_python_config(path: Path) -> Any:
    """Execute a Python config file and return its module-level ``config``."""
    namespace = runpy.run_path(str(path))
    if "config" not in namespace:
        raise AttributeError("no module-level 'config' defined")
    return namespace["config"]


def merge_config(defaults: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge a user config over the defaults.

    Mapping-valued keys present in both are merged key by key; every other
    value (lists included) replaces the default wholesale.
    """
    merged = dict(defaults)
    for key, value in override.items():
        base = merged.get(key)
        if isinstance(base, dict) and isinstance(value, dict):
            merged[key] = {**base, **value}
        else:
            merged[key] = value
    return merged
