"""Data models for rn-vbump.

These Pydantic models represent the core data structures passed through
the version bump pipeline.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .versions import UserValue, is_auto


class UpdateKind(str, Enum):
    SKIP = "skip"
    AUTO = "auto"
    EXPLICIT = "explicit"


class FieldUpdate(BaseModel):
    """How a single version field should change during a run.

    Attributes:
        kind: Leave the field alone, derive the next value from the current
              one, or write ``value`` verbatim.
        value: The caller-supplied value for EXPLICIT updates.
    """

    kind: UpdateKind
    value: str | None = None

    @classmethod
    def skip(cls) -> FieldUpdate:
        return cls(kind=UpdateKind.SKIP)

    @classmethod
    def auto(cls) -> FieldUpdate:
        return cls(kind=UpdateKind.AUTO)

    @classmethod
    def explicit(cls, value: str | int) -> FieldUpdate:
        return cls(kind=UpdateKind.EXPLICIT, value=str(value))

    @classmethod
    def from_option(cls, raw: UserValue) -> FieldUpdate:
        """Build an update from a raw option value.

        Absent, boolean and empty values mean auto-increment; anything else
        (including "0") is explicit.
        """
        if is_auto(raw):
            return cls.auto()
        return cls.explicit(raw)

    @property
    def skipped(self) -> bool:
        return self.kind is UpdateKind.SKIP

    def user_value(self) -> UserValue:
        """Value in the form accepted by the calculate_new_* helpers."""
        return self.value if self.kind is UpdateKind.EXPLICIT else True


class Target(str, Enum):
    """A selectable unit of work for the orchestrator."""

    ANDROID = "android"
    IOS = "ios"
    BUILD_NUMBERS_ONLY = "build-numbers-only"
    ANDROID_BUILD_NUMBER_ONLY = "android-code-only"
    ANDROID_APP_VERSION_ONLY = "android-name-only"
    IOS_BUILD_NUMBER_ONLY = "ios-version-only"
    IOS_APP_VERSION_ONLY = "ios-marketing-only"

    @property
    def needs_android(self) -> bool:
        return self in (
            Target.ANDROID,
            Target.BUILD_NUMBERS_ONLY,
            Target.ANDROID_BUILD_NUMBER_ONLY,
            Target.ANDROID_APP_VERSION_ONLY,
        )

    @property
    def needs_ios(self) -> bool:
        return self in (
            Target.IOS,
            Target.BUILD_NUMBERS_ONLY,
            Target.IOS_BUILD_NUMBER_ONLY,
            Target.IOS_APP_VERSION_ONLY,
        )

    @property
    def updates_app_version(self) -> bool:
        return self in (
            Target.ANDROID,
            Target.IOS,
            Target.ANDROID_APP_VERSION_ONLY,
            Target.IOS_APP_VERSION_ONLY,
        )


class ChangeRecord(BaseModel):
    """One field changed in one file.

    Attributes:
        platform: "Android", "iOS" or "Package.json".
        file: Path of the changed file relative to the project root.
        item: Name of the field (e.g. "versionCode", "MARKETING_VERSION").
        old_value: The value as it was read from the file.
        new_value: The value that was (or, in dry-run, would be) written.
    """

    platform: str
    file: str
    item: str
    old_value: int | float | str | bool
    new_value: int | float | str | bool


class FileVersions(BaseModel):
    """Resolved field values for a processed platform file."""

    path: Path
    build_number: int | str
    app_version: str


class PlatformConfig(BaseModel):
    files: list[str] = Field(default_factory=list)


class ProjectConfig(BaseModel):
    """Which files a run should touch, relative to the project root."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    android: PlatformConfig = Field(
        default_factory=lambda: PlatformConfig(files=["android/app/build.gradle"])
    )
    ios: PlatformConfig = Field(
        default_factory=lambda: PlatformConfig(
            files=["ios/*.xcodeproj/project.pbxproj"]
        )
    )
    package_json: str | None = Field(default="package.json", alias="packageJson")


class RunContext(BaseModel):
    """Mutable state shared by every mutator call within one run.

    Attributes:
        project_root: Detected (or given) project directory.
        dry_run: Compute and report changes without writing files.
        increment: Increment type used for auto-incremented app versions.
        package_json_path: Shared manifest to keep in sync, if any.
        package_json_updated: Set once the shared manifest has been synced so
              a second platform does not bump it again.
        changes: Append-only log of every field changed in this run.
        invalid_files: Files skipped because their current version could
              not be incremented.
    """

    project_root: Path
    dry_run: bool = False
    increment: str = "patch"
    package_json_path: Path | None = None
    package_json_updated: bool = False
    changes: list[ChangeRecord] = Field(default_factory=list)
    invalid_files: list[Path] = Field(default_factory=list)

    def relative(self, path: Path) -> str:
        try:
            return str(Path(path).relative_to(self.project_root))
        except ValueError:
            return str(path)

    def record(
        self,
        platform: str,
        path: Path,
        item: str,
        old_value: int | float | str | bool,
        new_value: int | float | str | bool,
    ) -> None:
        self.changes.append(
            ChangeRecord(
                platform=platform,
                file=self.relative(path),
                item=item,
                old_value=old_value,
                new_value=new_value,
            )
        )


class BumpOptions(BaseModel):
    """Everything the command line (or a caller) decided up front.

    The four granular fields hold raw option values: ``None`` when the flag
    was not given, ``""`` when given without a value, otherwise the value.
    """

    project_path: Path | None = None
    config: Path | None = None
    android: bool = False
    ios: bool = False
    build_numbers: bool = False
    android_build_number: str | None = None
    android_app_version: str | None = None
    ios_build_number: str | None = None
    ios_app_version: str | None = None
    increment: str | None = None
    dry_run: bool = False
    interactive: bool = True
