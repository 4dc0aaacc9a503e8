"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rn_vbump.models import RunContext

BUILD_GRADLE = """\
apply plugin: "com.android.application"

android {
    namespace "com.sampleapp"
    defaultConfig {
        applicationId "com.sampleapp"
        minSdkVersion rootProject.ext.minSdkVersion
        targetSdkVersion rootProject.ext.targetSdkVersion
        versionCode 1
        versionName "1.0.0"
    }
}
"""

PROJECT_PBXPROJ = """\
// !$*UTF8*$!
{
	objects = {
/* Begin XCBuildConfiguration section */
		13B07F941A680F5B00A75B9A /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				CURRENT_PROJECT_VERSION = 1;
				MARKETING_VERSION = 1.0.0;
				PRODUCT_NAME = SampleApp;
			};
			name = Debug;
		};
		13B07F951A680F5B00A75B9A /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				CURRENT_PROJECT_VERSION = 1;
				MARKETING_VERSION = 1.0.0;
				PRODUCT_NAME = SampleApp;
			};
			name = Release;
		};
/* End XCBuildConfiguration section */
	};
}
"""

PACKAGE_JSON = {
    "name": "SampleApp",
    "version": "1.0.0",
    "private": True,
    "dependencies": {"react": "18.2.0", "react-native": "0.74.1"},
    "devDependencies": {"@react-native-community/cli": "13.6.6"},
}


def write_package_json(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def make_project(root: Path, *, android: bool = True, ios: bool = True) -> Path:
    """Lay out a minimal React Native project under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    write_package_json(root / "package.json", PACKAGE_JSON)
    if android:
        gradle = root / "android" / "app" / "build.gradle"
        gradle.parent.mkdir(parents=True)
        gradle.write_text(BUILD_GRADLE)
    if ios:
        pbxproj = root / "ios" / "SampleApp.xcodeproj" / "project.pbxproj"
        pbxproj.parent.mkdir(parents=True)
        pbxproj.write_text(PROJECT_PBXPROJ)
    return root


@pytest.fixture
def project_factory(tmp_path: Path):
    """Build extra projects: project_factory("name", android=False)."""

    def factory(name: str, *, android: bool = True, ios: bool = True) -> Path:
        return make_project(tmp_path / name, android=android, ios=ios)

    return factory


@pytest.fixture
def rn_project(tmp_path: Path) -> Path:
    """A React Native project with both platforms."""
    return make_project(tmp_path / "SampleApp")


@pytest.fixture
def gradle_file(rn_project: Path) -> Path:
    return rn_project / "android" / "app" / "build.gradle"


@pytest.fixture
def pbxproj_file(rn_project: Path) -> Path:
    return rn_project / "ios" / "SampleApp.xcodeproj" / "project.pbxproj"


@pytest.fixture
def ctx(rn_project: Path) -> RunContext:
    """Run context without package.json syncing."""
    return RunContext(project_root=rn_project)
