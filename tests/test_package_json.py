"""Tests for rn_vbump.package_json."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from rn_vbump.models import RunContext
from rn_vbump.package_json import read_version, sync_package_version, update_version


class TestReadVersion:
    """Tests for read_version()."""

    def test_reads_version(self, rn_project: Path) -> None:
        assert read_version(rn_project / "package.json") == {"version": "1.0.0"}

    def test_missing_version(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "app"}')
        assert read_version(path) == {"version": None}

    def test_non_string_version_returned_as_is(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"version": 3}')
        assert read_version(path) == {"version": 3}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_version(tmp_path / "package.json")

    def test_corrupted_json(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"version": "1.0.0",')
        with pytest.raises(json.JSONDecodeError):
            read_version(path)


class TestUpdateVersion:
    """Tests for update_version()."""

    def test_updates_version(self, rn_project: Path, ctx: RunContext) -> None:
        path = rn_project / "package.json"

        result = update_version(path, "2.0.0", ctx)

        assert result == {"version": "2.0.0"}
        data = json.loads(path.read_text())
        assert data["version"] == "2.0.0"
        assert data["dependencies"]["react-native"] == "0.74.1"

    def test_records_change(self, rn_project: Path, ctx: RunContext) -> None:
        update_version(rn_project / "package.json", "1.1.0", ctx)

        (change,) = ctx.changes
        assert change.platform == "Package.json"
        assert change.file == "package.json"
        assert change.item == "version"
        assert (change.old_value, change.new_value) == ("1.0.0", "1.1.0")

    def test_dry_run_leaves_file_untouched(
        self, rn_project: Path, ctx: RunContext
    ) -> None:
        path = rn_project / "package.json"
        before = path.read_bytes()
        ctx.dry_run = True

        assert update_version(path, "2.0.0", ctx) == {"version": "2.0.0"}
        assert path.read_bytes() == before
        assert len(ctx.changes) == 1

    def test_preserves_indentation_and_newline(
        self, tmp_path: Path, ctx: RunContext
    ) -> None:
        path = tmp_path / "package.json"
        path.write_text('{\n    "name": "app",\n    "version": "1.0.0"\n}\n')

        update_version(path, "1.0.1", ctx)

        assert path.read_text() == '{\n    "name": "app",\n    "version": "1.0.1"\n}\n'

    def test_preserves_tabs_without_newline(self, tmp_path: Path, ctx: RunContext) -> None:
        path = tmp_path / "package.json"
        path.write_text('{\n\t"version": "1.0.0"\n}')

        update_version(path, "1.0.1", ctx)

        assert path.read_text() == '{\n\t"version": "1.0.1"\n}'

    def test_keeps_non_ascii(self, tmp_path: Path, ctx: RunContext) -> None:
        path = tmp_path / "package.json"
        path.write_text('{\n  "author": "Zoë",\n  "version": "1.0.0"\n}\n', encoding="utf-8")

        update_version(path, "1.0.1", ctx)

        assert '"author": "Zoë"' in path.read_text(encoding="utf-8")

    def test_numeric_current_version(self, tmp_path: Path, ctx: RunContext) -> None:
        path = tmp_path / "package.json"
        path.write_text('{\n  "version": 1.5\n}\n')

        assert update_version(path, "1.0.1", ctx) == {"version": "1.0.1"}

        (change,) = ctx.changes
        assert change.old_value == 1.5
        assert change.new_value == "1.0.1"
        assert json.loads(path.read_text())["version"] == "1.0.1"

    @patch("rn_vbump.package_json.warn")
    def test_missing_file(
        self, mock_warn: MagicMock, tmp_path: Path, ctx: RunContext
    ) -> None:
        assert update_version(tmp_path / "package.json", "1.0.1", ctx) is None
        assert ctx.changes == []
        mock_warn.assert_called_once()

    @patch("rn_vbump.package_json.warn")
    def test_missing_version(
        self, mock_warn: MagicMock, tmp_path: Path, ctx: RunContext
    ) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "app"}\n')

        assert update_version(path, "1.0.1", ctx) is None
        assert path.read_text() == '{"name": "app"}\n'
        assert "Could not find current version" in mock_warn.call_args[0][0]

    def test_corrupted_json(self, tmp_path: Path, ctx: RunContext) -> None:
        path = tmp_path / "package.json"
        path.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            update_version(path, "1.0.1", ctx)


class TestSyncPackageVersion:
    """Tests for sync_package_version()."""

    def test_updates_only_once(self, rn_project: Path) -> None:
        path = rn_project / "package.json"
        ctx = RunContext(project_root=rn_project, package_json_path=path)

        sync_package_version("1.0.1", ctx)
        sync_package_version("9.9.9", ctx)

        assert json.loads(path.read_text())["version"] == "1.0.1"
        assert ctx.package_json_updated
        assert len(ctx.changes) == 1

    def test_no_path_configured(self, rn_project: Path, ctx: RunContext) -> None:
        sync_package_version("1.0.1", ctx)

        assert not ctx.package_json_updated
        assert ctx.changes == []
        assert json.loads((rn_project / "package.json").read_text())["version"] == "1.0.0"

    @patch("rn_vbump.package_json.warn")
    def test_missing_file_still_marks_attempt(
        self, mock_warn: MagicMock, tmp_path: Path
    ) -> None:
        ctx = RunContext(project_root=tmp_path, package_json_path=tmp_path / "package.json")

        sync_package_version("1.0.1", ctx)
        sync_package_version("1.0.2", ctx)

        assert ctx.package_json_updated
        mock_warn.assert_called_once()
