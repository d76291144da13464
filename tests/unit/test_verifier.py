"""Unit tests for drift detection."""

import pytest
from voidui.crypto import compute_checksum
from voidui.lockfile.store import create_empty, upsert
from voidui.lockfile.verifier import DriftStatus, has_drifted, verify_component, verify_project
from voidui.models import LockRecord


def track(store, name, content, version="1.0.0"):
    record = LockRecord(
        installed_version=version,
        installed_at="2025-01-20T10:30:00.000Z",
        checksum=compute_checksum(content)
    )
    return upsert(store, name, record)


class TestHasDrifted:
    """Test comparison of content against a lock record."""

    def test_modified_content(self):
        store = track(create_empty(), "button", "X")
        assert has_drifted(store.components["button"], "Y")

    def test_unchanged_content(self):
        store = track(create_empty(), "button", "X")
        assert not has_drifted(store.components["button"], "X")

    def test_line_ending_change_is_not_drift(self):
        store = track(create_empty(), "button", "a\nb\n")
        assert not has_drifted(store.components["button"], b"a\r\nb\r\n")


class TestVerifyComponent:
    """Test drift reports for files on disk."""

    def test_modified_file(self, tmp_path):
        path = tmp_path / "button.tsx"
        path.write_text("Y")
        store = track(create_empty(), "button", "X")

        report = verify_component(store, "button", path)

        assert report.status == DriftStatus.MODIFIED
        assert report.is_modified
        assert report.installed_version == "1.0.0"
        assert report.expected_checksum == compute_checksum("X")
        assert report.actual_checksum == compute_checksum("Y")

    def test_unchanged_file(self, tmp_path):
        path = tmp_path / "button.tsx"
        path.write_text("X")
        store = track(create_empty(), "button", "X")

        report = verify_component(store, "button", path)
        assert report.status == DriftStatus.UNCHANGED
        assert not report.is_modified

    def test_untracked(self, tmp_path):
        path = tmp_path / "button.tsx"
        path.write_text("X")

        report = verify_component(create_empty(), "button", path)
        assert report.status == DriftStatus.UNTRACKED
        assert report.installed_version is None

    def test_missing_file(self, tmp_path):
        store = track(create_empty(), "button", "X")

        report = verify_component(store, "button", tmp_path / "button.tsx")
        assert report.status == DriftStatus.MISSING
        assert report.actual_checksum is None


class TestVerifyProject:
    """Test checking every tracked component."""

    def test_reports_sorted_by_name(self, tmp_path):
        ui_dir = tmp_path / "components" / "ui"
        ui_dir.mkdir(parents=True)
        (ui_dir / "card.tsx").write_text("card")
        (ui_dir / "button.tsx").write_text("edited")

        store = track(create_empty(), "card", "card")
        store = track(store, "button", "button")
        store = track(store, "dialog", "dialog")

        reports = verify_project(store, tmp_path)

        assert [r.component for r in reports] == ["button", "card", "dialog"]
        assert [r.status for r in reports] == [
            DriftStatus.MODIFIED,
            DriftStatus.UNCHANGED,
            DriftStatus.MISSING
        ]
