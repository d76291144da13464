"""Unit tests for lock file management."""

import json
import pytest
from pathlib import Path
from voidui.crypto import compute_checksum
from voidui.errors import CorruptStateError
from voidui.lockfile.store import (
    LockFileManager,
    create_empty,
    load,
    load_or_create,
    save,
    upsert,
    remove,
    get,
    is_tracked
)
from voidui.models import LockRecord


def make_record(version="1.0.0", content="export const Button = 1"):
    return LockRecord(
        installed_version=version,
        installed_at="2025-01-20T10:30:00.000Z",
        checksum=compute_checksum(content),
        registry_url="https://voidui.dev/r"
    )


class TestLockStoreOperations:
    """Test pure lock store transformations."""

    def test_create_empty(self):
        store = create_empty()
        assert store.version == "1.0"
        assert store.components == {}

    def test_upsert_adds_record(self):
        store = create_empty()
        updated = upsert(store, "button", make_record())

        assert is_tracked(updated, "button")
        assert get(updated, "button").installed_version == "1.0.0"
        # Original store untouched
        assert not is_tracked(store, "button")

    def test_upsert_replaces_record(self):
        store = upsert(create_empty(), "button", make_record("1.0.0"))
        store = upsert(store, "button", make_record("1.1.0"))

        assert len(store.components) == 1
        assert get(store, "button").installed_version == "1.1.0"

    def test_remove(self):
        store = upsert(create_empty(), "button", make_record())
        store = upsert(store, "card", make_record())

        updated = remove(store, "button")
        assert not is_tracked(updated, "button")
        assert is_tracked(updated, "card")
        assert is_tracked(store, "button")

    def test_updates_leave_original_mapping_alone(self):
        store = upsert(create_empty(), "button", make_record())
        components = store.components

        upsert(store, "card", make_record())
        remove(store, "button")

        assert store.components is components
        assert list(components) == ["button"]

    def test_remove_untracked_is_noop(self):
        store = upsert(create_empty(), "button", make_record())
        assert remove(store, "dialog") == store

    def test_get_missing(self):
        assert get(create_empty(), "button") is None


class TestLockFilePersistence:
    """Test loading and saving voidui.lock.json."""

    @pytest.fixture
    def manager(self, tmp_path):
        """Create a lock file manager instance."""
        return LockFileManager(tmp_path)

    def test_load_missing_returns_none(self, tmp_path):
        assert load(tmp_path / "voidui.lock.json") is None

    def test_load_or_create_missing(self, tmp_path):
        store = load_or_create(tmp_path / "voidui.lock.json")
        assert store.components == {}

    def test_load_sample(self, sample_lockfile):
        store = load(sample_lockfile)

        record = get(store, "button")
        assert record.installed_version == "1.0.0"
        assert record.registry_url == "https://voidui.dev/r"

    def test_save_round_trip(self, manager):
        store = upsert(create_empty(), "button", make_record())
        manager.save(store)

        assert manager.exists()
        assert manager.load() == store

    def test_save_uses_on_disk_names(self, manager):
        manager.save(upsert(create_empty(), "button", make_record()))

        text = manager.lockfile_path.read_text()
        data = json.loads(text)
        assert text.endswith("}\n")
        assert "  \"version\"" in text
        assert set(data["components"]["button"]) == {
            "installedVersion", "installedAt", "checksum", "registryUrl"
        }

    def test_registry_url_optional(self, manager):
        record = LockRecord(
            installed_version="1.0.0",
            installed_at="2025-01-20T10:30:00.000Z",
            checksum=compute_checksum("x")
        )
        manager.save(upsert(create_empty(), "button", record))

        data = json.loads(manager.lockfile_path.read_text())
        assert "registryUrl" not in data["components"]["button"]
        assert manager.load().components["button"].registry_url is None

    def test_invalid_json_is_corrupt(self, manager):
        manager.lockfile_path.write_text("{ not json")

        with pytest.raises(CorruptStateError) as exc_info:
            manager.load()

        assert "re-install" in str(exc_info.value)
        assert exc_info.value.path == manager.lockfile_path

    @pytest.mark.parametrize("document", [
        {"components": {}},
        {"version": "1.0"},
        {"version": "1.0", "components": []},
        {"version": "1.0", "components": {"button": {"installedVersion": "1.0.0"}}},
    ])
    def test_structurally_invalid_is_corrupt(self, manager, document):
        manager.lockfile_path.write_text(json.dumps(document))

        with pytest.raises(CorruptStateError):
            manager.load()

    @pytest.mark.parametrize("field,value", [
        ("installedVersion", "v1"),
        ("installedVersion", "1.0"),
        ("checksum", "md5:abc"),
        ("checksum", "sha256:" + "A" * 64),
        ("installedAt", "yesterday"),
        ("installedAt", "2025-01-20"),
        ("registryUrl", "not a url"),
    ])
    def test_invalid_record_fields_are_corrupt(self, manager, field, value):
        record = {
            "installedVersion": "1.0.0",
            "installedAt": "2025-01-20T10:30:00.000Z",
            "checksum": compute_checksum("x"),
        }
        record[field] = value
        manager.lockfile_path.write_text(json.dumps({"version": "1.0", "components": {"button": record}}))

        with pytest.raises(CorruptStateError):
            manager.load()

    def test_corrupt_file_not_modified(self, manager):
        manager.lockfile_path.write_text("garbage")

        with pytest.raises(CorruptStateError):
            manager.load()

        assert manager.lockfile_path.read_text() == "garbage"

    def test_schema_key_preserved(self, manager):
        manager.lockfile_path.write_text(json.dumps({
            "$schema": "https://voidui.dev/schema/lock.json",
            "version": "1.0",
            "components": {}
        }))

        store = manager.load()
        manager.save(store)

        data = json.loads(manager.lockfile_path.read_text())
        assert data["$schema"] == "https://voidui.dev/schema/lock.json"

    def test_default_root_is_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert LockFileManager().lockfile_path == Path(tmp_path) / "voidui.lock.json"
