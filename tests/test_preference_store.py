import json
import logging
from pathlib import Path

import pytest

from theming.models import ThemeErrorKind
from theming.services.preference_store import (
    JsonFileStorage,
    MemoryStorage,
    PreferenceStore,
    StorageCorruptError,
)
from theming.testing import FailingStorage


class _Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, kind, exc=None):
        self.calls.append((kind, exc))


def test_get_and_set_round_trip_memory():
    store = PreferenceStore(MemoryStorage())
    assert store.get("theme") is None
    assert store.set("theme", "dark") is True
    assert store.get("theme") == "dark"


def test_missing_storage_reads_none_and_reports():
    rec = _Recorder()
    store = PreferenceStore(None, on_error=rec)
    assert store.available is False
    assert store.get("theme") is None
    assert store.set("theme", "dark") is False
    assert [k for k, _ in rec.calls] == [
        ThemeErrorKind.STORAGE_UNAVAILABLE,
        ThemeErrorKind.STORAGE_UNAVAILABLE,
    ]


def test_failing_read_returns_none(caplog):
    rec = _Recorder()
    store = PreferenceStore(FailingStorage(), on_error=rec)
    with caplog.at_level(logging.WARNING):
        assert store.get("theme") is None
    assert "Storage unavailable" in caplog.text
    kind, exc = rec.calls[0]
    assert kind == ThemeErrorKind.STORAGE_UNAVAILABLE
    assert isinstance(exc, OSError)


def test_failing_write_returns_false():
    rec = _Recorder()
    store = PreferenceStore(FailingStorage(read_error=None), on_error=rec)
    assert store.set("theme", "light") is False
    assert rec.calls[0][0] == ThemeErrorKind.STORAGE_WRITE_FAILED


def test_raising_error_callback_does_not_escape():
    def bad_callback(kind, exc=None):
        raise RuntimeError("observer broke")

    store = PreferenceStore(None, on_error=bad_callback)
    assert store.get("theme") is None


def test_json_file_storage_persists(tmp_path: Path):
    path = tmp_path / "nested" / "store.json"
    storage = JsonFileStorage(path)
    assert storage.get_item("theme") is None
    storage.set_item("theme", "system")
    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "system"}
    assert JsonFileStorage(path).get_item("theme") == "system"
    storage.remove_item("theme")
    assert storage.get_item("theme") is None


def test_json_file_storage_corrupt_file(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    storage = JsonFileStorage(path)
    with pytest.raises(StorageCorruptError):
        storage.get_item("theme")
    # Adapter hides the corruption.
    assert PreferenceStore(storage).get("theme") is None
    # A write replaces the unreadable file.
    storage.set_item("theme", "dark")
    assert storage.get_item("theme") == "dark"


def test_json_file_storage_non_object(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StorageCorruptError):
        JsonFileStorage(path).get_item("theme")


def test_memory_storage_initial_values():
    storage = MemoryStorage({"theme": "light"})
    assert len(storage) == 1
    storage.remove_item("theme")
    storage.remove_item("theme")
    assert len(storage) == 0


@pytest.mark.parametrize("value", ["light", "dark", "system"])
@pytest.mark.parametrize("backend", ["memory", "json"])
def test_every_preference_round_trips(backend, value, tmp_path: Path):
    storage = MemoryStorage() if backend == "memory" else JsonFileStorage(tmp_path / "prefs.json")
    assert PreferenceStore(storage).set("theme", value) is True
    if backend == "json":
        storage = JsonFileStorage(tmp_path / "prefs.json")
    assert PreferenceStore(storage).get("theme") == value
