"""Preference Store Adapter.

Wraps a persistent key/value storage backend so callers never see its
failures. Reads that fail return ``None``; writes that fail are dropped.
Both log a warning and report the fault through ``on_error``.

Backends implement ``KeyValueStorage``:
 - ``MemoryStorage``: process-local dict (tests, headless runs)
 - ``JsonFileStorage``: single JSON object file, written atomically via a
   temp file + replace (same approach as ``theming.app.config_store``)

The adapter deals in raw strings only. Parsing into ``ThemePreference``
happens right after ``get`` in ``ThemeService``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from theming.models import ThemeErrorKind
from .diagnostics import ErrorCallback
from .logging_service import fault_extra

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "StorageCorruptError",
    "PreferenceStore",
]

_logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStorage(Protocol):  # pragma: no cover - structural protocol
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class StorageCorruptError(RuntimeError):
    """Raised by ``JsonFileStorage`` when its backing file cannot be parsed."""


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStorage:
    """Flat string map persisted as one JSON object.

    Missing file reads as empty. A file that is not a JSON object raises
    ``StorageCorruptError``; the adapter turns that into ``None``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise StorageCorruptError(f"Unreadable store file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageCorruptError(f"Store file {self.path} does not hold an object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except StorageCorruptError:
            # unreadable file is replaced on write
            data = {}
        data[key] = str(value)
        self._dump(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


class PreferenceStore:
    """Fault-tolerant facade over a ``KeyValueStorage``.

    ``storage=None`` models an environment without persistent storage
    (server render, private browsing); every call then degrades the same
    way a failing backend would.
    """

    def __init__(
        self, storage: Optional[KeyValueStorage], *, on_error: Optional[ErrorCallback] = None
    ) -> None:
        self._storage = storage
        self._on_error = on_error

    @property
    def available(self) -> bool:
        return self._storage is not None

    def _report(self, kind: ThemeErrorKind, exc: Optional[BaseException]) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(kind, exc)
        except Exception:  # noqa: BLE001 - diagnostics must not break storage calls
            _logger.exception("Theme error callback failed")

    def get(self, key: str) -> Optional[str]:
        if self._storage is None:
            _logger.warning(
                "Preference storage unavailable; reading %r as empty", key,
                extra=fault_extra(ThemeErrorKind.STORAGE_UNAVAILABLE),
            )
            self._report(ThemeErrorKind.STORAGE_UNAVAILABLE, None)
            return None
        try:
            value = self._storage.get_item(key)
        except Exception as exc:  # noqa: BLE001 - any backend fault reads as "absent"
            _logger.warning(
                "Failed to read %r from preference storage: %s", key, exc,
                extra=fault_extra(ThemeErrorKind.STORAGE_UNAVAILABLE),
            )
            self._report(ThemeErrorKind.STORAGE_UNAVAILABLE, exc)
            return None
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        """Write ``value`` under ``key``; return whether the write went through."""
        if self._storage is None:
            _logger.warning(
                "Preference storage unavailable; dropping write of %r", key,
                extra=fault_extra(ThemeErrorKind.STORAGE_UNAVAILABLE),
            )
            self._report(ThemeErrorKind.STORAGE_UNAVAILABLE, None)
            return False
        try:
            self._storage.set_item(key, value)
        except Exception as exc:  # noqa: BLE001 - quota, permission, disk errors
            _logger.warning(
                "Failed to store %r in preference storage: %s", key, exc,
                extra=fault_extra(ThemeErrorKind.STORAGE_WRITE_FAILED),
            )
            self._report(ThemeErrorKind.STORAGE_WRITE_FAILED, exc)
            return False
        return True
