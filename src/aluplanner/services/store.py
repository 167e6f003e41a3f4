"""Durable key-value storage for the planner.

Values are either a single string or a list of strings. Two backends are
provided: a JSON file on local disk and flet's ``page.client_storage``, which
maps onto SharedPreferences on mobile and localStorage on the web.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


class PersistentStore:
    """Base store; backends implement ``_open``, ``_read``, ``_write`` and ``_delete``."""

    def __init__(self) -> None:
        self._ready = False

    def init(self) -> None:
        if self._ready:
            return
        self._open()
        self._ready = True

    def get(self, key: str) -> Optional[str]:
        value = self._fetch(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Key '{key}' does not hold a string")
        return value

    def get_list(self, key: str) -> Optional[List[str]]:
        value = self._fetch(key)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise StorageError(f"Key '{key}' does not hold a list of strings")
        return list(value)

    def set(self, key: str, value: str) -> None:
        self.init()
        self._write(key, value)
        logger.debug("Stored key %s", key)

    def set_list(self, key: str, values: List[str]) -> None:
        self.init()
        self._write(key, [str(v) for v in values])
        logger.debug("Stored list key %s (%d items)", key, len(values))

    def remove(self, key: str) -> None:
        self.init()
        self._delete(key)
        logger.debug("Removed key %s", key)

    def _fetch(self, key: str) -> Any:
        self.init()
        return self._read(key)

    def _open(self) -> None:
        pass

    def _read(self, key: str) -> Any:
        raise NotImplementedError

    def _write(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def _delete(self, key: str) -> None:
        raise NotImplementedError


class JsonFileStore(PersistentStore):
    """All keys in one JSON object on disk, rewritten atomically on each change."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._data: Dict[str, Any] = {}

    def _open(self) -> None:
        if not self.path.exists():
            self._data = {}
            return
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            logger.error("Could not read store %s: %s", self.path, exc)
            raise StorageError(f"Could not read {self.path}") from exc
        except json.JSONDecodeError as exc:
            logger.error("Store %s is not valid JSON: %s", self.path, exc)
            raise StorageError(f"Corrupt store file {self.path}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt store file {self.path}")
        self._data = data

    def _read(self, key: str) -> Any:
        return self._data.get(key)

    def _write(self, key: str, value: Any) -> None:
        data = dict(self._data)
        data[key] = value
        self._flush(data)

    def _delete(self, key: str) -> None:
        if key not in self._data:
            return
        data = dict(self._data)
        del data[key]
        self._flush(data)

    def _flush(self, data: Dict[str, Any]) -> None:
        tmp_name = None
        replaced = False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".store-", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle)
            os.replace(tmp_name, self.path)
            replaced = True
        except OSError as exc:
            logger.error("Could not write store %s: %s", self.path, exc)
            raise StorageError(f"Could not write {self.path}") from exc
        finally:
            if not replaced and tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        self._data = data


class ClientStorageStore(PersistentStore):
    """Adapter over flet's ``page.client_storage``."""

    def __init__(self, client_storage: Any) -> None:
        super().__init__()
        self.client_storage = client_storage

    def _read(self, key: str) -> Any:
        try:
            if not self.client_storage.contains_key(key):
                return None
            return self.client_storage.get(key)
        except (OSError, RuntimeError) as exc:
            raise StorageError(f"Could not read key '{key}'") from exc

    def _write(self, key: str, value: Any) -> None:
        try:
            self.client_storage.set(key, value)
        except (OSError, RuntimeError) as exc:
            logger.error("Client storage write failed for %s: %s", key, exc)
            raise StorageError(f"Could not write key '{key}'") from exc

    def _delete(self, key: str) -> None:
        try:
            self.client_storage.remove(key)
        except (OSError, RuntimeError) as exc:
            logger.error("Client storage remove failed for %s: %s", key, exc)
            raise StorageError(f"Could not remove key '{key}'") from exc
