"""Key-value storage backends used to persist pool and interest state."""
from __future__ import annotations

import json
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from interest_engine.core.ports import KeyValueStore
from interest_engine.utils.logger import logger

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class StorageReadError(RuntimeError):
    """The backing store could not be read, as opposed to holding nothing for a key."""


class InMemoryKeyValueStore:
    """Thread-safe dictionary store; state lives for the process lifetime."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def load(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def save(self, key: str, data: bytes) -> None:
        with self._lock:
            self._data[key] = bytes(data)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class JsonFileKeyValueStore:
    """One file per key inside ``directory``, replaced atomically on save."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        safe_key = _UNSAFE_KEY_CHARS.sub("_", key)
        return self._directory / f"{safe_key}.json"

    def load(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def save(self, key: str, data: bytes) -> None:
        path = self._path_for(key)
        handle, temp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{path.stem}.")
        try:
            with os.fdopen(handle, "wb") as file:
                file.write(data)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        logger.debug("Persisted {} bytes to {}", len(data), path)

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


def dump_json(payload: Any) -> bytes:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def load_json(store: KeyValueStore, key: str) -> Any:
    """Decode the JSON document stored under ``key``.

    Returns ``None`` when the key is absent or its payload is corrupt. Raises
    :class:`StorageReadError` when the store itself fails.
    """
    try:
        raw = store.load(key)
    except Exception as error:  # noqa: BLE001
        logger.warning("Failed to read '{}' from storage: {}", key, error)
        raise StorageReadError(f"Could not read '{key}'") from error
    if raw is None:
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        logger.warning("Discarding corrupt payload stored under '{}': {}", key, error)
        return None


def save_json(store: KeyValueStore, key: str, payload: Any) -> bool:
    """Persist ``payload``; failures are logged and reported as ``False``."""
    try:
        store.save(key, dump_json(payload))
    except Exception as error:  # noqa: BLE001
        logger.warning("Failed to persist '{}': {}", key, error)
        return False
    return True


__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "StorageReadError",
    "dump_json",
    "load_json",
    "save_json",
]
