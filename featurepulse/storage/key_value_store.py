# featurepulse/storage/key_value_store.py
from __future__ import annotations

import io
import json
import logging
import os
import tempfile
import threading
from typing import Any, Dict, Optional

from featurepulse.logger import BasicLogger


class StorageKeys:
    DEVICE_ID = "featurepulse.deviceID"
    LAST_SESSION_TIME = "featurepulse.lastSessionTime"
    SESSION_COUNT = "featurepulse.sessionCount"
    CTA_DISMISSED = "featurepulse.ctaDismissed"


class KeyValueStore:
    """Synchronous scalar store (strings, floats, ints, bools).

    Subclasses implement ``_read`` and ``_write``; the typed getters mirror
    platform preference stores and return zero values for missing keys.
    """

    def _read(self, key: str) -> Any:
        raise NotImplementedError(f"{self.__class__.__name__}._read() not implemented")

    def _write(self, key: str, value: Any) -> None:
        raise NotImplementedError(f"{self.__class__.__name__}._write() not implemented")

    def get_string(self, key: str) -> Optional[str]:
        value = self._read(key)
        if value is None:
            return None
        return str(value)

    def set_string(self, key: str, value: Optional[str]) -> None:
        self._write(key, value)

    def get_float(self, key: str) -> float:
        try:
            return float(self._read(key) or 0.0)
        except (TypeError, ValueError):
            return 0.0

    def set_float(self, key: str, value: float) -> None:
        self._write(key, float(value))

    def get_int(self, key: str) -> int:
        try:
            return int(self._read(key) or 0)
        except (TypeError, ValueError):
            return 0

    def set_int(self, key: str, value: int) -> None:
        self._write(key, int(value))

    def get_bool(self, key: str) -> bool:
        return bool(self._read(key) or False)

    def set_bool(self, key: str, value: bool) -> None:
        self._write(key, bool(value))


class InMemoryKeyValueStore(KeyValueStore):
    """Process-lifetime store. Handy for tests and short-lived scripts."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def _read(self, key: str) -> Any:
        return self._data.get(key)

    def _write(self, key: str, value: Any) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._data)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a single JSON object on disk.

    The file is read lazily on first access and rewritten atomically
    (temp file in the same directory, fsync, ``os.replace``) on every set.
    A missing file is treated as an empty store.
    """

    def __init__(self, file_path: str, logger: Optional[logging.Logger] = None):
        self.file_path = str(file_path)
        self.logger = logger or BasicLogger("JsonFileKeyValueStore").get_logger()
        self._data: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        try:
            with io.open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            self.logger.debug("[JsonFileKeyValueStore] %s not found, starting empty", self.file_path)
            data = {}

        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.file_path} must contain a JSON object")

        self._data = data
        return self._data

    def _read(self, key: str) -> Any:
        with self._lock:
            return self._load().get(key)

    def _write(self, key: str, value: Any) -> None:
        with self._lock:
            data = dict(self._load())
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
            self._flush(data)
            self._data = data

    def _flush(self, data: Dict[str, Any]) -> None:
        dir_name = os.path.dirname(os.path.abspath(self.file_path)) or "."
        tmp_file_path = None
        try:
            os.makedirs(dir_name, exist_ok=True)

            json_bytes = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

            with tempfile.NamedTemporaryFile(mode="wb", delete=False, dir=dir_name) as tmpf:
                tmp_file_path = tmpf.name
                tmpf.write(json_bytes)
                tmpf.flush()
                os.fsync(tmpf.fileno())

            os.replace(tmp_file_path, self.file_path)
            tmp_file_path = None  # ownership transferred
        except OSError as exc:
            self.logger.error("[JsonFileKeyValueStore] write to %s failed: %s", self.file_path, exc)
            raise
        finally:
            if tmp_file_path and os.path.exists(tmp_file_path):
                os.remove(tmp_file_path)
