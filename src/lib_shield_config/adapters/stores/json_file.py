"""JSON file adapter for the shared key-value store.

Purpose
-------
Implement :class:`lib_shield_config.application.ports.KeyValueStore` on top of
a single JSON document so independent processes (CLI runs, host extensions)
share counters and configuration.

Key behaviours
--------------
* The file is read on construction and on every :meth:`JsonFileStore.synchronize`.
* :meth:`JsonFileStore.set` re-reads the file, applies the change, and replaces
  the file atomically via ``os.replace`` so readers never see a torn write.
* There is no cross-process lock; concurrent writers may lose updates.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ...domain.errors import InvalidFormat
from ...observability import log_debug, log_error


class JsonFileStore:
    """Persist key-value pairs in a JSON object stored at *path*."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] = {}
        self.synchronize()

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and flush the whole document to disk."""

        self.synchronize()
        self._data[key] = value
        self._write()

    def synchronize(self) -> None:
        """Reload the document; a missing file is an empty store.

        Raises
        ------
        InvalidFormat
            When the file exists but is not a JSON object.
        """

        if not self._path.is_file():
            self._data = {}
            return
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("store_file_invalid", path=str(self._path), error=str(exc))
            raise InvalidFormat(f"Invalid JSON in store {self._path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise InvalidFormat(f"Store {self._path} did not contain a JSON object")
        self._data = payload
        log_debug("store_synchronized", path=str(self._path), keys=len(payload))

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._data, handle, ensure_ascii=False, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
