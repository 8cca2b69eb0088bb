"""
JSON file persistence adapter.

The whole storage is one JSON object (key -> string value) in a single file,
read and rewritten on every access like the browser's local storage blob.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json
import os
import tempfile

from blog.core.errors import StorageError
from blog.repositories.storage import KeyValueStorage


class JsonFileStorage(KeyValueStorage):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except ValueError as exc:
                raise StorageError(f"Corrupted storage file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self.path} must hold a JSON object")
        return data

    def _write(self, data: dict) -> None:
        # Encode fully before touching the file, then swap it in atomically.
        payload = json.dumps(data, indent=2).encode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
