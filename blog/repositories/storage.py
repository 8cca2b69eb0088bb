"""
Key-value persistence shim standing in for browser local storage.

Values are strings, exactly like ``localStorage``. Collections (``mock_posts``,
``mock_users``) are JSON arrays stored under a single key, so every save
replaces the whole collection.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from blog.core.config import Settings, get_settings
from blog.core.errors import StorageError

POSTS_KEY = "mock_posts"
USERS_KEY = "mock_users"
TOKEN_KEY = "token"
USER_KEY = "user"


class KeyValueStorage(ABC):
    """Origin-scoped string storage plus JSON helpers built on top of it."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass

    def has_item(self, key: str) -> bool:
        return self.get_item(key) is not None

    # ------------------------------ JSON helpers ------------------------------
    def load_json(self, key: str, default: Any = None) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise StorageError(f"Corrupted value under '{key}': {exc}") from exc

    def save_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))

    def load(self, collection: str) -> list[dict]:
        """Return every record of a collection; an absent key is an empty collection."""
        records = self.load_json(collection, default=[])
        if records is None:
            return []
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise StorageError(f"Collection '{collection}' is not a list of records")
        return records

    def save(self, collection: str, records: list[dict]) -> None:
        self.save_json(collection, list(records))


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage, mainly for tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


def get_storage(settings: Settings | None = None) -> KeyValueStorage:
    """Build the storage selected by BLOG_STORAGE_BACKEND."""
    settings = settings or get_settings()
    if settings.storage_backend == "memory":
        return MemoryStorage()
    if settings.storage_backend == "sql":
        from blog.repositories.sql_storage import SQLStorage

        return SQLStorage()
    from blog.repositories.json_storage import JsonFileStorage

    return JsonFileStorage(settings.data_file)
