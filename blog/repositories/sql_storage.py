"""Key-value storage backed by the storage_items table (SQLAlchemy)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select

from blog.db.models import StorageItem
from blog.db.session import get_session
from blog.repositories.storage import KeyValueStorage


class SQLStorage(KeyValueStorage):
    """One row per key; values are the same strings the JSON file would hold."""

    def get_item(self, key: str) -> Optional[str]:
        with get_session() as session:
            entity = session.get(StorageItem, key)
            return entity.value if entity else None

    def set_item(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        with get_session() as session:
            entity = session.get(StorageItem, key)
            if not entity:
                session.add(StorageItem(key=key, value=value, updated_at=now))
            else:
                entity.value = value
                entity.updated_at = now
            session.commit()

    def remove_item(self, key: str) -> None:
        with get_session() as session:
            session.execute(delete(StorageItem).where(StorageItem.key == key))
            session.commit()

    def keys(self) -> list[str]:
        with get_session() as session:
            return list(session.execute(select(StorageItem.key)).scalars().all())
