"""SQLAlchemy model mirroring the browser local storage layout (one row per key)."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .session import Base


class StorageItem(Base):
    __tablename__ = "storage_items"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
