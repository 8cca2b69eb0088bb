"""Create the storage_items table on the configured DATABASE_URL."""
from __future__ import annotations

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers StorageItem on Base.metadata


def create_all(engine=None) -> None:
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info(f"Storage tables ready on {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    try:
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create storage tables: {exc}") from exc
