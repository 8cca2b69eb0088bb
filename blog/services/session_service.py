"""Session helpers (persist, hydrate and clear the client's token/user snapshot)."""
from __future__ import annotations

import time
from typing import Optional

from loguru import logger

from blog.core.errors import StorageError
from blog.core.tokens import decode_token
from blog.domain.records import PublicUser
from blog.repositories.storage import TOKEN_KEY, USER_KEY, KeyValueStorage


def persist_session(storage: KeyValueStorage, token: str, user: PublicUser) -> None:
    storage.set_item(TOKEN_KEY, token)
    storage.save_json(USER_KEY, user.to_dict())


def clear_session(storage: KeyValueStorage) -> None:
    storage.remove_item(TOKEN_KEY)
    storage.remove_item(USER_KEY)


def load_session(storage: KeyValueStorage, ttl_seconds: int = 0) -> tuple[Optional[str], Optional[PublicUser]]:
    """
    Read the persisted token/user pair for synchronous store hydration.

    A token that cannot be decoded, or that outlived ``ttl_seconds``, is
    removed together with the user snapshot.
    """
    token = storage.get_item(TOKEN_KEY)
    try:
        raw_user = storage.load_json(USER_KEY)
    except StorageError as exc:
        logger.warning(f"Discarding unreadable user snapshot: {exc}")
        raw_user = None
    user = None
    if isinstance(raw_user, dict) and raw_user.get("id") and raw_user.get("email"):
        user = PublicUser.from_dict(raw_user)

    if token is None:
        return None, user
    payload = decode_token(token)
    if payload is None or (ttl_seconds > 0 and payload.timestamp + ttl_seconds * 1000 < time.time() * 1000):
        logger.warning("Persisted session token is invalid or expired; clearing session")
        clear_session(storage)
        return None, None
    return token, user
