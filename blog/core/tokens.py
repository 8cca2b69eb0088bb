"""
Mock session tokens.

A token is the URL-safe base64 of ``{"userId": ..., "timestamp": <epoch ms>}``.
It is an opaque handle for the client, not a credential: nothing is signed, so
anyone can forge one.
"""

from __future__ import annotations

import base64
import binascii
import json
import time
from dataclasses import dataclass
from typing import Optional

from loguru import logger


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    timestamp: int  # epoch milliseconds


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_token(user_id: str, now: Optional[int] = None) -> str:
    payload = {"userId": user_id, "timestamp": _now_ms() if now is None else now}
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_token(token: str | None) -> TokenPayload | None:
    if not token:
        return None
    try:
        data = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
        return TokenPayload(user_id=str(data["userId"]), timestamp=int(data["timestamp"]))
    except (binascii.Error, UnicodeError, ValueError, TypeError, KeyError) as exc:
        logger.warning(f"Failed to decode token: {exc}")
        return None


def is_token_expired(token: str | None, ttl_seconds: int, now: Optional[int] = None) -> bool:
    """Undecodable tokens count as expired; a ttl <= 0 never expires."""
    payload = decode_token(token)
    if payload is None:
        return True
    if ttl_seconds <= 0:
        return False
    current = _now_ms() if now is None else now
    return payload.timestamp + ttl_seconds * 1000 < current
