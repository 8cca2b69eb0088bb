"""
Authentication use cases: login and registration against the users collection.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from blog.core.config import get_settings
from blog.core.errors import ConflictError, InvalidCredentialsError, UserNotFoundError
from blog.core.security import hash_password, is_hashed, verify_password
from blog.core.tokens import generate_token
from blog.domain.records import PublicUser
from blog.repositories.blog_repository import BlogRepository
from blog.repositories.storage import KeyValueStorage
from blog.services.session_service import persist_session


@dataclass
class AuthPayload:
    token: str
    user: PublicUser

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_dict()}


@dataclass
class AuthService:
    """Handles login and registration, persisting the resulting session."""

    repository: BlogRepository
    storage: Optional[KeyValueStorage] = None
    delay: Optional[float] = None

    def __post_init__(self):
        if self.storage is None:
            self.storage = self.repository.storage
        if self.delay is None:
            self.delay = get_settings().auth_delay

    async def _wait(self) -> None:
        await asyncio.sleep(self.delay)

    def _start_session(self, user: PublicUser) -> AuthPayload:
        token = generate_token(user.id)
        persist_session(self.storage, token, user)
        return AuthPayload(token=token, user=user)

    # -------------------------------------- login --------------------------------------
    async def login(self, email: str, password: str) -> AuthPayload:
        await self._wait()
        user = self.repository.find_user_by_email(email)
        if not user:
            raise UserNotFoundError()
        if not verify_password(password, user.password):
            raise InvalidCredentialsError()
        if not is_hashed(user.password):
            self.repository.update_user_password(user.id, hash_password(password))
            logger.info(f"Upgraded plaintext password for user {user.id}")
        logger.info(f"User {user.id} logged in")
        return self._start_session(user.public())

    # ------------------------------------ registration ------------------------------------
    async def register(self, email: str, password: str, full_name: Optional[str] = None) -> AuthPayload:
        await self._wait()
        if self.repository.find_user_by_email(email):
            raise ConflictError()
        user = self.repository.create_user(email, hash_password(password), full_name=full_name)
        logger.info(f"Registered user {user.id} ({email})")
        return self._start_session(user.public())
