"""
View-facing helpers over the Store.

BlogClient is what a UI would call: every method dispatches an action, then
unwraps it, so a rejection surfaces as ActionRejected carrying the reason the
view should display.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Union

from loguru import logger

from blog.core.errors import UnauthenticatedError
from blog.domain.records import EnrichedPost, PostDraft, PostUpdate, PublicUser
from blog.store.posts_slice import as_draft
from blog.store.store import Store
from blog.store.toolkit import IDLE, LOADING
from blog.services.listing import posts_by_author


class BlogClient:
    def __init__(self, store: Store) -> None:
        self.store = store

    # -------------------------------------- auth --------------------------------------
    async def login(self, email: str, password: str) -> PublicUser:
        action = await self.store.login_user(email, password)
        return action.unwrap().user

    async def register(self, email: str, password: str, full_name: Optional[str] = None) -> PublicUser:
        action = await self.store.register_user(email, password, full_name)
        return action.unwrap().user

    def logout(self) -> None:
        self.store.logout()

    @property
    def is_authenticated(self) -> bool:
        return self.store.is_authenticated

    @property
    def user(self) -> Optional[PublicUser]:
        return self.store.state.auth.user

    # -------------------------------------- posts --------------------------------------
    async def load_posts(self) -> list[EnrichedPost]:
        """Fetch once: only when the posts slice has never been loaded."""
        if self.store.state.posts.status == IDLE:
            await self.store.fetch_posts()
        return self.posts

    async def create(self, draft: Union[PostDraft, dict]) -> EnrichedPost:
        user = self.user
        if user is None or not user.id:
            logger.warning("Post creation attempted without an authenticated user")
            raise UnauthenticatedError()
        action = await self.store.add_post(replace(as_draft(draft), author_id=user.id))
        return action.unwrap()

    async def edit(self, post_id: str, data: Union[PostUpdate, dict]) -> EnrichedPost:
        action = await self.store.update_post(post_id, data)
        return action.unwrap()

    async def remove(self, post_id: str) -> str:
        action = await self.store.delete_post(post_id)
        return action.unwrap()

    @property
    def posts(self) -> list[EnrichedPost]:
        return list(self.store.state.posts.items)

    @property
    def my_posts(self) -> list[EnrichedPost]:
        user = self.user
        return posts_by_author(self.posts, user.id if user else None)

    @property
    def is_loading(self) -> bool:
        return self.store.state.posts.status == LOADING
