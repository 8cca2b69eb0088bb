"""Post use cases: list with author profiles, create, update and delete."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from loguru import logger

from blog.core.config import get_settings
from blog.core.errors import NotFoundError, UnauthenticatedError
from blog.domain.records import EnrichedPost, Post, PostDraft, PostUpdate, parse_timestamp
from blog.repositories.blog_repository import BlogRepository

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _created_key(post: Post) -> datetime:
    return parse_timestamp(post.created_at) or _EPOCH


@dataclass
class PostService:
    repository: BlogRepository
    delay: Optional[float] = None

    def __post_init__(self):
        if self.delay is None:
            self.delay = get_settings().posts_delay

    async def _wait(self) -> None:
        await asyncio.sleep(self.delay)

    def _enrich(self, post: Post) -> EnrichedPost:
        return EnrichedPost.from_post(post, self.repository.find_user_by_id(post.author_id))

    async def fetch_posts(self) -> list[EnrichedPost]:
        """All posts with author profiles, newest first."""
        await self._wait()
        users = {user.id: user for user in self.repository.list_users()}
        enriched = [EnrichedPost.from_post(post, users.get(post.author_id)) for post in self.repository.list_posts()]
        enriched.sort(key=_created_key, reverse=True)
        return enriched

    async def add_post(self, draft: PostDraft) -> EnrichedPost:
        await self._wait()
        if not draft.author_id:
            raise UnauthenticatedError()
        post = self.repository.create_post(draft)
        logger.info(f"Post {post.id} created by {post.author_id}")
        return self._enrich(post)

    async def update_post(self, post_id: str, update: Union[PostUpdate, dict]) -> EnrichedPost:
        await self._wait()
        if isinstance(update, dict):
            update = PostUpdate.from_dict(update)
        post = self.repository.update_post(post_id, update)
        if post is None:
            raise NotFoundError()
        logger.info(f"Post {post_id} updated ({', '.join(update.changes()) or 'no fields'})")
        return self._enrich(post)

    async def delete_post(self, post_id: str) -> str:
        await self._wait()
        if not self.repository.delete_post(post_id):
            raise NotFoundError()
        logger.info(f"Post {post_id} deleted")
        return post_id
