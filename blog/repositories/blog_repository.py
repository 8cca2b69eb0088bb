"""CRUD helpers over the posts and users collections."""
from __future__ import annotations

import uuid
from typing import Optional

from loguru import logger

from blog.core.security import hash_password
from blog.domain.records import Post, PostDraft, PostUpdate, User, utc_now_iso
from blog.repositories.storage import POSTS_KEY, USERS_KEY, KeyValueStorage

DEMO_USER_ID = "1"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"
DEMO_FULL_NAME = "Demo User"


def generate_id() -> str:
    return uuid.uuid4().hex


class BlogRepository:
    """
    Read-modify-write over whole collections.

    Each method loads a collection, changes the in-memory copy and saves it back,
    so it assumes a single writer per storage.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def initialize(self, seed_demo_user: bool = True) -> None:
        """Create missing collections; a fresh users collection gets the demo account."""
        if not self.storage.has_item(POSTS_KEY):
            self.storage.save(POSTS_KEY, [])
        if not self.storage.has_item(USERS_KEY):
            users = []
            if seed_demo_user:
                demo = User(
                    id=DEMO_USER_ID,
                    email=DEMO_EMAIL,
                    password=hash_password(DEMO_PASSWORD),
                    full_name=DEMO_FULL_NAME,
                    created_at=utc_now_iso(),
                )
                users.append(demo.to_dict())
                logger.info(f"Seeded demo account {DEMO_EMAIL}")
            self.storage.save(USERS_KEY, users)

    # -------------------------- posts --------------------------
    def list_posts(self) -> list[Post]:
        return [Post.from_dict(record) for record in self.storage.load(POSTS_KEY)]

    def _save_posts(self, posts: list[Post]) -> None:
        self.storage.save(POSTS_KEY, [post.to_dict() for post in posts])

    def get_post(self, post_id: str) -> Optional[Post]:
        for post in self.list_posts():
            if post.id == post_id:
                return post
        return None

    def create_post(self, draft: PostDraft) -> Post:
        now = utc_now_iso()
        post = Post(
            id=generate_id(),
            title=draft.title,
            content=draft.content,
            author_id=draft.author_id,
            created_at=now,
            updated_at=now,
            excerpt=draft.excerpt,
            image=draft.image,
            category=draft.category,
        )
        posts = self.list_posts()
        posts.insert(0, post)
        self._save_posts(posts)
        return post

    def update_post(self, post_id: str, update: PostUpdate) -> Optional[Post]:
        posts = self.list_posts()
        for index, post in enumerate(posts):
            if post.id == post_id:
                posts[index] = update.apply(post, updated_at=utc_now_iso())
                self._save_posts(posts)
                return posts[index]
        return None

    def delete_post(self, post_id: str) -> bool:
        posts = self.list_posts()
        remaining = [post for post in posts if post.id != post_id]
        if len(remaining) == len(posts):
            return False
        self._save_posts(remaining)
        return True

    # -------------------------- users --------------------------
    def list_users(self) -> list[User]:
        return [User.from_dict(record) for record in self.storage.load(USERS_KEY)]

    def find_user_by_email(self, email: str) -> Optional[User]:
        for user in self.list_users():
            if user.email == email:
                return user
        return None

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def create_user(self, email: str, password: str, full_name: Optional[str] = None) -> User:
        """Append a user; ``password`` is stored as given (callers pass a hash)."""
        user = User(
            id=generate_id(),
            email=email,
            password=password,
            full_name=full_name,
            created_at=utc_now_iso(),
        )
        users = self.list_users()
        users.append(user)
        self.storage.save(USERS_KEY, [u.to_dict() for u in users])
        return user

    def update_user_password(self, user_id: str, password: str) -> bool:
        users = self.list_users()
        for user in users:
            if user.id == user_id:
                user.password = password
                self.storage.save(USERS_KEY, [u.to_dict() for u in users])
                return True
        return False
