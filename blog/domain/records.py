"""
Typed records for the two stored collections and their read-time views.

The JSON layout written to storage matches what the browser mock kept under
``mock_users`` / ``mock_posts``; ``from_dict`` ignores keys it does not know.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any, Optional

from blog.core.errors import StorageError


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision (``...Z``)."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _known(cls, data: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


def _stored(cls, data: dict):
    """Build a record read back from storage; missing required keys mean corrupted data."""
    try:
        return cls(**_known(cls, data))
    except TypeError as exc:
        raise StorageError(f"Malformed {cls.__name__} record {data.get('id')!r}: {exc}") from exc


@dataclass
class User:
    id: str
    email: str
    password: str
    created_at: str
    full_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return _stored(cls, data)

    def to_dict(self) -> dict:
        out = {"id": self.id, "email": self.email, "password": self.password}
        if self.full_name is not None:
            out["full_name"] = self.full_name
        out["created_at"] = self.created_at
        return out

    def public(self) -> "PublicUser":
        return PublicUser(id=self.id, email=self.email, full_name=self.full_name)

    def profile(self) -> "AuthorProfile":
        return AuthorProfile(full_name=self.full_name or None, email=self.email)


@dataclass
class PublicUser:
    """Snapshot of a user that is safe to keep in client state (no password)."""

    id: str
    email: str
    full_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PublicUser":
        return cls(**_known(cls, data))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AuthorProfile:
    full_name: Optional[str]
    email: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Post:
    id: str
    title: str
    content: str
    author_id: str
    created_at: str
    updated_at: str
    excerpt: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Post":
        return _stored(cls, data)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "excerpt": self.excerpt,
            "author_id": self.author_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "image": self.image,
            "category": self.category,
        }


@dataclass
class EnrichedPost(Post):
    """A post joined with its author's profile at read time (never persisted)."""

    profiles: Optional[AuthorProfile] = None

    @classmethod
    def from_post(cls, post: Post, author: Optional[User]) -> "EnrichedPost":
        values = {f.name: getattr(post, f.name) for f in fields(Post)}
        return cls(**values, profiles=author.profile() if author else None)

    def to_dict(self) -> dict:
        out = super().to_dict()
        if self.profiles is not None:
            out["profiles"] = self.profiles.to_dict()
        return out


@dataclass
class PostDraft:
    """Fields supplied by the author when creating a post."""

    title: str
    content: str
    author_id: str = ""
    excerpt: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

_REQUIRED_POST_FIELDS = ("title", "content")


@dataclass
class PostUpdate:
    """
    Partial update of a post.

    Fields left as UNSET keep their stored value. ``None`` clears the optional
    fields (excerpt, image, category); title and content cannot be cleared.
    """

    title: Any = field(default=UNSET)
    content: Any = field(default=UNSET)
    excerpt: Any = field(default=UNSET)
    image: Any = field(default=UNSET)
    category: Any = field(default=UNSET)

    @classmethod
    def from_dict(cls, data: dict) -> "PostUpdate":
        return cls(**_known(cls, data))

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def apply(self, post: Post, updated_at: str) -> Post:
        changes = self.changes()
        for name in _REQUIRED_POST_FIELDS:
            if name in changes and changes[name] is None:
                raise ValueError(f"Post {name} cannot be cleared")
        return replace(post, **changes, updated_at=updated_at)
