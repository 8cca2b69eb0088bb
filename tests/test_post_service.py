from __future__ import annotations

import asyncio

import pytest

from blog.core.errors import NotFoundError, UnauthenticatedError
from blog.domain.records import PostDraft, PostUpdate
from blog.repositories.blog_repository import DEMO_EMAIL
from blog.repositories.storage import POSTS_KEY
from blog.services.post_service import PostService


@pytest.fixture()
def svc(repo):
    return PostService(repo, delay=0)


def _post(post_id: str, created_at: str, author_id: str = "1") -> dict:
    return {
        "id": post_id,
        "title": post_id,
        "content": "<p>x</p>",
        "excerpt": None,
        "author_id": author_id,
        "created_at": created_at,
        "updated_at": created_at,
    }


def test_fetch_sorts_newest_first_and_enriches(svc, storage):
    storage.save(
        POSTS_KEY,
        [
            _post("old", "2024-01-01T00:00:00.000Z"),
            _post("new", "2024-03-01T00:00:00.000Z"),
            _post("orphan", "2024-02-01T00:00:00.000Z", author_id="404"),
        ],
    )

    posts = asyncio.run(svc.fetch_posts())

    assert [p.id for p in posts] == ["new", "orphan", "old"]
    assert posts[0].profiles.email == DEMO_EMAIL
    assert posts[0].profiles.full_name == "Demo User"
    assert posts[1].profiles is None
    assert "profiles" not in posts[1].to_dict()


def test_fetch_empty(svc):
    assert asyncio.run(svc.fetch_posts()) == []


def test_add_post_requires_author(svc, repo):
    with pytest.raises(UnauthenticatedError):
        asyncio.run(svc.add_post(PostDraft(title="A", content="<p>hi</p>")))
    assert repo.list_posts() == []


def test_add_post_returns_enriched_record(svc):
    post = asyncio.run(svc.add_post(PostDraft(title="A", content="<p>hi</p>", author_id="1", category="News")))
    assert post.profiles.email == DEMO_EMAIL
    assert post.category == "News"


def test_update_post_accepts_dict_and_dataclass(svc):
    post = asyncio.run(svc.add_post(PostDraft(title="A", content="<p>hi</p>", author_id="1")))

    updated = asyncio.run(svc.update_post(post.id, {"title": "B", "id": "ignored"}))
    assert updated.title == "B"
    assert updated.id == post.id
    assert updated.profiles.email == DEMO_EMAIL

    updated = asyncio.run(svc.update_post(post.id, PostUpdate(content="<p>new</p>")))
    assert (updated.title, updated.content) == ("B", "<p>new</p>")


def test_update_and_delete_unknown_raise_not_found(svc):
    with pytest.raises(NotFoundError) as exc:
        asyncio.run(svc.update_post("missing", PostUpdate(title="B")))
    assert exc.value.message == "Post not found"
    with pytest.raises(NotFoundError):
        asyncio.run(svc.delete_post("missing"))


def test_delete_returns_id(svc, repo):
    post = asyncio.run(svc.add_post(PostDraft(title="A", content="<p>hi</p>", author_id="1")))
    assert asyncio.run(svc.delete_post(post.id)) == post.id
    assert repo.list_posts() == []
