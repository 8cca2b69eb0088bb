from __future__ import annotations

import asyncio

import pytest

from blog.client import BlogClient
from blog.core.errors import UnauthenticatedError
from blog.repositories.blog_repository import DEMO_EMAIL, DEMO_USER_ID
from blog.store import ActionRejected, Store


@pytest.fixture()
def client(storage):
    return BlogClient(Store(storage, delay=0))


def test_login_and_logout(client):
    user = asyncio.run(client.login(DEMO_EMAIL, "demo123"))
    assert user.id == DEMO_USER_ID
    assert client.is_authenticated

    client.logout()
    assert not client.is_authenticated
    assert client.user is None


def test_login_failure_raises_reason(client):
    with pytest.raises(ActionRejected) as exc:
        asyncio.run(client.login(DEMO_EMAIL, "wrong"))
    assert exc.value.reason == "Invalid password"


def test_create_requires_login(client):
    with pytest.raises(UnauthenticatedError):
        asyncio.run(client.create({"title": "A", "content": "<p>hi</p>"}))


def test_dashboard_flow(client):
    asyncio.run(client.register("writer@example.com", "pw", "Writer"))
    mine = asyncio.run(client.create({"title": "Mine", "content": "<p>hi</p>", "category": "Tech"}))
    assert mine.author_id == client.user.id
    assert mine.profiles.full_name == "Writer"

    edited = asyncio.run(client.edit(mine.id, {"excerpt": "Short"}))
    assert edited.excerpt == "Short"
    assert [p.id for p in client.my_posts] == [mine.id]

    assert asyncio.run(client.remove(mine.id)) == mine.id
    assert client.my_posts == []
    with pytest.raises(ActionRejected):
        asyncio.run(client.remove(mine.id))


def test_load_posts_only_fetches_when_idle(client, monkeypatch):
    calls = []
    original = client.store.fetch_posts

    async def counting():
        calls.append(1)
        return await original()

    monkeypatch.setattr(client.store, "fetch_posts", counting)
    asyncio.run(client.load_posts())
    asyncio.run(client.load_posts())
    assert calls == [1]
    assert not client.is_loading


def test_create_does_not_mutate_caller_draft(client):
    from blog.domain.records import PostDraft

    asyncio.run(client.login(DEMO_EMAIL, "demo123"))
    draft = PostDraft(title="A", content="b", author_id="someone-else")

    post = asyncio.run(client.create(draft))

    assert post.author_id == DEMO_USER_ID
    assert draft.author_id == "someone-else"


def test_create_ignores_unknown_keys(client):
    asyncio.run(client.login(DEMO_EMAIL, "demo123"))
    post = asyncio.run(client.create({"title": "A", "content": "b", "id": "x"}))
    assert post.id != "x"
    assert post.title == "A"
