"""
BlogRepository: bootstrap, post CRUD and user lookups over whole collections.
"""
from __future__ import annotations

import pytest

import blog.repositories.blog_repository as blog_repository
from blog.core.security import is_hashed, verify_password
from blog.domain.records import PostDraft, PostUpdate
from blog.repositories.blog_repository import DEMO_EMAIL, DEMO_PASSWORD, DEMO_USER_ID, BlogRepository
from blog.repositories.storage import POSTS_KEY, USERS_KEY


def _draft(title="A", author_id="1", **extra) -> PostDraft:
    return PostDraft(title=title, content="<p>hi</p>", author_id=author_id, **extra)


def test_initialize_seeds_demo_user_once(storage):
    repo = BlogRepository(storage)
    repo.initialize()
    repo.initialize()

    users = repo.list_users()
    assert len(users) == 1
    demo = users[0]
    assert demo.id == DEMO_USER_ID
    assert demo.email == DEMO_EMAIL
    assert demo.full_name == "Demo User"
    assert is_hashed(demo.password)
    assert verify_password(DEMO_PASSWORD, demo.password)
    assert storage.load(POSTS_KEY) == []


def test_initialize_keeps_existing_collections(storage):
    storage.save(USERS_KEY, [{"id": "9", "email": "x@example.com", "password": "p", "created_at": "2024-01-01T00:00:00Z"}])
    BlogRepository(storage).initialize()
    assert [u["id"] for u in storage.load(USERS_KEY)] == ["9"]


def test_initialize_without_seed(storage):
    repo = BlogRepository(storage)
    repo.initialize(seed_demo_user=False)
    assert repo.list_users() == []


def test_create_post_prepends_and_stamps(repo):
    first = repo.create_post(_draft("first", category="News"))
    second = repo.create_post(_draft("second"))

    posts = repo.list_posts()
    assert [p.id for p in posts] == [second.id, first.id]
    assert first.created_at == first.updated_at
    assert posts[1].category == "News"
    assert posts[0].excerpt is None


def test_create_post_is_not_idempotent(repo):
    a = repo.create_post(_draft())
    b = repo.create_post(_draft())
    assert a.id != b.id
    assert len(repo.list_posts()) == 2


def test_update_post_merges_and_refreshes_timestamp(repo, monkeypatch):
    monkeypatch.setattr(blog_repository, "utc_now_iso", lambda: "2024-01-01T00:00:00.000Z")
    post = repo.create_post(_draft(excerpt="short", category="News"))

    monkeypatch.setattr(blog_repository, "utc_now_iso", lambda: "2024-02-01T00:00:00.000Z")
    updated = repo.update_post(post.id, PostUpdate(title="B"))

    assert updated.title == "B"
    assert updated.content == "<p>hi</p>"
    assert updated.excerpt == "short"
    assert updated.created_at == "2024-01-01T00:00:00.000Z"
    assert updated.updated_at == "2024-02-01T00:00:00.000Z"
    assert repo.get_post(post.id) == updated


def test_update_without_changes_still_refreshes_timestamp(repo, monkeypatch):
    monkeypatch.setattr(blog_repository, "utc_now_iso", lambda: "2024-01-01T00:00:00.000Z")
    post = repo.create_post(_draft())
    monkeypatch.setattr(blog_repository, "utc_now_iso", lambda: "2024-03-01T00:00:00.000Z")
    assert repo.update_post(post.id, PostUpdate()).updated_at == "2024-03-01T00:00:00.000Z"


def test_update_none_clears_optional_field(repo):
    post = repo.create_post(_draft(excerpt="short", image="data:image/png;base64,AAA"))
    updated = repo.update_post(post.id, PostUpdate(excerpt=None))
    assert updated.excerpt is None
    assert updated.image == "data:image/png;base64,AAA"


def test_update_cannot_clear_title(repo):
    post = repo.create_post(_draft())
    with pytest.raises(ValueError):
        repo.update_post(post.id, PostUpdate(title=None))
    assert repo.get_post(post.id).title == "A"


def test_update_unknown_id_leaves_collection(repo, storage):
    repo.create_post(_draft())
    before = storage.load(POSTS_KEY)
    assert repo.update_post("missing", PostUpdate(title="B")) is None
    assert storage.load(POSTS_KEY) == before


def test_delete_post(repo, storage):
    a = repo.create_post(_draft("a"))
    b = repo.create_post(_draft("b"))
    before = storage.load(POSTS_KEY)

    assert repo.delete_post("missing") is False
    assert storage.load(POSTS_KEY) == before

    assert repo.delete_post(a.id) is True
    assert [p.id for p in repo.list_posts()] == [b.id]
    assert repo.delete_post(a.id) is False


def test_sequence_reflects_net_effect(repo):
    a = repo.create_post(_draft("a"))
    b = repo.create_post(_draft("b"))
    c = repo.create_post(_draft("c"))
    repo.update_post(b.id, PostUpdate(title="b2"))
    repo.delete_post(a.id)
    repo.update_post(c.id, PostUpdate(category="Tech"))

    posts = repo.list_posts()
    assert [(p.id, p.title, p.category) for p in posts] == [(c.id, "c", "Tech"), (b.id, "b2", None)]


def test_create_user_appends(repo):
    user = repo.create_user("new@example.com", "hash", full_name="New")
    users = repo.list_users()
    assert users[-1].id == user.id
    assert users[0].id == DEMO_USER_ID
    assert user.id != DEMO_USER_ID


def test_find_user_by_email_is_case_sensitive(repo):
    assert repo.find_user_by_email(DEMO_EMAIL).id == DEMO_USER_ID
    assert repo.find_user_by_email(DEMO_EMAIL.upper()) is None
    assert repo.find_user_by_id(DEMO_USER_ID).email == DEMO_EMAIL
    assert repo.find_user_by_id("nope") is None


def test_stored_records_ignore_unknown_keys(storage):
    storage.save(
        POSTS_KEY,
        [
            {
                "id": "p1",
                "title": "Legacy",
                "content": "x",
                "excerpt": None,
                "author_id": "1",
                "created_at": "2024-01-01T00:00:00.000Z",
                "updated_at": "2024-01-01T00:00:00.000Z",
                "userId": 1,
            }
        ],
    )
    repo = BlogRepository(storage)
    assert repo.get_post("p1").title == "Legacy"


def test_update_user_password(repo):
    assert repo.update_user_password(DEMO_USER_ID, "other") is True
    assert repo.find_user_by_id(DEMO_USER_ID).password == "other"
    assert repo.update_user_password("missing", "x") is False


def test_record_missing_required_key_is_storage_error(storage):
    from blog.core.errors import StorageError

    storage.save(POSTS_KEY, [{"id": "p1", "title": "no content"}])
    storage.save(USERS_KEY, [{"id": "u1"}])
    repo = BlogRepository(storage)
    with pytest.raises(StorageError):
        repo.list_posts()
    with pytest.raises(StorageError):
        repo.find_user_by_email("x@example.com")
