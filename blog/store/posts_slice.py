"""Posts slice: the enriched post list shown by the blog and the dashboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from blog.domain.records import EnrichedPost, PostDraft
from blog.store.toolkit import FAILED, IDLE, LOADING, SUCCEEDED, Action, AsyncThunk, Slice


@dataclass
class PostsState:
    items: list[EnrichedPost] = field(default_factory=list)
    status: str = IDLE
    error: Optional[str] = None


@dataclass
class PostEdit:
    """Argument of update_post: target id plus a PostUpdate (or a dict of fields)."""

    id: str
    data: object


def as_draft(arg: Union[PostDraft, dict]) -> PostDraft:
    if isinstance(arg, PostDraft):
        return arg
    return PostDraft(
        title=arg.get("title", ""),
        content=arg.get("content", ""),
        author_id=arg.get("author_id") or "",
        excerpt=arg.get("excerpt"),
        image=arg.get("image"),
        category=arg.get("category"),
    )


def _edit(arg: Union[PostEdit, dict]) -> PostEdit:
    if isinstance(arg, PostEdit):
        return arg
    return PostEdit(id=arg["id"], data=arg.get("data") or {})


async def _fetch(arg, services):
    return await services.posts.fetch_posts()


async def _add(arg, services):
    return await services.posts.add_post(as_draft(arg))


async def _update(arg, services):
    edit = _edit(arg)
    return await services.posts.update_post(edit.id, edit.data)


async def _delete(arg, services):
    return await services.posts.delete_post(arg)


fetch_posts = AsyncThunk("posts/fetchAll", _fetch, fallback_error="Failed to fetch posts")
add_post = AsyncThunk("posts/add", _add, fallback_error="Failed to create post")
update_post = AsyncThunk("posts/update", _update, fallback_error="Failed to update post")
delete_post = AsyncThunk("posts/delete", _delete, fallback_error="Failed to delete post")

posts_slice: Slice[PostsState] = Slice("posts", PostsState)
clear_error = posts_slice.action("clearError")


@posts_slice.on(clear_error.type)
def _on_clear_error(state: PostsState, action: Action) -> None:
    state.error = None


@posts_slice.on(fetch_posts.pending)
def _on_fetch_pending(state: PostsState, action: Action) -> None:
    state.status = LOADING


@posts_slice.on(fetch_posts.fulfilled)
def _on_fetch_fulfilled(state: PostsState, action: Action) -> None:
    state.status = SUCCEEDED
    state.items = list(action.payload)
    state.error = None


@posts_slice.on(fetch_posts.rejected)
def _on_fetch_rejected(state: PostsState, action: Action) -> None:
    state.status = FAILED
    state.error = action.error


@posts_slice.on(add_post.fulfilled)
def _on_add_fulfilled(state: PostsState, action: Action) -> None:
    # Prepended without re-sorting against the fetched items.
    state.items.insert(0, action.payload)


@posts_slice.on(update_post.fulfilled)
def _on_update_fulfilled(state: PostsState, action: Action) -> None:
    updated = action.payload
    state.items = [updated if post.id == updated.id else post for post in state.items]


@posts_slice.on(delete_post.fulfilled)
def _on_delete_fulfilled(state: PostsState, action: Action) -> None:
    state.items = [post for post in state.items if post.id != action.payload]


def _on_mutation_rejected(state: PostsState, action: Action) -> None:
    state.error = action.error


for _thunk in (add_post, update_post, delete_post):
    posts_slice.on(_thunk.rejected)(_on_mutation_rejected)
