"""Store wiring: storage, repository, services and the two slices."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger

from blog.core.config import Settings, get_settings
from blog.repositories.blog_repository import BlogRepository
from blog.repositories.storage import KeyValueStorage, get_storage
from blog.services.auth_service import AuthService
from blog.services.post_service import PostService
from blog.services.session_service import clear_session, load_session
from blog.store import auth_slice as auth
from blog.store import posts_slice as posts
from blog.store.toolkit import Action, AsyncThunk

Listener = Callable[["Store", Action], None]


@dataclass
class RootState:
    auth: auth.AuthState
    posts: posts.PostsState


@dataclass
class Services:
    auth: AuthService
    posts: PostService


def select_is_authenticated(state: RootState) -> bool:
    return bool(state.auth.token)


class Store:
    """
    Authoritative in-memory snapshot of the "server" state.

    The auth slice is hydrated synchronously from the persisted token/user at
    construction time. ``delay`` overrides the artificial latency of both
    services (tests pass 0).
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        *,
        settings: Optional[Settings] = None,
        delay: Optional[float] = None,
        initialize: bool = True,
    ) -> None:
        settings = settings or get_settings()
        self.settings = settings
        self.storage = storage if storage is not None else get_storage(settings)
        self.repository = BlogRepository(self.storage)
        if initialize:
            self.repository.initialize(seed_demo_user=settings.seed_demo_user)
        self.services = Services(
            auth=AuthService(self.repository, delay=settings.auth_delay if delay is None else delay),
            posts=PostService(self.repository, delay=settings.posts_delay if delay is None else delay),
        )
        token, user = load_session(self.storage, settings.token_ttl_seconds)
        self.state = RootState(
            auth=auth.AuthState(token=token, user=user),
            posts=posts.posts_slice.initial_state(),
        )
        self._slices = {"auth": auth.auth_slice, "posts": posts.posts_slice}
        self._listeners: list[Listener] = []

    # ------------------------------ dispatch ------------------------------
    def dispatch(self, action: Action) -> Action:
        for name, slice_ in self._slices.items():
            slice_.reduce(getattr(self.state, name), action)
        if action.type == auth.logout.type:
            clear_session(self.storage)
            logger.info("Logged out; persisted session cleared")
        for listener in list(self._listeners):
            listener(self, action)
        return action

    async def dispatch_thunk(self, thunk: AsyncThunk, arg: Any = None) -> Action:
        return await thunk.run(self.dispatch, arg, self.services)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------ actions ------------------------------
    async def login_user(self, email: str, password: str) -> Action:
        return await self.dispatch_thunk(auth.login_user, auth.Credentials(email, password))

    async def register_user(self, email: str, password: str, full_name: Optional[str] = None) -> Action:
        return await self.dispatch_thunk(auth.register_user, auth.Credentials(email, password, full_name))

    def logout(self) -> Action:
        return self.dispatch(auth.logout())

    async def fetch_posts(self) -> Action:
        return await self.dispatch_thunk(posts.fetch_posts)

    async def add_post(self, draft) -> Action:
        return await self.dispatch_thunk(posts.add_post, draft)

    async def update_post(self, post_id: str, data) -> Action:
        return await self.dispatch_thunk(posts.update_post, posts.PostEdit(id=post_id, data=data))

    async def delete_post(self, post_id: str) -> Action:
        return await self.dispatch_thunk(posts.delete_post, post_id)

    # ------------------------------ selectors ------------------------------
    @property
    def is_authenticated(self) -> bool:
        return select_is_authenticated(self.state)
