"""Auth slice: token, user snapshot and the login/register request lifecycle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from blog.domain.records import PublicUser
from blog.store.toolkit import FAILED, IDLE, LOADING, SUCCEEDED, Action, AsyncThunk, Slice


@dataclass
class AuthState:
    token: Optional[str] = None
    user: Optional[PublicUser] = None
    status: str = IDLE
    error: Optional[str] = None


@dataclass
class Credentials:
    email: str
    password: str
    full_name: Optional[str] = None


def _credentials(arg: Union[Credentials, dict]) -> Credentials:
    if isinstance(arg, Credentials):
        return arg
    return Credentials(
        email=arg.get("email", ""),
        password=arg.get("password", ""),
        full_name=arg.get("full_name", arg.get("fullName")),
    )


async def _login(arg, services):
    creds = _credentials(arg)
    return await services.auth.login(creds.email, creds.password)


async def _register(arg, services):
    creds = _credentials(arg)
    return await services.auth.register(creds.email, creds.password, creds.full_name)


login_user = AsyncThunk("auth/login", _login, fallback_error="Login failed")
register_user = AsyncThunk("auth/register", _register, fallback_error="Registration failed")

auth_slice: Slice[AuthState] = Slice("auth", AuthState)
logout = auth_slice.action("logout")
clear_error = auth_slice.action("clearError")


@auth_slice.on(logout.type)
def _on_logout(state: AuthState, action: Action) -> None:
    state.token = None
    state.user = None
    state.status = IDLE
    state.error = None


@auth_slice.on(clear_error.type)
def _on_clear_error(state: AuthState, action: Action) -> None:
    state.error = None


def _on_pending(state: AuthState, action: Action) -> None:
    state.status = LOADING
    state.error = None


def _on_fulfilled(state: AuthState, action: Action) -> None:
    state.status = SUCCEEDED
    state.token = action.payload.token
    state.user = action.payload.user
    state.error = None


def _on_rejected(state: AuthState, action: Action) -> None:
    state.status = FAILED
    state.error = action.error


for _thunk in (login_user, register_user):
    auth_slice.on(_thunk.pending)(_on_pending)
    auth_slice.on(_thunk.fulfilled)(_on_fulfilled)
    auth_slice.on(_thunk.rejected)(_on_rejected)
