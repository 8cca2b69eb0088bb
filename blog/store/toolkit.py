"""Minimal action/slice/thunk primitives used by the blog slices."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from loguru import logger

from blog.core.errors import BlogError

IDLE = "idle"
LOADING = "loading"
SUCCEEDED = "succeeded"
FAILED = "failed"

S = TypeVar("S")
Reducer = Callable[[Any, "Action"], None]
Dispatch = Callable[["Action"], "Action"]


class ActionRejected(Exception):
    """Raised by Action.unwrap() when the action was rejected."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class Action:
    type: str
    payload: Any = None
    error: Optional[str] = None
    meta: dict = field(default_factory=dict)

    @property
    def rejected(self) -> bool:
        return self.type.endswith("/rejected")

    def unwrap(self) -> Any:
        if self.rejected:
            raise ActionRejected(self.error or "Request failed")
        return self.payload


class ActionCreator:
    """Callable producing actions of one type."""

    def __init__(self, type: str) -> None:
        self.type = type

    def __call__(self, payload: Any = None) -> Action:
        return Action(self.type, payload=payload)

    def __repr__(self) -> str:
        return f"ActionCreator({self.type!r})"


class AsyncThunk:
    """
    Wraps an async payload creator in the pending -> fulfilled | rejected cycle.

    Any exception raised by the payload creator ends up as the ``error`` string
    of the rejected action: the BlogError message when there is one, otherwise
    ``fallback_error``.
    """

    def __init__(
        self,
        type_prefix: str,
        payload_creator: Callable[[Any, Any], Awaitable[Any]],
        fallback_error: str = "Request failed",
    ) -> None:
        self.type_prefix = type_prefix
        self.payload_creator = payload_creator
        self.fallback_error = fallback_error
        self.pending = f"{type_prefix}/pending"
        self.fulfilled = f"{type_prefix}/fulfilled"
        self.rejected = f"{type_prefix}/rejected"

    def _reason(self, exc: Exception) -> str:
        if isinstance(exc, BlogError):
            return exc.message
        return str(exc) or self.fallback_error

    async def run(self, dispatch: Dispatch, arg: Any, services: Any) -> Action:
        meta = {"arg": arg}
        dispatch(Action(self.pending, meta=meta))
        try:
            payload = await self.payload_creator(arg, services)
        except BlogError as exc:
            logger.debug(f"{self.rejected}: {exc.message}")
            result = Action(self.rejected, error=self._reason(exc), meta=meta)
        except Exception as exc:
            logger.exception(f"{self.type_prefix} failed unexpectedly")
            result = Action(self.rejected, error=self._reason(exc), meta=meta)
        else:
            logger.debug(self.fulfilled)
            result = Action(self.fulfilled, payload=payload, meta=meta)
        return dispatch(result)

    def __repr__(self) -> str:
        return f"AsyncThunk({self.type_prefix!r})"


class Slice(Generic[S]):
    """A named piece of state with reducers keyed by action type."""

    def __init__(self, name: str, initial_state: Callable[[], S]) -> None:
        self.name = name
        self.initial_state = initial_state
        self.reducers: dict[str, Reducer] = {}

    def on(self, action_type: str) -> Callable[[Reducer], Reducer]:
        def register(reducer: Reducer) -> Reducer:
            self.reducers[action_type] = reducer
            return reducer

        return register

    def action(self, name: str) -> ActionCreator:
        return ActionCreator(f"{self.name}/{name}")

    def reduce(self, state: S, action: Action) -> S:
        reducer = self.reducers.get(action.type)
        if reducer is not None:
            reducer(state, action)
        return state
