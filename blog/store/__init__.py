"""
In-memory client state: an auth slice and a posts slice driven by actions.

Async thunks wrap the services and emit ``<prefix>/pending`` followed by
``<prefix>/fulfilled`` or ``<prefix>/rejected``; slice reducers apply them to
the state held by Store.
"""

from blog.store.store import RootState, Store, select_is_authenticated
from blog.store.toolkit import Action, ActionRejected, IDLE, LOADING, SUCCEEDED, FAILED

__all__ = [
    "Action",
    "ActionRejected",
    "FAILED",
    "IDLE",
    "LOADING",
    "RootState",
    "Store",
    "SUCCEEDED",
    "select_is_authenticated",
]
