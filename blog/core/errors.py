"""Exceptions raised by repositories and services.

Every error carries a human-readable ``message``; the store turns it into the
``error`` string of a rejected action.
"""

from __future__ import annotations


class BlogError(Exception):
    """Base class for blog-related exceptions."""

    default_message = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(BlogError):
    default_message = "Post not found"


class ConflictError(BlogError):
    default_message = "User with this email already exists"


class InvalidCredentialsError(BlogError):
    default_message = "Invalid password"


class UserNotFoundError(InvalidCredentialsError):
    default_message = "User not found"


class UnauthenticatedError(BlogError):
    default_message = "User not authenticated"


class StorageError(BlogError):
    """Raised when a stored blob is not the JSON shape we expect."""

    default_message = "Corrupted storage"
