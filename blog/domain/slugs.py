"""Slug helpers for post detail URLs."""
from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str | None) -> str:
    """Lower-case the title, collapse anything outside [a-z0-9] into '-' and trim dashes."""
    value = _NON_ALNUM.sub("-", (title or "").lower())
    return value.strip("-")
