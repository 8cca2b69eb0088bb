"""
Public blog listing helpers: card projection, category filter, search,
pagination, reading time and slug lookup.

Everything here is pure and works on the posts already held by the store.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TypeVar

from blog.domain.records import EnrichedPost, Post, parse_timestamp
from blog.domain.slugs import slugify_title

ALL_CATEGORIES = "All Articles"
UNCATEGORIZED = "Uncategorized"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/800x600?text=Blog+Image"
NO_EXCERPT = "No excerpt available"
DATE_UNAVAILABLE = "Date not available"
EXCERPT_LENGTH = 150
POSTS_PER_PAGE = 6
WORDS_PER_MINUTE = 200
ELLIPSIS = "..."

_TAG = re.compile(r"<[^>]*>")

T = TypeVar("T")


@dataclass
class BlogCard:
    id: str
    title: str
    category: str
    date: str
    image: str
    excerpt: str


@dataclass
class Page:
    items: list
    page: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def page_numbers(self) -> list:
        return page_numbers(self.page, self.total_pages)


def page_numbers(current: int, total_pages: int) -> list:
    """
    Page buttons to render: first, last and current +/- 1, with ELLIPSIS standing
    in for the pages exactly two away from the current one.
    """
    window: list = []
    for number in range(1, total_pages + 1):
        if number in (1, total_pages) or current - 1 <= number <= current + 1:
            window.append(number)
        elif number in (current - 2, current + 2):
            window.append(ELLIPSIS)
    return window


def format_date(value: str | None) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return value or DATE_UNAVAILABLE
    return parsed.strftime("%B %d, %Y")


def excerpt_for(post: Post) -> str:
    if post.excerpt:
        return post.excerpt
    if post.content:
        return post.content[:EXCERPT_LENGTH] + "..."
    return NO_EXCERPT


def to_card(post: Post) -> BlogCard:
    return BlogCard(
        id=post.id,
        title=post.title,
        category=post.category or UNCATEGORIZED,
        date=format_date(post.created_at),
        image=post.image or PLACEHOLDER_IMAGE,
        excerpt=excerpt_for(post),
    )


def categories(cards: Iterable[BlogCard]) -> list[str]:
    """The "All Articles" entry followed by each distinct category in first-seen order."""
    seen = [ALL_CATEGORIES]
    for card in cards:
        if card.category and card.category not in seen:
            seen.append(card.category)
    return seen


def filter_cards(cards: Iterable[BlogCard], category: str = ALL_CATEGORIES, query: str = "") -> list[BlogCard]:
    result = list(cards)
    if category and category != ALL_CATEGORIES:
        result = [card for card in result if card.category == category]
    needle = (query or "").strip().lower()
    if needle:
        result = [
            card
            for card in result
            if needle in card.title.lower() or needle in card.excerpt.lower() or needle in card.category.lower()
        ]
    return result


def paginate(items: Sequence[T], page: int = 1, per_page: int = POSTS_PER_PAGE) -> Page:
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    total_pages = math.ceil(len(items) / per_page)
    current = min(max(page, 1), max(total_pages, 1))
    start = (current - 1) * per_page
    return Page(items=list(items[start : start + per_page]), page=current, total_pages=total_pages)


def reading_time(content: str | None) -> int:
    """Minutes to read the tag-stripped content at 200 words per minute (at least 1)."""
    words = _TAG.sub("", content or "").split()
    return max(1, math.ceil(len(words) / WORDS_PER_MINUTE))


def author_initials(name: str | None) -> str:
    parts = (name or "Anonymous").split()
    return "".join(part[0] for part in parts).upper()[:2]


def find_post_by_slug(posts: Iterable[EnrichedPost], slug: str) -> Optional[EnrichedPost]:
    for post in posts:
        if slugify_title(post.title) == slug:
            return post
    return None


def posts_by_author(posts: Iterable[T], user_id: str | None) -> list[T]:
    if not user_id:
        return []
    return [post for post in posts if post.author_id == user_id]
