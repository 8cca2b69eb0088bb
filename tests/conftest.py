from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the blog package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog.core import config as core_config  # noqa: E402
from blog.repositories.blog_repository import BlogRepository  # noqa: E402
from blog.repositories.storage import MemoryStorage  # noqa: E402


@pytest.fixture(autouse=True)
def settings_env(monkeypatch, tmp_path):
    """Memory backend, no artificial delay and a throwaway data file for every test."""
    monkeypatch.setenv("BLOG_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("BLOG_DATA_FILE", str(tmp_path / "data.json"))
    monkeypatch.setenv("BLOG_POSTS_DELAY_MS", "0")
    monkeypatch.setenv("BLOG_AUTH_DELAY_MS", "0")
    monkeypatch.delenv("BLOG_TOKEN_TTL_SECONDS", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def repo(storage):
    repository = BlogRepository(storage)
    repository.initialize()
    return repository
