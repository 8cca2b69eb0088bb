"""
Configuration helpers for the blog state layer.

Services and storages read configuration through get_settings() instead of
fetching os.environ directly, so tests can swap values with monkeypatch and
get_settings.cache_clear().
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[1] / "data.json"
STORAGE_BACKENDS = {"json", "sql", "memory"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    storage_backend: str
    data_file: Path
    database_url: str
    posts_delay_ms: int
    auth_delay_ms: int
    token_ttl_seconds: int
    seed_demo_user: bool

    @property
    def posts_delay(self) -> float:
        return max(0, self.posts_delay_ms) / 1000

    @property
    def auth_delay(self) -> float:
        return max(0, self.auth_delay_ms) / 1000


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    backend = (os.getenv("BLOG_STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "json"

    return Settings(
        storage_backend=backend,
        data_file=Path(os.getenv("BLOG_DATA_FILE") or DEFAULT_DATA_FILE),
        database_url=os.getenv("DATABASE_URL", ""),
        posts_delay_ms=_int(os.getenv("BLOG_POSTS_DELAY_MS", "300"), 300),
        auth_delay_ms=_int(os.getenv("BLOG_AUTH_DELAY_MS", "500"), 500),
        token_ttl_seconds=_int(os.getenv("BLOG_TOKEN_TTL_SECONDS", "0"), 0),
        seed_demo_user=_bool(os.getenv("BLOG_SEED_DEMO_USER"), True),
    )
