#!/usr/bin/env python3
"""
Register a user directly in the configured storage (no session is started).

Usage:
  python scripts/add_user.py --email someone@example.com --password secret [--name "Full Name"]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog.core.config import get_settings  # noqa: E402
from blog.core.security import hash_password  # noqa: E402
from blog.repositories.blog_repository import BlogRepository  # noqa: E402
from blog.repositories.storage import get_storage  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a blog user")
    ap.add_argument("--email", required=True, help="Login e-mail (must be unique)")
    ap.add_argument("--password", required=True, help="Password (stored as an Argon2 hash)")
    ap.add_argument("--name", help="Optional display name")
    args = ap.parse_args()

    settings = get_settings()
    repo = BlogRepository(get_storage(settings))
    repo.initialize(seed_demo_user=settings.seed_demo_user)

    email = args.email
    if not email.strip():
        raise SystemExit("Invalid e-mail")
    if repo.find_user_by_email(email):
        raise SystemExit(f"User '{email}' already exists")

    user = repo.create_user(email, hash_password(args.password), full_name=(args.name or "").strip() or None)
    print("OK: user registered")
    print(f"  ID: {user.id}")
    print(f"  Email: {user.email}")
    if user.full_name:
        print(f"  Name: {user.full_name}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
