#!/usr/bin/env python3
"""One-off migration script: JSON storage file -> SQL storage (DATABASE_URL)."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blog.core.config import get_settings  # noqa: E402
from blog.db.create_tables import create_all  # noqa: E402
from blog.repositories.json_storage import JsonFileStorage  # noqa: E402
from blog.repositories.sql_storage import SQLStorage  # noqa: E402
from blog.repositories.storage import POSTS_KEY, USERS_KEY, KeyValueStorage  # noqa: E402

COLLECTIONS = (POSTS_KEY, USERS_KEY)


def migrate(source: KeyValueStorage, target: KeyValueStorage, overwrite: bool = False) -> dict[str, int]:
    """Copy every collection present in ``source``; returns record counts per key."""
    copied: dict[str, int] = {}
    for key in COLLECTIONS:
        if not source.has_item(key):
            continue
        if target.has_item(key) and not overwrite:
            print(f"Skipping {key}: already present in target (use --overwrite)")
            continue
        records = source.load(key)
        target.save(key, records)
        copied[key] = len(records)
    return copied


def main() -> None:
    ap = argparse.ArgumentParser(description="Copy blog collections from the JSON file into SQL")
    ap.add_argument("--source", help="JSON storage file (default: BLOG_DATA_FILE)")
    ap.add_argument("--overwrite", action="store_true", help="Replace collections already in the target")
    args = ap.parse_args()

    settings = get_settings()
    source_path = Path(args.source) if args.source else settings.data_file
    if not source_path.exists():
        raise SystemExit(f"File not found: {source_path}")

    create_all()
    copied = migrate(JsonFileStorage(source_path), SQLStorage(), overwrite=args.overwrite)
    for key, count in copied.items():
        print(f"{key}: {count} records")
    print("Migration finished.")


if __name__ == "__main__":
    main()
