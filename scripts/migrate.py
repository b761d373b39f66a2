#!/usr/bin/env python3
"""
Apply database migrations and optionally seed tags.

Shows:
- Migrations applied by this run
- Tags created or found while seeding
- The current tag listing (with --list)

Usage:
    cd h2-tags-api
    uv run python scripts/migrate.py [--seed NAME ...] [--list]

Options:
    --seed NAME ...   Find or create a tag for each name
    --list            Print all tags after migrating
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from src.services.tag_store import StoreAccessError, TagStore


def print_tags(tags: list) -> None:
    """Print the tag listing."""
    print()
    print("TAGS")
    print("-" * 40)
    if not tags:
        print("  (none)")
    for tag in tags:
        print(f"  {tag.name:<24} {tag.slug}")
    print()
    print(f"  Total: {len(tags)}")
    print()


async def run(database_url: str, seed: list[str], show: bool) -> None:
    store = TagStore(database_url)
    try:
        await store.initialize(run_migrations=True)
        for name in seed:
            tag = await store.get_or_create_tag(name)
            if tag:
                print(f"Seeded {name!r} -> {tag.slug} ({tag.id})")
            else:
                print(f"Skipped {name!r}: no usable slug")

        if show:
            print_tags(await store.list_tags())
    finally:
        await store.close()


async def main():
    parser = argparse.ArgumentParser(
        description="Apply tag database migrations"
    )
    parser.add_argument(
        "--seed",
        nargs="+",
        default=[],
        metavar="NAME",
        help="Tag names to find or create"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print all tags after migrating"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Validate environment
    database_url = os.environ.get("DATABASE_URL") or os.environ.get("POSTGRES_URL")
    if not database_url:
        print("ERROR: DATABASE_URL environment variable not set")
        sys.exit(1)

    try:
        await run(database_url, args.seed, args.list)
    except StoreAccessError as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
