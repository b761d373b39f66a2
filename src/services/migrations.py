"""Ordered schema migrations for the tag database.

Each migration is a (name, sql) pair applied once, inside its own
transaction, and recorded in the schema_migrations table. Names sort in
application order.
"""

import logging

import psycopg

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[str, str]] = [
    ("0000_create_tags", """
        CREATE TABLE IF NOT EXISTS tags (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            slug TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """),
    ("0001_tags_slug_unique", """
        CREATE UNIQUE INDEX IF NOT EXISTS tags_slug_unique
        ON tags(slug)
    """),
    # Listing is always ORDER BY name
    ("0002_tags_name_idx", """
        CREATE INDEX IF NOT EXISTS tags_name_idx
        ON tags(name)
    """),
]


async def applied_migrations(conn: psycopg.AsyncConnection) -> set[str]:
    """Return the names of migrations already recorded.

    Creates the bookkeeping table on first use.
    """
    async with conn.cursor() as cur:
        await cur.execute("""
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
        """)
        await cur.execute("SELECT name FROM schema_migrations")
        rows = await cur.fetchall()

    return {row["name"] for row in rows}


async def apply_migrations(
    conn: psycopg.AsyncConnection,
    migrations: list[tuple[str, str]] = MIGRATIONS,
) -> list[str]:
    """Apply every migration not yet recorded.

    Args:
        conn: Open connection (autocommit, dict rows)
        migrations: Ordered (name, sql) pairs

    Returns:
        Names of the migrations applied by this call, in order
    """
    done = await applied_migrations(conn)
    applied = []

    for name, sql in migrations:
        if name in done:
            continue

        async with conn.transaction():
            async with conn.cursor() as cur:
                await cur.execute(sql)
                await cur.execute(
                    "INSERT INTO schema_migrations (name) VALUES (%s)",
                    (name,)
                )

        logger.info(f"Applied migration {name}")
        applied.append(name)

    return applied
