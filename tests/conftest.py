"""
Shared fixtures and mocks for API tests.
"""
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from src.services.tag_store import Tag


@pytest.fixture
def created_at():
    """Fixed creation timestamp."""
    return datetime(2024, 1, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_tag_rows(created_at):
    """Tag rows as returned by the database for ORDER BY name ASC."""
    return [
        {"id": "1", "name": "alpha", "slug": "alpha", "created_at": created_at},
        {"id": "2", "name": "zeta", "slug": "zeta", "created_at": created_at},
    ]


@pytest.fixture
def sample_tags(sample_tag_rows):
    """Tag objects matching sample_tag_rows."""
    return [Tag(**row) for row in sample_tag_rows]


@pytest.fixture
def mock_cursor():
    """Create a mock cursor usable as an async context manager."""
    cursor = AsyncMock()
    cursor.__aenter__ = AsyncMock(return_value=cursor)
    cursor.__aexit__ = AsyncMock(return_value=None)
    cursor.fetchone = AsyncMock()
    cursor.fetchall = AsyncMock()
    cursor.rowcount = 0
    return cursor


@pytest.fixture
def mock_conn(mock_cursor):
    """Create a mock async connection."""
    transaction = AsyncMock()
    transaction.__aenter__ = AsyncMock(return_value=transaction)
    transaction.__aexit__ = AsyncMock(return_value=None)

    conn = AsyncMock()
    conn.cursor = MagicMock(return_value=mock_cursor)
    conn.transaction = MagicMock(return_value=transaction)
    conn.close = AsyncMock()
    conn.closed = False
    return conn


@pytest.fixture
def mock_store(sample_tags):
    """Mock TagStore instance used by the API."""
    store = AsyncMock()
    store.initialize = AsyncMock()
    store.close = AsyncMock()
    store.connected = True
    store.list_tags = AsyncMock(return_value=sample_tags)
    store.count_tags = AsyncMock(return_value=len(sample_tags))
    return store
