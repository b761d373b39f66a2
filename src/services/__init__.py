"""Service layer for tag storage."""

from .migrations import MIGRATIONS, apply_migrations
from .tag_store import StoreAccessError, Tag, TagStore

__all__ = ["MIGRATIONS", "StoreAccessError", "Tag", "TagStore", "apply_migrations"]
