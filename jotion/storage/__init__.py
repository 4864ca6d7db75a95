"""Storage layer for Jotion."""

from jotion.storage.database import Database, get_db
from jotion.storage.repositories import DocumentRepository

__all__ = [
    "Database",
    "get_db",
    "DocumentRepository",
]
