"""Database models for Jotion."""

from jotion.models.base import Base, TimestampMixin
from jotion.models.document import Document

__all__ = ["Base", "TimestampMixin", "Document"]
