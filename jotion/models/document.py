"""Document model for storing note pages."""

from typing import Optional

from sqlalchemy import BigInteger, Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jotion.models.base import Base, TimestampMixin, next_creation_time


class Document(Base, TimestampMixin):
    """Document model representing one user-owned page in a tree of pages."""

    __tablename__ = "documents"
    __table_args__ = (
        Index("by_user", "user_id"),
        Index("by_user_parent", "user_id", "parent_document"),
    )

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # Soft reference: the parent may have been removed since.
    parent_document: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    icon: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    cover_image: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    creation_time: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=next_creation_time, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<Document(id={self.id!r}, title={self.title!r}, "
            f"parent_document={self.parent_document!r}, is_archived={self.is_archived!r})>"
        )
