"""Bookmark model for storing user bookmarks."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, CreatedAtMixin, UUIDv7Mixin

if TYPE_CHECKING:
    from models.user import User


class Bookmark(Base, UUIDv7Mixin, CreatedAtMixin):
    """Bookmark model - a URL and title owned by exactly one user."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        # Serves the per-user "newest first" listing
        Index("ix_bookmarks_user_id_created_at", "user_id", "created_at"),
    )

    # id provided by UUIDv7Mixin
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)

    user: Mapped["User"] = relationship(back_populates="bookmarks")
