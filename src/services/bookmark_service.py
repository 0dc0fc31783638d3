"""Service layer for bookmark CRUD operations."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate

logger = logging.getLogger(__name__)


def parse_bookmark_id(value: str) -> UUID | None:
    """Parse a bookmark id from a path segment, returning None if it isn't a UUID."""
    try:
        return UUID(value)
    except ValueError:
        return None


async def create_bookmark(
    db: AsyncSession,
    user_id: str,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark for a user.

    Args:
        db: Database session.
        user_id: ID of the owning user (must already exist).
        data: Validated bookmark creation data.

    Returns:
        The created bookmark, refreshed so created_at is populated.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(user_id=user_id, url=data.url, title=data.title)
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def list_bookmarks(db: AsyncSession, user_id: str) -> list[Bookmark]:
    """
    List all bookmarks owned by a user, newest first.

    Ties on created_at fall back to id (UUIDv7, also time-ordered).
    """
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc()),
    )
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: UUID) -> Bookmark | None:
    """Get a bookmark by ID regardless of owner. Callers must check ownership."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def delete_bookmark(db: AsyncSession, user_id: str, bookmark_id: str) -> bool:
    """
    Delete a bookmark if it exists and belongs to the user.

    A malformed id, a missing row, and a row owned by someone else all return
    False, so callers cannot tell another user's bookmark from a missing one.

    Returns:
        True if deleted, False if not found.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    parsed_id = parse_bookmark_id(bookmark_id)
    if parsed_id is None:
        return False

    bookmark = await get_bookmark(db, parsed_id)
    if bookmark is None:
        return False
    if bookmark.user_id != user_id:
        logger.debug(
            "User %s attempted to delete bookmark %s owned by another user",
            user_id,
            parsed_id,
        )
        return False

    await db.delete(bookmark)
    await db.flush()
    return True
