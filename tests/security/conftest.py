"""
Security test fixtures.

Creates two users and a bookmark for each directly in the store, so IDOR
tests can probe another user's data by id.
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.user import User


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """Create the first test user (User A), matching the user_a_token identity."""
    user = User(id="user-a-id", email="user-a@test.com", name="User A")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Create a second test user (User B), matching the user_b_token identity."""
    user = User(id="user-b-id", email="user-b@test.com", name="User B")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    bookmark = Bookmark(
        user_id=user_a.id,
        url="https://user-a-bookmark.example.com",
        title="User A's Private Bookmark",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    bookmark = Bookmark(
        user_id=user_b.id,
        url="https://user-b-bookmark.example.com",
        title="User B's Private Bookmark",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark
