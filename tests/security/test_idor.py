"""
IDOR (Insecure Direct Object Reference) security tests.

These tests verify that users cannot see or delete bookmarks belonging to
other users by manipulating bookmark ids.

OWASP Reference: A01:2021 - Broken Access Control
"""
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.user import User


class TestBookmarkIDOR:
    """Test IDOR protection for bookmark resources."""

    async def test__delete_bookmark__returns_404_for_other_users_bookmark(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        user_b_headers: dict[str, str],
        user_a_bookmark: Bookmark,
    ) -> None:
        """User B cannot delete User A's bookmark, and the row survives."""
        response = await client.post(
            f"/bookmarks/{user_a_bookmark.id}/delete",
            headers=user_b_headers,
        )

        # Should return 404, not 403 (to prevent id enumeration)
        assert response.status_code == 404
        assert response.json()["detail"] == "Not found"
        assert await db_session.get(Bookmark, user_a_bookmark.id) is not None

    async def test__delete_bookmark__other_user_and_missing_are_indistinguishable(
        self,
        client: AsyncClient,
        user_b_headers: dict[str, str],
        user_a_bookmark: Bookmark,
    ) -> None:
        """The response for someone else's bookmark matches the one for a missing id."""
        foreign = await client.post(
            f"/bookmarks/{user_a_bookmark.id}/delete",
            headers=user_b_headers,
        )
        missing = await client.post(
            "/bookmarks/00000000-0000-0000-0000-000000000000/delete",
            headers=user_b_headers,
        )

        assert foreign.status_code == missing.status_code
        assert foreign.json() == missing.json()

    async def test__list_bookmarks__excludes_other_users_data(
        self,
        client: AsyncClient,
        user_b_headers: dict[str, str],
        user_a_bookmark: Bookmark,
        user_b_bookmark: Bookmark,
    ) -> None:
        """User B's list does not include User A's bookmarks."""
        response = await client.get("/bookmarks", headers=user_b_headers)
        assert response.status_code == 200
        ids = [b["id"] for b in response.json()]

        assert str(user_b_bookmark.id) in ids
        assert str(user_a_bookmark.id) not in ids

    async def test__create_bookmark__owner_comes_from_token(
        self,
        client: AsyncClient,
        user_b_headers: dict[str, str],
        user_a: User,  # noqa: ARG002
        user_b: User,  # noqa: ARG002
    ) -> None:
        """A userId smuggled into the body is ignored; the token decides ownership."""
        response = await client.post(
            "/bookmarks/add",
            json={
                "url": "https://example.com",
                "title": "Example",
                "userId": "user-a-id",
                "user_id": "user-a-id",
            },
            headers=user_b_headers,
        )

        assert response.status_code == 200
        assert response.json()["userId"] == "user-b-id"
