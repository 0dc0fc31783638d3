"""Shared builders for client tests."""
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from schemas.bookmark import BookmarkResponse

BASE_URL = "http://bookmarks.test"


def bookmark_json(
    title: str = "Example",
    url: str = "https://example.com",
    user_id: str = "user-1",
    age_seconds: int = 0,
) -> dict[str, Any]:
    """Build a bookmark the way the API serializes it."""
    created = datetime(2024, 5, 1, tzinfo=UTC) - timedelta(seconds=age_seconds)
    return {
        "id": str(uuid4()),
        "url": url,
        "title": title,
        "userId": user_id,
        "createdAt": created.isoformat(),
    }


def make_bookmark(title: str = "Example", **kwargs: Any) -> BookmarkResponse:
    return BookmarkResponse.model_validate(bookmark_json(title, **kwargs))
