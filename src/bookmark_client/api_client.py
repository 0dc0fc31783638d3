"""HTTP client for the Bookmarks API."""
import os
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

import httpx

from schemas.bookmark import BookmarkResponse

from .api_errors import NotSignedInError, parse_http_error

# Returns the current session's access token, or None when signed out
TokenProvider = Callable[[], Awaitable[str | None]]


def get_api_base_url() -> str:
    """Get the API base URL from environment."""
    return os.getenv("BOOKMARKS_API_URL", "http://localhost:8000")


def get_default_timeout() -> float:
    """Get the default request timeout."""
    return float(os.getenv("BOOKMARKS_API_TIMEOUT", "30.0"))


def create_http_client() -> httpx.AsyncClient:
    """Create an HTTP client pointed at the configured API."""
    return httpx.AsyncClient(base_url=get_api_base_url(), timeout=get_default_timeout())


class BookmarkApiClient:
    """
    Authenticated wrapper around the three bookmark endpoints.

    Every call reads a fresh token from the token provider; if there is none,
    NotSignedInError is raised and no request is sent. Error responses raise
    ApiError.
    """

    def __init__(self, http_client: httpx.AsyncClient, token_provider: TokenProvider) -> None:
        self._http = http_client
        self._token_provider = token_provider

    async def is_signed_in(self) -> bool:
        """True if the token provider currently has a session."""
        return bool(await self._token_provider())

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        token = await self._token_provider()
        if not token:
            raise NotSignedInError()

        response = await self._http.request(
            method,
            path,
            json=json,
            headers={"Authorization": f"Bearer {token}"},
        )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise parse_http_error(e) from e
        return response.json()

    async def list_bookmarks(self) -> list[BookmarkResponse]:
        """Fetch the signed-in user's bookmarks, newest first."""
        data = await self._request("GET", "/bookmarks")
        return [BookmarkResponse.model_validate(item) for item in data]

    async def create_bookmark(self, url: str, title: str) -> BookmarkResponse:
        """Create a bookmark and return it."""
        data = await self._request("POST", "/bookmarks/add", json={"url": url, "title": title})
        return BookmarkResponse.model_validate(data)

    async def delete_bookmark(self, bookmark_id: UUID | str) -> None:
        """Delete a bookmark by id."""
        await self._request("POST", f"/bookmarks/{bookmark_id}/delete")
