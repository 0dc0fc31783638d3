"""Polling client for the Bookmarks API."""

from .actions import AddBookmarkForm, delete_bookmark
from .api_client import BookmarkApiClient, TokenProvider, create_http_client
from .api_errors import ApiError, NotSignedInError
from .cache import BookmarkCache, ViewState

__all__ = [
    "AddBookmarkForm",
    "ApiError",
    "BookmarkApiClient",
    "BookmarkCache",
    "NotSignedInError",
    "TokenProvider",
    "ViewState",
    "create_http_client",
    "delete_bookmark",
]
