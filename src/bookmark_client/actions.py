"""User actions on the bookmark list: optimistic delete and the add form."""
import logging
from collections.abc import Callable
from uuid import UUID

import httpx

from schemas.bookmark import BookmarkResponse

from .api_client import BookmarkApiClient
from .api_errors import ApiError, NotSignedInError
from .cache import BookmarkCache

logger = logging.getLogger(__name__)

# Asks the user a yes/no question
Confirm = Callable[[str], bool]
# Shows the user a blocking message
Notify = Callable[[str], None]


async def delete_bookmark(
    cache: BookmarkCache,
    api: BookmarkApiClient,
    bookmark_id: UUID | str,
    confirm: Confirm,
    notify: Notify,
) -> bool:
    """
    Delete a bookmark optimistically.

    The item is removed from the cache before the request is sent. On success
    the cache is revalidated; on failure the user is notified and the cache is
    revalidated from the server rather than re-inserting the removed item.

    Returns:
        True if the server confirmed the delete.
    """
    if not confirm("Delete this bookmark?"):
        return False
    if not await api.is_signed_in():
        return False

    target = str(bookmark_id)
    if cache.data is not None:
        cache.mutate([b for b in cache.data if str(b.id) != target])

    try:
        await api.delete_bookmark(target)
    except (ApiError, NotSignedInError, httpx.HTTPError):
        logger.exception("Error deleting bookmark %s", target)
        notify("Failed to delete bookmark")
        await cache.revalidate()
        return False

    await cache.revalidate()
    return True


class AddBookmarkForm:
    """
    Submit-then-clear form for new bookmarks.

    The created bookmark is not added to any cache; the next poll or
    focus/reconnect revalidation picks it up.
    """

    def __init__(self, api: BookmarkApiClient, notify: Notify) -> None:
        self._api = api
        self._notify = notify
        self.url = ""
        self.title = ""
        self.loading = False

    async def submit(self) -> BookmarkResponse | None:
        """
        Create a bookmark from the current field values.

        Does nothing if either field is empty. Clears the fields on success;
        keeps them on failure so the user can resubmit.
        """
        if not self.url or not self.title:
            return None

        self.loading = True
        try:
            bookmark = await self._api.create_bookmark(self.url, self.title)
        except NotSignedInError:
            self._notify("Please sign in")
            return None
        except (ApiError, httpx.HTTPError):
            logger.exception("Error creating bookmark")
            self._notify("Failed to create bookmark")
            return None
        finally:
            self.loading = False

        self.url = ""
        self.title = ""
        return bookmark
