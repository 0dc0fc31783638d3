"""
Poll-driven bookmark list cache.

The cache is the single source of truth for the client's view of the list.
It is refreshed ("revalidated") on start, on a fixed interval, when the window
regains focus, when the network reconnects, and after mutations. Local
optimistic changes go through `mutate()` and are overwritten by the next
successful revalidation.
"""
import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

from schemas.bookmark import BookmarkResponse

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[list[BookmarkResponse]]]
Listener = Callable[["BookmarkCache"], None]

DEFAULT_REFRESH_INTERVAL = 2.0


class ViewState(StrEnum):
    """What the list view should currently show."""

    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class BookmarkCache:
    """
    Cached bookmark list with explicit revalidation triggers.

    Concurrent revalidations share a single in-flight fetch. Polling and
    mutations are not synchronized: a poll that resolves after an optimistic
    mutation simply replaces the local list.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        revalidate_on_focus: bool = True,
        revalidate_on_reconnect: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self.refresh_interval = refresh_interval
        self.revalidate_on_focus = revalidate_on_focus
        self.revalidate_on_reconnect = revalidate_on_reconnect

        self.data: list[BookmarkResponse] | None = None
        self.error: Exception | None = None

        self._inflight: asyncio.Task[None] | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ViewState:
        """Current view state; `ready` may hold an empty list."""
        if self.error is not None:
            return ViewState.ERROR
        if self.data is None:
            return ViewState.LOADING
        return ViewState.READY

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # A failing listener must not stop polling or starve other listeners
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Bookmark cache listener %r failed", listener)

    def mutate(self, data: list[BookmarkResponse] | None) -> None:
        """Replace the cached list locally without fetching."""
        self.data = data
        self._notify()

    async def revalidate(self) -> None:
        """Fetch the list from the server and replace the cache with it."""
        task = self._inflight
        if task is None or task.done():
            task = asyncio.create_task(self._fetch())
            self._inflight = task
        try:
            await asyncio.shield(task)
        finally:
            if self._inflight is task and task.done():
                self._inflight = None

    async def _fetch(self) -> None:
        try:
            data = await self._fetcher()
        except Exception as e:
            logger.warning("Failed to fetch bookmarks: %s", e)
            self.error = e
        else:
            self.data = data
            self.error = None
        self._notify()

    async def on_focus(self) -> None:
        """Window regained focus."""
        if self.revalidate_on_focus:
            await self.revalidate()

    async def on_reconnect(self) -> None:
        """Network connection came back."""
        if self.revalidate_on_reconnect:
            await self.revalidate()

    def start(self) -> None:
        """
        Start polling: fetch now, then every `refresh_interval` seconds.

        A non-positive interval fetches once and does not poll.
        Must be called from a running event loop.
        """
        if self.is_polling:
            return
        self._poll_task = asyncio.create_task(self._poll())

    async def _poll(self) -> None:
        await self.revalidate()
        while self.refresh_interval > 0:
            await asyncio.sleep(self.refresh_interval)
            await self.revalidate()

    async def stop(self) -> None:
        """Stop polling and wait for the poll loop to exit."""
        task = self._poll_task
        self._poll_task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
