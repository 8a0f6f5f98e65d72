"""Item streams flattened out of paged results.

An ``ItemStream`` republishes the items of a page iterator one at a time,
in order, while the pages are still being fetched. At most one page is in
flight and at most one page of items is held in memory.

Consumption Patterns:
    1. ``await stream.collect()``: eager, all items as a list
    2. ``async for item in stream``: lazy; breaking out stops fetching
    3. ``stream.subscribe(on_next, on_error, on_completed)``: callbacks,
       cancellable through the returned Subscription

A stream is single-pass. Consuming it a second time raises RuntimeError;
call the API method again for a fresh stream.

"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Callable, Generator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from octostream.utils.pagination import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _invoke(callback: Callable[..., Any], *args: Any) -> None:
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


async def _close(pages: AsyncIterator[Any]) -> None:
    aclose = getattr(pages, "aclose", None)
    if aclose is not None:
        await aclose()


class Subscription:
    """Handle for a running ``ItemStream.subscribe`` call.

    Awaiting the subscription waits until the stream terminates. If the
    stream failed and no ``on_error`` callback was given, the error is
    raised from the await.
    """

    __slots__ = ("_cancelled", "_task")

    def __init__(self) -> None:
        self._cancelled = False
        self._task: asyncio.Task[None] | None = None

    def cancel(self) -> None:
        """Stop delivering items and stop fetching pages.

        A page request already in flight is allowed to finish; its items
        are dropped. No terminal callback runs after cancellation.
        """
        if not self._cancelled:
            logger.debug("Subscription cancelled")
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    def __await__(self) -> Generator[Any, None, None]:
        return self.wait().__await__()


class ItemStream(Generic[T]):
    """Ordered, single-pass stream of items from a page iterator.

    Args:
        pages: Async iterator of pages, typically ``PagedFetcher.pages()``.

    Example:
        >>> stream = connection.get_and_flatten_all_pages("/repos/o/n/pulls", PullRequest)
        >>> async for pull in stream:
        ...     if pull.number < 100:
        ...         break  # No further pages are requested

    """

    __slots__ = ("_consumed", "_pages")

    def __init__(self, pages: AsyncIterator[Page[T]]) -> None:
        self._pages = pages
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def _claim(self) -> AsyncIterator[Page[T]]:
        if self._consumed:
            raise RuntimeError("ItemStream has already been consumed")
        self._consumed = True
        return self._pages

    def __aiter__(self) -> AsyncIterator[T]:
        return self._items(self._claim())

    @staticmethod
    async def _items(pages: AsyncIterator[Page[T]]) -> AsyncIterator[T]:
        try:
            async for page in pages:
                for item in page.items:
                    yield item
        finally:
            await _close(pages)

    async def collect(self) -> list[T]:
        """Drain the stream into a list.

        Loads every page into memory; prefer ``async for`` for large
        result sets.
        """
        return [item async for item in self]

    def subscribe(
        self,
        on_next: Callable[[T], Any],
        on_error: Callable[[Exception], Any] | None = None,
        on_completed: Callable[[], Any] | None = None,
    ) -> Subscription:
        """Deliver items to callbacks from a background task.

        Callbacks may be plain functions or coroutine functions. Must be
        called with an event loop running.

        Args:
            on_next: Called with each item, in order.
            on_error: Called once with the error that ended the stream.
            on_completed: Called once after the last item of the last page.

        Returns:
            Subscription to cancel or await.

        """
        pages = self._claim()
        subscription = Subscription()
        subscription._task = asyncio.get_running_loop().create_task(
            self._deliver(pages, subscription, on_next, on_error, on_completed)
        )
        return subscription

    @staticmethod
    async def _deliver(
        pages: AsyncIterator[Page[T]],
        subscription: Subscription,
        on_next: Callable[[T], Any],
        on_error: Callable[[Exception], Any] | None,
        on_completed: Callable[[], Any] | None,
    ) -> None:
        try:
            async for page in pages:
                for item in page.items:
                    if subscription.cancelled:
                        return
                    await _invoke(on_next, item)
                if subscription.cancelled:
                    return
        except Exception as e:
            if subscription.cancelled:
                return
            if on_error is None:
                raise
            await _invoke(on_error, e)
            return
        finally:
            await _close(pages)

        if on_completed is not None and not subscription.cancelled:
            await _invoke(on_completed)


def flatten(pages: AsyncIterator[Page[T]]) -> ItemStream[T]:
    """Wrap a page iterator in an ItemStream."""
    return ItemStream(pages)
