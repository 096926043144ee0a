"""Process-lifetime, single-flight memo for loaded content."""

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContentCache:
    """Memoize one load per key and hand out deep copies of the result.

    Usage::

        cache = ContentCache()
        posts = await cache.get("posts", load_posts)

    The first caller for a key starts ``loader()`` as a task and stores it;
    every later caller, including ones that arrive while the load is still
    running, awaits that same task.  The stored task keeps its terminal
    result, so there is no expiry and no refresh.

    Failed loads stay memoized unless ``retry_failed`` is set, in which case
    the entry is dropped once it fails and the next caller starts over.
    Callers already waiting on the failed task still see its error.

    A caller that is cancelled while waiting does not cancel the load.
    """

    def __init__(self, *, retry_failed: bool = False) -> None:
        self._retry_failed = retry_failed
        self._entries: dict[Hashable, asyncio.Task[Any]] = {}
        self._hits = 0
        self._loads = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: Hashable, loader: Callable[[], Awaitable[T]]) -> T:
        """Return a private copy of the value for *key*, loading it once."""
        task = self._entries.get(key)
        if task is None:
            # Check-and-install has no await in between, so it is atomic on
            # the event loop.
            task = asyncio.ensure_future(loader())
            self._entries[key] = task
            self._loads += 1
            task.add_done_callback(lambda t, k=key: self._on_done(k, t))
            logger.debug("Content cache load started for %r", key)
        else:
            self._hits += 1

        value = await asyncio.shield(task)
        return copy.deepcopy(value)

    def _on_done(self, key: Hashable, task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            if self._entries.get(key) is task:
                del self._entries[key]
            return
        error = task.exception()
        if error is None:
            return
        logger.warning("Content load failed for %r: %s", key, error)
        if self._retry_failed and self._entries.get(key) is task:
            del self._entries[key]

    def clear(self) -> None:
        """Drop every memoized entry. Running loads are left to finish."""
        self._entries.clear()

    def stats(self) -> dict[str, int]:
        """Entry count plus memo hits and loads started since construction."""
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "loads": self._loads,
        }
