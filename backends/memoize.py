"""Single-flight memoization for coroutine functions."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncMemoizer(Generic[T]):
    """Caches the task of a coroutine function per key.

    Calls whose arguments map to the same key share one task, whether it is
    still running or already finished. Successful results stay cached until
    clear() is called. A task that fails is handed to every caller already
    waiting on it and then dropped from the cache, so the next call retries.
    """

    def __init__(
        self,
        fn: Callable[..., Awaitable[T]],
        key_fn: Callable[..., Hashable],
    ) -> None:
        """Initialize the memoizer.

        Args:
            fn: Coroutine function to wrap
            key_fn: Called with the same arguments as fn, returns the cache key
        """
        self._fn = fn
        self._key_fn = key_fn
        self._cache: Dict[Hashable, "asyncio.Task[T]"] = {}

    def __call__(self, *args: Any, **kwargs: Any) -> "asyncio.Task[T]":
        # Lookup and insert must not suspend, so this is a plain method.
        key = self._key_fn(*args, **kwargs)
        task = self._cache.get(key)
        if task is not None:
            return task

        task = asyncio.ensure_future(self._fn(*args, **kwargs))
        self._cache[key] = task
        task.add_done_callback(lambda t: self._evict_failed(key, t))
        return task

    def _evict_failed(self, key: Hashable, task: "asyncio.Task[T]") -> None:
        if task.cancelled():
            failed = True
        else:
            failed = task.exception() is not None
        if failed and self._cache.get(key) is task:
            logger.debug(f"Evicting failed cache entry {key!r}")
            del self._cache[key]

    def clear(self) -> None:
        """Drop every cached entry."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._cache


def memoize_async(
    key_fn: Callable[..., Hashable],
) -> Callable[[Callable[..., Awaitable[T]]], AsyncMemoizer[T]]:
    """Decorator form of AsyncMemoizer."""

    def decorator(fn: Callable[..., Awaitable[T]]) -> AsyncMemoizer[T]:
        return AsyncMemoizer(fn, key_fn)

    return decorator
