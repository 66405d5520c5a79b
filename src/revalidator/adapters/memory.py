"""In-memory invalidation adapter (async only)."""

import asyncio
import time


class AsyncMemoryAdapter:
    """Async in-memory adapter that records when paths and tags were purged.

    Readers compare an entry's creation time against these timestamps to
    decide whether it is stale.
    """

    def __init__(self) -> None:
        self._paths: dict[str, int] = {}
        self._tags: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def invalidate_path(self, path: str) -> None:
        """Record a path invalidation."""
        now = int(time.time() * 1000)
        async with self._lock:
            self._paths[path] = now

    async def invalidate_tag(self, tag: str, *, immediate: bool = True) -> None:
        """Record a tag invalidation."""
        _ = immediate  # Timestamps always take effect at once
        now = int(time.time() * 1000)
        async with self._lock:
            self._tags[tag] = now

    async def get_path_invalidation_time(self, path: str) -> int | None:
        """Get the invalidation timestamp for a path."""
        async with self._lock:
            return self._paths.get(path)

    async def get_tag_invalidation_time(self, tag: str) -> int | None:
        """Get the invalidation timestamp for a tag."""
        async with self._lock:
            return self._tags.get(tag)

    async def clear(self) -> None:
        """Forget every recorded invalidation."""
        async with self._lock:
            self._paths.clear()
            self._tags.clear()

    async def disconnect(self) -> None:
        """Disconnect from the backend (no-op for memory)."""
        pass
