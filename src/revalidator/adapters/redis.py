"""Redis invalidation adapter."""

from __future__ import annotations

import time
from typing import Any


class AsyncRedisAdapter:
    """Async Redis adapter storing invalidation timestamps.

    Keys are ``<prefix>:path:<path>`` and ``<prefix>:tag:<tag>``; values are
    Unix timestamps in milliseconds. Cache readers sharing the Redis instance
    treat any entry created before the timestamp as stale.
    """

    def __init__(
        self,
        client: Any,  # redis.asyncio.Redis
        *,
        prefix: str = "revalidator",
    ) -> None:
        self._client = client
        self._prefix = prefix

    def _path_key(self, path: str) -> str:
        """Generate full Redis key for path invalidation times."""
        return f"{self._prefix}:path:{path}"

    def _tag_key(self, tag: str) -> str:
        """Generate full Redis key for tag invalidation times."""
        return f"{self._prefix}:tag:{tag}"

    async def invalidate_path(self, path: str) -> None:
        """Record a path invalidation."""
        # Invalidation times don't expire - they're used for comparison
        await self._client.set(self._path_key(path), str(int(time.time() * 1000)))

    async def invalidate_tag(self, tag: str, *, immediate: bool = True) -> None:
        """Record a tag invalidation."""
        _ = immediate  # Timestamps always take effect at once
        await self._client.set(self._tag_key(tag), str(int(time.time() * 1000)))

    async def get_path_invalidation_time(self, path: str) -> int | None:
        """Get the invalidation timestamp for a path."""
        data = await self._client.get(self._path_key(path))
        if data is None:
            return None
        return int(data)

    async def get_tag_invalidation_time(self, tag: str) -> int | None:
        """Get the invalidation timestamp for a tag."""
        data = await self._client.get(self._tag_key(tag))
        if data is None:
            return None
        return int(data)

    async def clear(self) -> None:
        """Delete every invalidation timestamp under the prefix."""
        # Use SCAN to find and delete all keys
        cursor: int = 0
        pattern = f"{self._prefix}:*"
        while True:
            result = await self._client.scan(cursor, match=pattern, count=100)
            cursor = result[0]
            keys = result[1]
            if keys:
                await self._client.delete(*keys)
            if cursor == 0:
                break

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
