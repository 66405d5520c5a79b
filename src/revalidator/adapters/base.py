"""Base adapter protocol for cache invalidation backends."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AsyncInvalidationAdapter(Protocol):
    """Async invalidation primitives.

    Both invalidations must be idempotent: purging the same path or tag twice
    has the same effect as purging it once. Failures are signalled by raising.
    """

    async def invalidate_path(self, path: str) -> None:
        """Purge the cached render of a site-relative path."""
        ...

    async def invalidate_tag(self, tag: str, *, immediate: bool = True) -> None:
        """Purge every cached artifact carrying a tag."""
        ...

    async def disconnect(self) -> None:
        """Release any connection held by the backend."""
        ...
