"""Invalidation adapters for revalidator (async only)."""

from contextlib import suppress

from revalidator.adapters.base import AsyncInvalidationAdapter
from revalidator.adapters.memory import AsyncMemoryAdapter

# Optional adapters - only available when dependencies are installed
with suppress(ImportError):
    from revalidator.adapters.redis import AsyncRedisAdapter

with suppress(ImportError):
    from revalidator.adapters.http import AsyncHttpAdapter

__all__ = [
    "AsyncHttpAdapter",
    "AsyncInvalidationAdapter",
    "AsyncMemoryAdapter",
    "AsyncRedisAdapter",
]
