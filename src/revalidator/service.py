"""Revalidation service - turns a change event into cache invalidations.

This module provides:
- run(): compute the invalidation plan, apply it with one retry, report
- create_service(): factory wiring an adapter, an event bus and a retry delay
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from revalidator.adapters.base import AsyncInvalidationAdapter
from revalidator.duration import parse_duration
from revalidator.events import EventBus
from revalidator.paths import paths_for
from revalidator.tags import tags_for
from revalidator.types import (
    Duration,
    EventDetails,
    RevalidationContext,
    RevalidationEvent,
    RevalidationResult,
)

logger = logging.getLogger(__name__)

# One initial attempt plus exactly one retry
MAX_ATTEMPTS = 2


@dataclass
class RevalidationService:
    """Applies invalidation plans against a cache adapter."""

    _adapter: AsyncInvalidationAdapter
    _retry_delay: int  # Milliseconds
    _events: EventBus = field(default_factory=EventBus)

    @property
    def events(self) -> EventBus:
        """The bus this service publishes to."""
        return self._events

    async def run(self, context: RevalidationContext) -> RevalidationResult:
        """Invalidate every path and tag affected by a change.

        Adapter failures never propagate: the whole batch is retried once
        after the retry delay and the outcome of the last attempt is
        reported in the result and on the event bus.
        """
        paths = paths_for(context)
        tags = tags_for(context)
        errors: list[str] = []

        start = time.monotonic()
        success = await self._attempt(context, paths, tags, 1, errors)
        if not success:
            await asyncio.sleep(self._retry_delay / 1000)
            success = await self._attempt(context, paths, tags, MAX_ATTEMPTS, errors)
        duration = int((time.monotonic() - start) * 1000)

        if success:
            logger.info(
                "Revalidation triggered",
                extra={
                    "collection": context.collection,
                    "operation": context.operation,
                    "slug": context.doc.slug,
                    "paths": paths,
                    "tags": tags,
                    "duration": duration,
                },
            )
            self._events.publish(
                RevalidationEvent(
                    type="success",
                    message="Cache refreshed successfully",
                    details=EventDetails(
                        collection=context.collection,
                        slug=context.doc.slug,
                        paths=paths,
                        tags=tags,
                        duration=duration,
                    ),
                )
            )
        else:
            logger.error(
                "Revalidation failed after retry",
                extra={
                    "collection": context.collection,
                    "operation": context.operation,
                    "slug": context.doc.slug,
                    "errors": errors,
                    "duration": duration,
                },
            )
            self._events.publish(
                RevalidationEvent(
                    type="error",
                    message="Cache refresh failed",
                    details=EventDetails(
                        collection=context.collection,
                        slug=context.doc.slug,
                        errors=list(errors),
                        duration=duration,
                    ),
                )
            )

        return RevalidationResult(
            success=success,
            paths=paths,
            tags=tags,
            errors=errors or None,
            duration=duration,
        )

    async def _attempt(
        self,
        context: RevalidationContext,
        paths: list[str],
        tags: list[str],
        attempt: int,
        errors: list[str],
    ) -> bool:
        """Run one pass over all paths then all tags; stop at the first error."""
        try:
            for path in paths:
                await self._adapter.invalidate_path(path)
            for tag in tags:
                await self._adapter.invalidate_tag(tag, immediate=True)
        except Exception as e:
            errors.append(f"Attempt {attempt}: {e}")
            logger.warning(
                "Revalidation attempt failed",
                extra={
                    "collection": context.collection,
                    "operation": context.operation,
                    "slug": context.doc.slug,
                    "error": str(e),
                    "attempt": attempt,
                },
            )
            return False
        return True


def create_service(
    *,
    adapter: AsyncInvalidationAdapter,
    events: EventBus | None = None,
    retry_delay: Duration = "100ms",
) -> RevalidationService:
    """Create a revalidation service.

    Args:
        adapter: Cache invalidation backend
        events: Bus receiving success/error notifications (new bus if omitted)
        retry_delay: Pause before the single retry

    Returns:
        RevalidationService instance
    """
    return RevalidationService(
        _adapter=adapter,
        _retry_delay=parse_duration(retry_delay),
        _events=events if events is not None else EventBus(),
    )


__all__ = ["MAX_ATTEMPTS", "RevalidationService", "create_service"]
