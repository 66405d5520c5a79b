"""Fire-and-forget revalidation for write hooks."""

import asyncio
import logging
import threading

from revalidator.events import EventBus
from revalidator.service import RevalidationService
from revalidator.types import RevalidationContext

logger = logging.getLogger(__name__)


class Dispatcher:
    """Schedules revalidation runs without making the caller wait.

    ``dispatch`` returns immediately and never raises. Results and failures
    are only visible through logs and the service's event bus.
    """

    def __init__(self, service: RevalidationService) -> None:
        self._service = service
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._background_threads: set[threading.Thread] = set()
        self._threads_lock = threading.Lock()

    @property
    def events(self) -> EventBus:
        return self._service.events

    def dispatch(self, context: RevalidationContext) -> None:
        """Start revalidating in the background and return at once."""
        try:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                # Called from sync code: give the run its own loop
                thread = threading.Thread(
                    target=self._run_in_thread,
                    args=(context,),
                    daemon=True,
                )
                with self._threads_lock:
                    self._background_threads.add(thread)
                try:
                    thread.start()
                except Exception:
                    with self._threads_lock:
                        self._background_threads.discard(thread)
                    raise
                return

            task = asyncio.create_task(self._run(context))
            self._background_tasks.add(task)
            task.add_done_callback(self._background_tasks.discard)
        except Exception as e:
            logger.error(
                "Revalidation dispatch failed",
                extra={
                    "collection": context.collection,
                    "operation": context.operation,
                    "slug": context.doc.slug,
                    "error": str(e),
                },
            )

    async def drain(self) -> None:
        """Wait for every in-flight background run to finish."""
        while self._background_tasks:
            await asyncio.gather(*list(self._background_tasks))
        with self._threads_lock:
            threads = list(self._background_threads)
        for thread in threads:
            await asyncio.to_thread(thread.join)

    def _run_in_thread(self, context: RevalidationContext) -> None:
        try:
            asyncio.run(self._run(context))
        finally:
            with self._threads_lock:
                self._background_threads.discard(threading.current_thread())

    async def _run(self, context: RevalidationContext) -> None:
        try:
            result = await self._service.run(context)
        except Exception as e:
            logger.error(
                "Async revalidation failed unexpectedly",
                extra={
                    "collection": context.collection,
                    "operation": context.operation,
                    "slug": context.doc.slug,
                    "error": str(e),
                },
            )
            return

        logger.debug(
            "Async revalidation finished",
            extra={
                "collection": context.collection,
                "slug": context.doc.slug,
                "success": result.success,
                "duration": result.duration,
            },
        )
