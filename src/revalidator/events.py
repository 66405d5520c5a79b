"""In-process publish/subscribe channel for revalidation notifications."""

import itertools
import logging
from collections.abc import Callable

from revalidator.types import EventListener, RevalidationEvent

logger = logging.getLogger(__name__)


class EventBus:
    """Broadcasts revalidation events to subscribed listeners.

    Listeners are called synchronously, in no particular order. A listener
    that raises is logged and skipped; it never affects the other listeners
    or the publisher.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, EventListener] = {}
        self._tokens = itertools.count()

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unregisters it."""
        token = next(self._tokens)
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    def publish(self, event: RevalidationEvent) -> None:
        """Deliver an event to every listener registered right now."""
        for listener in list(self._listeners.values()):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Revalidation event listener error",
                    extra={"event_type": event.type},
                )

    def __len__(self) -> int:
        return len(self._listeners)
