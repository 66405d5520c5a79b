"""Shared pytest fixtures."""

import pytest

from revalidator import (
    AsyncMemoryAdapter,
    EventBus,
    RevalidationContext,
    RevalidationDocument,
    RevalidationEvent,
    create_service,
)


class RecordingAdapter:
    """Adapter that records every call and fails the first ``fail_times`` calls."""

    def __init__(self, fail_times: int = 0, message: str = "cache unavailable") -> None:
        self.calls: list[tuple[str, str]] = []
        self.immediate_flags: list[bool] = []
        self.fail_times = fail_times
        self.message = message
        self.failures = 0

    def _maybe_fail(self) -> None:
        if self.failures < self.fail_times:
            self.failures += 1
            raise RuntimeError(self.message)

    async def invalidate_path(self, path: str) -> None:
        self.calls.append(("path", path))
        self._maybe_fail()

    async def invalidate_tag(self, tag: str, *, immediate: bool = True) -> None:
        self.calls.append(("tag", tag))
        self.immediate_flags.append(immediate)
        self._maybe_fail()

    async def disconnect(self) -> None:
        pass


@pytest.fixture
def async_adapter() -> AsyncMemoryAdapter:
    """Create a fresh AsyncMemoryAdapter for each test."""
    return AsyncMemoryAdapter()


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def received(events: EventBus) -> list[RevalidationEvent]:
    """Collect every event published on the ``events`` bus."""
    collected: list[RevalidationEvent] = []
    events.subscribe(collected.append)
    return collected


@pytest.fixture
def service(recording_adapter: RecordingAdapter, events: EventBus):
    return create_service(adapter=recording_adapter, events=events, retry_delay="1ms")


@pytest.fixture
def product_context() -> RevalidationContext:
    return RevalidationContext(
        collection="products",
        operation="update",
        doc=RevalidationDocument(id=1, slug="mug", status="active"),
    )


@pytest.fixture
def flaky_adapter() -> type[RecordingAdapter]:
    """The recording adapter class, for tests that need injected failures."""
    return RecordingAdapter
