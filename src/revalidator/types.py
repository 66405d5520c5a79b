"""Core types for revalidator."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

Collection = Literal["products", "categories", "subcategories", "bundles", "posts"]
Operation = Literal["create", "update", "delete"]
EventType = Literal["success", "warning", "error"]

COLLECTIONS: tuple[Collection, ...] = (
    "products",
    "categories",
    "subcategories",
    "bundles",
    "posts",
)
OPERATIONS: tuple[Operation, ...] = ("create", "update", "delete")

# Duration type alias
Duration = str | int  # "100ms", "1s" or milliseconds


@dataclass(frozen=True, slots=True)
class CategoryRef:
    """A category an entity belongs to."""

    slug: str
    id: Any = None


@dataclass(frozen=True, slots=True)
class SubcategoryRef:
    """A product's subcategory and, optionally, its parent category."""

    slug: str
    category: CategoryRef | None = None
    id: Any = None


@dataclass(frozen=True, slots=True)
class RevalidationDocument:
    """The projection of a changed entity needed to invalidate its caches."""

    slug: str
    id: Any = None
    status: str | None = None
    previous_status: str | None = None  # Only set on updates
    tags: tuple[str, ...] = ()
    subcategory: SubcategoryRef | None = None  # Products only
    category: CategoryRef | None = None  # Posts, and subcategory parents


@dataclass(frozen=True, slots=True)
class RevalidationContext:
    """One change event: what changed, how, and the changed document."""

    collection: Collection
    operation: Operation
    doc: RevalidationDocument


@dataclass(frozen=True, slots=True)
class RevalidationResult:
    """Outcome of a single revalidation run."""

    success: bool
    paths: list[str]
    tags: list[str]
    errors: list[str] | None  # One message per failed attempt
    duration: int  # Milliseconds


@dataclass(frozen=True, slots=True)
class EventDetails:
    """Payload attached to a revalidation event."""

    collection: str | None = None
    slug: str | None = None
    paths: list[str] | None = None
    tags: list[str] | None = None
    errors: list[str] | None = None
    duration: int | None = None


@dataclass(frozen=True, slots=True)
class RevalidationEvent:
    """Notification broadcast to operator-facing listeners."""

    type: EventType
    message: str
    details: EventDetails | None = None


EventListener = Callable[[RevalidationEvent], None]
