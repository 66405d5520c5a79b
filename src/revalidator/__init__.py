"""revalidator - On-demand cache invalidation for catalog storefronts."""

from contextlib import suppress

# Adapters (async only)
from revalidator.adapters import (
    AsyncInvalidationAdapter,
    AsyncMemoryAdapter,
)

# Background dispatch
from revalidator.dispatch import Dispatcher

# Duration parsing
from revalidator.duration import parse_duration

# Notifications
from revalidator.events import EventBus

# CMS hooks and manual refresh
from revalidator.hooks import (
    create_after_change_hook,
    create_after_delete_hook,
    extract_document,
)
from revalidator.manual import handle_manual_request, parse_manual_request

# Invalidation plans
from revalidator.paths import collection_listing_paths, paths_for

# Service API
from revalidator.service import RevalidationService, create_service
from revalidator.status import has_visibility_change, promote_operation
from revalidator.tags import COLLECTION_TAGS, TAG_PREFIXES, tags_for

# Core types
from revalidator.types import (
    CategoryRef,
    Collection,
    Duration,
    EventDetails,
    Operation,
    RevalidationContext,
    RevalidationDocument,
    RevalidationEvent,
    RevalidationResult,
    SubcategoryRef,
)

# Optional adapter imports - only available when dependencies are installed
with suppress(ImportError):
    from revalidator.adapters import AsyncRedisAdapter

with suppress(ImportError):
    from revalidator.adapters import AsyncHttpAdapter

__version__ = "0.1.0"

__all__ = [
    "COLLECTION_TAGS",
    "TAG_PREFIXES",
    "AsyncHttpAdapter",
    "AsyncInvalidationAdapter",
    "AsyncMemoryAdapter",
    "AsyncRedisAdapter",
    "CategoryRef",
    "Collection",
    "Dispatcher",
    "Duration",
    "EventBus",
    "EventDetails",
    "Operation",
    "RevalidationContext",
    "RevalidationDocument",
    "RevalidationEvent",
    "RevalidationResult",
    "RevalidationService",
    "SubcategoryRef",
    "collection_listing_paths",
    "create_after_change_hook",
    "create_after_delete_hook",
    "create_service",
    "extract_document",
    "handle_manual_request",
    "has_visibility_change",
    "parse_duration",
    "parse_manual_request",
    "paths_for",
    "promote_operation",
    "tags_for",
]
