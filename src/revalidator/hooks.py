"""CMS write-hook adapters.

The hooks project the raw document a CMS hands over into a
``RevalidationDocument``, decide the effective operation, and dispatch a
revalidation in the background. A hook never raises and always returns the
document so the CMS pipeline carries on.

Example:
    dispatcher = Dispatcher(create_service(adapter=AsyncMemoryAdapter()))
    after_change = create_after_change_hook("products", dispatcher)

    after_change(doc=saved, previous_doc=before, operation="update")
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from revalidator.dispatch import Dispatcher
from revalidator.status import promote_operation
from revalidator.types import (
    CategoryRef,
    Collection,
    EventDetails,
    Operation,
    RevalidationContext,
    RevalidationDocument,
    RevalidationEvent,
    SubcategoryRef,
)

logger = logging.getLogger(__name__)

AfterChangeHook = Callable[..., Mapping[str, Any]]
AfterDeleteHook = Callable[..., Mapping[str, Any]]


def _category_ref(value: Any) -> CategoryRef | None:
    # Relationships arrive either populated or as a bare id
    if isinstance(value, Mapping) and value.get("slug"):
        return CategoryRef(slug=value["slug"], id=value.get("id"))
    return None


def _subcategory_ref(value: Any) -> SubcategoryRef | None:
    if isinstance(value, Mapping) and value.get("slug"):
        return SubcategoryRef(
            slug=value["slug"],
            category=_category_ref(value.get("category")),
            id=value.get("id"),
        )
    return None


def _labels(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    labels: list[str] = []
    for item in value:
        label = item.get("tag") if isinstance(item, Mapping) else item
        if isinstance(label, str) and label.strip():
            labels.append(label)
    return tuple(labels)


def extract_document(
    doc: Mapping[str, Any],
    previous_doc: Mapping[str, Any] | None = None,
) -> RevalidationDocument:
    """Project a raw CMS document onto the fields revalidation needs."""
    previous_status = previous_doc.get("status") if previous_doc else None
    return RevalidationDocument(
        id=doc.get("id"),
        slug=doc.get("slug") or "",
        status=doc.get("status") or None,
        previous_status=previous_status or None,
        tags=_labels(doc.get("tags")),
        subcategory=_subcategory_ref(doc.get("subcategory")),
        category=_category_ref(doc.get("category")),
    )


def _dispatch(
    dispatcher: Dispatcher,
    collection: Collection,
    operation: Operation,
    document: RevalidationDocument,
) -> None:
    if not document.slug:
        logger.warning(
            "Document has no slug, skipping revalidation",
            extra={"collection": collection, "operation": operation},
        )
        dispatcher.events.publish(
            RevalidationEvent(
                type="warning",
                message="Cache refresh skipped: document has no slug",
                details=EventDetails(collection=collection),
            )
        )
        return

    dispatcher.dispatch(
        RevalidationContext(collection=collection, operation=operation, doc=document)
    )


def create_after_change_hook(
    collection: Collection,
    dispatcher: Dispatcher,
) -> AfterChangeHook:
    """Create a hook to run after a document is created or updated."""

    def hook(
        *,
        doc: Mapping[str, Any],
        operation: Operation,
        previous_doc: Mapping[str, Any] | None = None,
        **_: Any,
    ) -> Mapping[str, Any]:
        try:
            # Only updates have a meaningful previous status
            document = extract_document(
                doc, previous_doc if operation == "update" else None
            )
            effective = promote_operation(operation, document)
            status_change = (
                f"{document.previous_status} -> {document.status}"
                if document.previous_status != document.status
                else None
            )
            logger.info(
                "Revalidation hook triggered",
                extra={
                    "collection": collection,
                    "operation": effective,
                    "slug": document.slug,
                    "status_change": status_change,
                },
            )
            _dispatch(dispatcher, collection, effective, document)
        except Exception as e:
            logger.error(
                "Revalidation hook error (non-blocking)",
                extra={
                    "collection": collection,
                    "operation": operation,
                    "slug": doc.get("slug") if isinstance(doc, Mapping) else None,
                    "error": str(e),
                },
            )
        return doc

    return hook


def create_after_delete_hook(
    collection: Collection,
    dispatcher: Dispatcher,
) -> AfterDeleteHook:
    """Create a hook to run after a document is deleted."""

    def hook(*, doc: Mapping[str, Any], **_: Any) -> Mapping[str, Any]:
        try:
            document = extract_document(doc)
            logger.info(
                "Revalidation delete hook triggered",
                extra={
                    "collection": collection,
                    "operation": "delete",
                    "slug": document.slug,
                },
            )
            _dispatch(dispatcher, collection, "delete", document)
        except Exception as e:
            logger.error(
                "Revalidation delete hook error (non-blocking)",
                extra={
                    "collection": collection,
                    "operation": "delete",
                    "slug": doc.get("slug") if isinstance(doc, Mapping) else None,
                    "error": str(e),
                },
            )
        return doc

    return hook
