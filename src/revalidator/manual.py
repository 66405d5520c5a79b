"""Manual cache refresh requests.

Backs "refresh now" actions (an admin button, an external webhook, an
emergency purge). Unlike the CMS hooks these wait for the outcome.
"""

import hmac
import logging
from collections.abc import Mapping
from typing import Any

from revalidator.hooks import extract_document
from revalidator.service import RevalidationService
from revalidator.types import COLLECTIONS, OPERATIONS, RevalidationContext

logger = logging.getLogger(__name__)


def parse_manual_request(
    payload: Mapping[str, Any],
    *,
    authorization: str | None = None,
    secret: str | None = None,
) -> RevalidationContext:
    """Validate a manual refresh payload and build its context.

    Args:
        payload: ``{"collection", "operation"?, "doc": {"slug", ...}}``
        authorization: The request's ``Authorization`` header
        secret: Shared secret; when set the header must be ``Bearer <secret>``

    Raises:
        PermissionError: The secret is configured and does not match
        ValueError: The payload is missing or has invalid fields
    """
    if secret:
        provided = (authorization or "").removeprefix("Bearer ")
        if not hmac.compare_digest(provided.encode(), secret.encode()):
            raise PermissionError("Unauthorized")

    if not isinstance(payload, Mapping):
        raise ValueError("Invalid payload: expected an object")

    collection = payload.get("collection")
    doc = payload.get("doc")
    if not collection or not isinstance(doc, Mapping) or not doc.get("slug"):
        raise ValueError("Invalid payload: missing collection or doc.slug")
    if collection not in COLLECTIONS:
        raise ValueError(f"Invalid collection type: {collection!r}")

    operation = payload.get("operation") or "update"
    if operation not in OPERATIONS:
        raise ValueError(f"Invalid operation: {operation!r}")

    # A manual refresh carries the previous status inline, not a previous doc
    previous = {"status": doc.get("previousStatus")}
    return RevalidationContext(
        collection=collection,
        operation=operation,
        doc=extract_document(doc, previous),
    )


async def handle_manual_request(
    service: RevalidationService,
    payload: Mapping[str, Any],
    *,
    authorization: str | None = None,
    secret: str | None = None,
) -> dict[str, Any]:
    """Run a manual refresh to completion and describe the outcome."""
    context = parse_manual_request(payload, authorization=authorization, secret=secret)
    logger.info(
        "Manual revalidation triggered",
        extra={
            "collection": context.collection,
            "operation": context.operation,
            "slug": context.doc.slug,
        },
    )
    result = await service.run(context)
    return {
        "success": result.success,
        "collection": context.collection,
        "operation": context.operation,
        "slug": context.doc.slug,
        "revalidatedPaths": result.paths,
        "invalidatedTags": result.tags,
        "duration": result.duration,
        "errors": result.errors,
    }
