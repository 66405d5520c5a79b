"""Status transition rules.

A product moving between ``active``, ``draft`` and ``archived`` appears in or
disappears from public listings, so those listings must be refreshed even
when nothing else about the product changed.
"""

from revalidator.types import Operation, RevalidationDocument

VISIBILITY_STATUSES = frozenset({"active", "archived", "draft"})


def has_visibility_change(doc: RevalidationDocument) -> bool:
    """Check whether the status moved between listing-relevant values.

    False when either status is missing or the two are equal.
    """
    if not doc.previous_status or not doc.status:
        return False
    if doc.previous_status == doc.status:
        return False
    return (
        doc.previous_status in VISIBILITY_STATUSES
        and doc.status in VISIBILITY_STATUSES
    )


def promote_operation(operation: Operation, doc: RevalidationDocument) -> Operation:
    """Treat a draft -> active update as a creation.

    Content that just became visible is a fresh arrival for listing purposes.
    """
    if (
        operation == "update"
        and doc.previous_status == "draft"
        and doc.status == "active"
    ):
        return "create"
    return operation
