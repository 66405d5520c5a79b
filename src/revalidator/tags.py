"""Cache tag definitions and the tag side of an invalidation plan.

Tags are ``<prefix>:<slug>`` for a single entity, or one of the fixed
``collection:*`` tags for listing pages. Invalidating a tag purges every
cached artifact carrying it.
"""

from collections.abc import Iterable

from revalidator.status import has_visibility_change
from revalidator.types import RevalidationContext

TAG_PREFIXES: dict[str, str] = {
    "products": "product",
    "categories": "category",
    "subcategories": "subcategory",
    "bundles": "bundle",
    "posts": "post",
}

COLLECTION_TAGS: dict[str, str] = {
    "homepage": "collection:homepage",
    "best_sellers": "collection:best-sellers",
    "new_arrivals": "collection:new-arrivals",
    "editors_picks": "collection:editors-picks",
    "all_products": "collection:all-products",
    "all_categories": "collection:all-categories",
    "all_bundles": "collection:all-bundles",
    "all_posts": "collection:all-posts",
}

# Author-supplied product labels (lowercased) that feed a listing page
_SPECIAL_TAGS: dict[str, str] = {
    "best-seller": COLLECTION_TAGS["best_sellers"],
    "bestseller": COLLECTION_TAGS["best_sellers"],
    "new-arrival": COLLECTION_TAGS["new_arrivals"],
    "new arrival": COLLECTION_TAGS["new_arrivals"],
    "featured": COLLECTION_TAGS["editors_picks"],
    "editors-pick": COLLECTION_TAGS["editors_picks"],
    "editor's pick": COLLECTION_TAGS["editors_picks"],
}


def entity_tag(collection: str, slug: str) -> str:
    """Build the identity tag of an entity."""
    return f"{TAG_PREFIXES[collection]}:{slug}"


def product_tags(
    slug: str,
    subcategory_slug: str | None = None,
    category_slug: str | None = None,
) -> list[str]:
    """Tags for a product and its ancestor chain."""
    tags = [entity_tag("products", slug)]
    if subcategory_slug:
        tags.append(entity_tag("subcategories", subcategory_slug))
    if category_slug:
        tags.append(entity_tag("categories", category_slug))
    tags.append(COLLECTION_TAGS["all_products"])
    return tags


def category_tags(slug: str) -> list[str]:
    return [entity_tag("categories", slug), COLLECTION_TAGS["all_categories"]]


def subcategory_tags(slug: str, category_slug: str | None = None) -> list[str]:
    tags = [entity_tag("subcategories", slug)]
    if category_slug:
        tags.append(entity_tag("categories", category_slug))
    return tags


def bundle_tags(slug: str) -> list[str]:
    return [entity_tag("bundles", slug), COLLECTION_TAGS["all_bundles"]]


def post_tags(slug: str, category_slug: str | None = None) -> list[str]:
    tags = [entity_tag("posts", slug), COLLECTION_TAGS["all_posts"]]
    if category_slug:
        tags.append(entity_tag("categories", category_slug))
    return tags


def collection_tags_for_product(labels: Iterable[str | None] | None) -> list[str]:
    """Map author labels to the listing tags they feed.

    Matching ignores case and surrounding whitespace. Each collection tag
    appears at most once no matter how many labels map to it.
    """
    if not labels:
        return []

    found: dict[str, None] = {}
    for label in labels:
        if not label:
            continue
        collection_tag = _SPECIAL_TAGS.get(label.strip().lower())
        if collection_tag:
            found[collection_tag] = None
    return list(found)


def tags_for(context: RevalidationContext) -> list[str]:
    """Compute every tag a change invalidates.

    The result holds no duplicates and keeps first-seen order.
    """
    collection, operation, doc = context.collection, context.operation, context.doc
    tags: list[str] = []

    if collection == "products":
        subcategory = doc.subcategory
        category = subcategory.category if subcategory else None
        tags.extend(
            product_tags(
                doc.slug,
                subcategory.slug if subcategory else None,
                category.slug if category else None,
            )
        )
        special = collection_tags_for_product(doc.tags)
        tags.extend(special)

        if operation == "create":
            tags.append(COLLECTION_TAGS["new_arrivals"])

        if has_visibility_change(doc):
            tags.append(COLLECTION_TAGS["all_products"])
            tags.append(COLLECTION_TAGS["homepage"])
            tags.extend(special)

        tags.append(COLLECTION_TAGS["homepage"])

    elif collection == "categories":
        tags.extend(category_tags(doc.slug))
        tags.append(COLLECTION_TAGS["homepage"])

    elif collection == "subcategories":
        tags.extend(
            subcategory_tags(doc.slug, doc.category.slug if doc.category else None)
        )

    elif collection == "bundles":
        tags.extend(bundle_tags(doc.slug))
        tags.append(COLLECTION_TAGS["homepage"])

    elif collection == "posts":
        tags.extend(post_tags(doc.slug, doc.category.slug if doc.category else None))
        tags.append(COLLECTION_TAGS["homepage"])

    else:
        raise ValueError(f"Unknown collection: {collection!r}")

    return list(dict.fromkeys(tags))
