"""Path side of an invalidation plan.

Covers the entity's own page plus every listing page that may render it.
"""

from revalidator.status import has_visibility_change
from revalidator.types import RevalidationContext, SubcategoryRef

_LISTING_PATHS = ("/", "/best-sellers", "/new-arrivals", "/products")


def product_paths(slug: str, subcategory: SubcategoryRef | None = None) -> list[str]:
    paths = [f"/products/{slug}", "/products"]
    if subcategory and subcategory.slug:
        paths.append(f"/subcategories/{subcategory.slug}")
    if subcategory and subcategory.category and subcategory.category.slug:
        paths.append(f"/categories/{subcategory.category.slug}")
    # Products also surface on the homepage and collection pages
    paths.extend(["/", "/best-sellers", "/new-arrivals"])
    return paths


def category_paths(slug: str) -> list[str]:
    return [f"/categories/{slug}", "/categories", "/"]


def subcategory_paths(slug: str, category_slug: str | None = None) -> list[str]:
    paths = [f"/subcategories/{slug}"]
    if category_slug:
        paths.append(f"/categories/{category_slug}")
    paths.append("/categories")
    return paths


def bundle_paths(slug: str) -> list[str]:
    return [f"/bundles/{slug}", "/bundles", "/"]


def post_paths(slug: str) -> list[str]:
    return [f"/blog/{slug}", "/blog", "/"]


def collection_listing_paths() -> list[str]:
    """Listing pages refreshed when a product enters or leaves them."""
    return list(_LISTING_PATHS)


def paths_for(context: RevalidationContext) -> list[str]:
    """Compute every path a change invalidates.

    The result holds no duplicates and keeps first-seen order.
    """
    collection, doc = context.collection, context.doc

    if collection == "products":
        paths = product_paths(doc.slug, doc.subcategory)
        if context.operation == "delete" or has_visibility_change(doc):
            paths.extend(collection_listing_paths())
    elif collection == "categories":
        paths = category_paths(doc.slug)
    elif collection == "subcategories":
        paths = subcategory_paths(doc.slug, doc.category.slug if doc.category else None)
    elif collection == "bundles":
        paths = bundle_paths(doc.slug)
    elif collection == "posts":
        paths = post_paths(doc.slug)
    else:
        raise ValueError(f"Unknown collection: {collection!r}")

    return list(dict.fromkeys(paths))
