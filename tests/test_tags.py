"""Tests for tag computation."""

import pytest

from revalidator import (
    COLLECTION_TAGS,
    CategoryRef,
    RevalidationContext,
    RevalidationDocument,
    SubcategoryRef,
    tags_for,
)
from revalidator.tags import (
    bundle_tags,
    category_tags,
    collection_tags_for_product,
    entity_tag,
    post_tags,
    product_tags,
    subcategory_tags,
)

COLLECTIONS = ["products", "categories", "subcategories", "bundles", "posts"]
OPERATIONS = ["create", "update", "delete"]
STATUSES = [None, "active", "draft", "archived"]


def _context(collection, operation="update", **doc) -> RevalidationContext:
    doc.setdefault("slug", "item")
    return RevalidationContext(
        collection=collection,
        operation=operation,
        doc=RevalidationDocument(**doc),
    )


def _full_doc() -> dict:
    return {
        "slug": "item",
        "tags": ("Best-Seller", "bestseller", "featured", "misc"),
        "subcategory": SubcategoryRef(slug="mugs", category=CategoryRef(slug="kitchen")),
        "category": CategoryRef(slug="kitchen"),
    }


class TestEntityTagBuilders:
    """Tests for the per-collection tag builders."""

    def test_product_tags_with_ancestry(self) -> None:
        assert product_tags("mug", "mugs", "kitchen") == [
            "product:mug",
            "subcategory:mugs",
            "category:kitchen",
            "collection:all-products",
        ]

    def test_product_tags_without_ancestry(self) -> None:
        assert product_tags("mug") == ["product:mug", "collection:all-products"]

    def test_category_tags(self) -> None:
        assert category_tags("kitchen") == [
            "category:kitchen",
            "collection:all-categories",
        ]

    def test_subcategory_tags(self) -> None:
        assert subcategory_tags("mugs") == ["subcategory:mugs"]
        assert subcategory_tags("mugs", "kitchen") == [
            "subcategory:mugs",
            "category:kitchen",
        ]

    def test_bundle_tags(self) -> None:
        assert bundle_tags("starter") == ["bundle:starter", "collection:all-bundles"]

    def test_post_tags(self) -> None:
        assert post_tags("hello", "tech") == [
            "post:hello",
            "collection:all-posts",
            "category:tech",
        ]

    def test_entity_tag_uses_singular_prefix(self) -> None:
        assert entity_tag("subcategories", "mugs") == "subcategory:mugs"


class TestCollectionTagsForProduct:
    """Tests for mapping author labels to collection tags."""

    @pytest.mark.parametrize("label", ["best-seller", "BEST-SELLER", "Bestseller"])
    def test_best_seller_variants(self, label: str) -> None:
        assert collection_tags_for_product([label]) == ["collection:best-sellers"]

    @pytest.mark.parametrize("label", ["new-arrival", "New Arrival", " new arrival "])
    def test_new_arrival_variants(self, label: str) -> None:
        assert collection_tags_for_product([label]) == ["collection:new-arrivals"]

    @pytest.mark.parametrize("label", ["featured", "Editors-Pick", "editor's pick"])
    def test_editors_pick_variants(self, label: str) -> None:
        assert collection_tags_for_product([label]) == ["collection:editors-picks"]

    def test_synonyms_collapse_to_one_tag(self) -> None:
        result = collection_tags_for_product(["best-seller", "BESTSELLER", "Best-Seller"])
        assert result == ["collection:best-sellers"]

    def test_unmatched_and_blank_labels_ignored(self) -> None:
        assert collection_tags_for_product(["sale", "", None, "limited"]) == []

    def test_empty_or_missing(self) -> None:
        assert collection_tags_for_product(None) == []
        assert collection_tags_for_product([]) == []


class TestTagsFor:
    """Tests for the full tag plan of a change."""

    @pytest.mark.parametrize("collection", COLLECTIONS)
    @pytest.mark.parametrize("operation", OPERATIONS)
    def test_identity_tag_always_present(self, collection, operation) -> None:
        context = _context(collection, operation, **_full_doc())
        assert entity_tag(collection, "item") in tags_for(context)

    @pytest.mark.parametrize("collection", COLLECTIONS)
    @pytest.mark.parametrize("operation", OPERATIONS)
    def test_no_duplicates(self, collection, operation) -> None:
        context = _context(
            collection,
            operation,
            status="active",
            previous_status="draft",
            **_full_doc(),
        )
        tags = tags_for(context)
        assert len(tags) == len(set(tags))

    @pytest.mark.parametrize("collection", COLLECTIONS)
    def test_deterministic(self, collection) -> None:
        context = _context(collection, "create", **_full_doc())
        assert tags_for(context) == tags_for(context)

    @pytest.mark.parametrize("collection", COLLECTIONS)
    def test_never_empty_without_ancestry(self, collection) -> None:
        assert tags_for(_context(collection, slug="bare"))

    @pytest.mark.parametrize("labels", [(), ("sale",), ("best-seller",)])
    def test_create_product_adds_new_arrivals(self, labels) -> None:
        tags = tags_for(_context("products", "create", tags=labels))
        assert COLLECTION_TAGS["new_arrivals"] in tags

    def test_update_product_without_label_skips_new_arrivals(self) -> None:
        tags = tags_for(_context("products", "update"))
        assert COLLECTION_TAGS["new_arrivals"] not in tags

    @pytest.mark.parametrize("previous", ["active", "draft", "archived"])
    @pytest.mark.parametrize("current", ["active", "draft", "archived"])
    def test_status_change_adds_listing_tags(self, previous, current) -> None:
        if previous == current:
            pytest.skip("no transition")
        tags = tags_for(
            _context("products", status=current, previous_status=previous)
        )
        assert "collection:all-products" in tags
        assert "collection:homepage" in tags

    def test_status_change_keeps_special_tags(self) -> None:
        tags = tags_for(
            _context(
                "products",
                status="archived",
                previous_status="active",
                tags=("best-seller",),
            )
        )
        assert tags.count("collection:best-sellers") == 1

    def test_product_with_ancestry(self) -> None:
        tags = tags_for(
            _context(
                "products",
                slug="mug",
                subcategory=SubcategoryRef(
                    slug="mugs", category=CategoryRef(slug="kitchen")
                ),
            )
        )
        assert tags == [
            "product:mug",
            "subcategory:mugs",
            "category:kitchen",
            "collection:all-products",
            "collection:homepage",
        ]

    def test_subcategory_uses_parent_category(self) -> None:
        tags = tags_for(
            _context("subcategories", slug="mugs", category=CategoryRef(slug="kitchen"))
        )
        assert tags == ["subcategory:mugs", "category:kitchen"]

    def test_category_includes_homepage(self) -> None:
        tags = tags_for(_context("categories", slug="kitchen"))
        assert set(tags) == {
            "category:kitchen",
            "collection:all-categories",
            "collection:homepage",
        }

    def test_bundle_includes_homepage(self) -> None:
        tags = tags_for(_context("bundles", slug="starter"))
        assert set(tags) == {
            "bundle:starter",
            "collection:all-bundles",
            "collection:homepage",
        }

    def test_new_best_seller_without_ancestry(self) -> None:
        tags = tags_for(
            _context("products", "create", slug="x", tags=("best-seller",))
        )
        assert {
            "product:x",
            "collection:all-products",
            "collection:new-arrivals",
            "collection:best-sellers",
            "collection:homepage",
        } <= set(tags)

    def test_post_with_category(self) -> None:
        tags = tags_for(_context("posts", slug="p", category=CategoryRef(slug="tech")))
        assert {
            "post:p",
            "category:tech",
            "collection:all-posts",
            "collection:homepage",
        } <= set(tags)

    def test_unknown_collection_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown collection"):
            tags_for(_context("orders"))
