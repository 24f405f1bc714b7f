"""Unit tests for slug derivation and uniqueness probing."""

import pytest

from storefront.domain.exceptions import SlugConflictError, ValidationError
from storefront.domain.model.category import Category
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.slug_generator import SlugGenerator, generate_slug
from tests.fakes import FakeCategoryRepository, FakeProductRepository


def _product(pid: str, slug: str) -> Product:
    return Product(id=pid, name=slug, slug=slug, price=Money.of("10"))


class TestGenerateSlug:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Summer Dress", "summer-dress"),
            ("  Leading and trailing  ", "leading-and-trailing"),
            ("Crème Brûlée!", "creme-brulee"),
            ("Åsa Knäckebröd", "asa-knackebrod"),
            ("Tom & Jerry", "tom-and-jerry"),
            ("multiple---dashes___here", "multiple-dashes-here"),
            ("T-Shirt (XL) / 100% cotton", "t-shirt-xl-100-cotton"),
        ],
    )
    def test_derives_url_safe_slug(self, text, expected):
        assert generate_slug(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["Summer Dress", "Åsa Knäckebröd", "A -- B", "ÉCOLE  NORMALE", "x_y.z"],
    )
    def test_is_idempotent(self, text):
        once = generate_slug(text)
        assert generate_slug(once) == once

    def test_only_safe_characters(self):
        slug = generate_slug("Hello, Wörld! #1 @ shop?")
        assert all(c.isalnum() or c == "-" for c in slug)
        assert slug == slug.lower()


class TestUniqueProductSlug:

    def test_free_base_is_returned(self):
        gen = SlugGenerator(FakeProductRepository(), FakeCategoryRepository())
        assert gen.unique_product_slug("Summer Dress") == "summer-dress"

    def test_sequential_collisions_get_increasing_suffixes(self):
        repo = FakeProductRepository()
        gen = SlugGenerator(repo, FakeCategoryRepository())

        slugs = []
        for i in range(4):
            slug = gen.unique_product_slug("Summer Dress")
            repo.save(_product(str(i + 1), slug))
            slugs.append(slug)

        assert slugs == ["summer-dress", "summer-dress-1", "summer-dress-2", "summer-dress-3"]

    def test_candidate_slug_wins_over_name(self):
        gen = SlugGenerator(FakeProductRepository(), FakeCategoryRepository())
        assert gen.unique_product_slug("Summer Dress", "Beach Wear") == "beach-wear"

    def test_blank_candidate_falls_back_to_name(self):
        gen = SlugGenerator(FakeProductRepository(), FakeCategoryRepository())
        assert gen.unique_product_slug("Summer Dress", "   ") == "summer-dress"

    def test_unsluggable_name_rejected(self):
        gen = SlugGenerator(FakeProductRepository(), FakeCategoryRepository())
        with pytest.raises(ValidationError, match="Cannot derive a slug"):
            gen.unique_product_slug("!!!")

    def test_exhausted_numbers_fall_back_to_random_suffix(self):
        repo = FakeProductRepository(
            [_product("1", "dress"), _product("2", "dress-1"), _product("3", "dress-2")]
        )
        gen = SlugGenerator(repo, FakeCategoryRepository(), max_attempts=3)

        slug = gen.unique_product_slug("Dress")

        assert slug.startswith("dress-")
        assert slug not in {"dress", "dress-1", "dress-2"}
        assert len(slug) == len("dress-") + 6

    def test_never_free_raises_conflict(self):
        class AlwaysTaken(FakeProductRepository):
            def get_by_slug(self, slug):
                return _product("99", slug)

        gen = SlugGenerator(AlwaysTaken(), FakeCategoryRepository(), max_attempts=2)
        with pytest.raises(SlugConflictError):
            gen.unique_product_slug("Dress")


class TestUniqueCategorySlug:

    def test_own_slug_is_not_a_collision(self):
        repo = FakeCategoryRepository([Category(id=1, name="Shoes", slug="shoes")])
        gen = SlugGenerator(FakeProductRepository(), repo)

        assert gen.unique_category_slug("Shoes", exclude_id=1) == "shoes"

    def test_other_categorys_slug_is_a_collision(self):
        repo = FakeCategoryRepository([Category(id=1, name="Shoes", slug="shoes")])
        gen = SlugGenerator(FakeProductRepository(), repo)

        assert gen.unique_category_slug("Shoes", exclude_id=2) == "shoes-1"
        assert gen.unique_category_slug("Shoes") == "shoes-1"

    def test_product_and_category_namespaces_are_separate(self):
        products = FakeProductRepository([_product("1", "shoes")])
        gen = SlugGenerator(products, FakeCategoryRepository())

        assert gen.unique_category_slug("Shoes") == "shoes"
