"""Integration tests for the cart use cases."""

from decimal import Decimal

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeCategoryRepository, FakeProductRepository

SESSION = "session-1"


def _setup():
    products = [
        Product(id="1", name="Tee", slug="tee", price=Money.of("10")),
        Product(
            id="2",
            name="Scarf",
            slug="scarf",
            price=Money.of("25.50"),
            stock_quantity=3,
            enable_stock_management=True,
        ),
        Product(
            id="3",
            name="Cap",
            slug="cap",
            price=Money.of("99"),
            stock_quantity=0,
            enable_stock_management=True,
        ),
    ]
    return FakeProductRepository(products), FakeCartRepository()


class TestAddToCart:

    def test_adds_and_merges(self):
        product_repo, cart_repo = _setup()
        add = AddToCartHandler(product_repo, cart_repo)

        add.handle(SESSION, "1", quantity=2, size="M")
        cart = add.handle(SESSION, "1", quantity=3, size="M")

        assert len(cart.items) == 1
        assert cart.items[0].cart_item_id == "1-M"
        assert cart.items[0].quantity == 5
        assert cart.total_amount == Money.of("50.00")
        assert cart_repo.get(SESSION).total_amount == Money.of("50.00")

    def test_line_snapshot_comes_from_product(self):
        product_repo, cart_repo = _setup()
        cart = AddToCartHandler(product_repo, cart_repo).handle(SESSION, "2")

        line = cart.items[0]
        assert (line.name, line.slug, line.price) == ("Scarf", "scarf", Money.of("25.50"))

    def test_repriced_product_merges_at_original_price(self):
        product_repo, cart_repo = _setup()
        add = AddToCartHandler(product_repo, cart_repo)
        add.handle(SESSION, "1", size="M")
        UpdateProductHandler(product_repo, FakeCategoryRepository()).handle("1", price="20")

        cart = add.handle(SESSION, "1", size="M")

        line_sum = sum((line.line_total.amount for line in cart.items), Decimal("0"))
        assert cart.total_amount.amount == line_sum
        assert cart.total_amount == Money.of("20.00")

    def test_clamped_to_stock(self):
        product_repo, cart_repo = _setup()
        cart = AddToCartHandler(product_repo, cart_repo).handle(SESSION, "2", quantity=8)
        assert cart.items[0].quantity == 3

    def test_clamped_to_default_maximum(self):
        product_repo, cart_repo = _setup()
        cart = AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1", quantity=25)
        assert cart.items[0].quantity == 10

    def test_clamp_counts_all_sizes(self):
        product_repo, cart_repo = _setup()
        add = AddToCartHandler(product_repo, cart_repo)
        add.handle(SESSION, "2", quantity=2, size="S")

        cart = add.handle(SESSION, "2", quantity=2, size="L")

        assert cart.quantity_of("2") == 3

    def test_full_line_rejected(self):
        product_repo, cart_repo = _setup()
        add = AddToCartHandler(product_repo, cart_repo)
        add.handle(SESSION, "2", quantity=3)

        with pytest.raises(ValidationError, match="maximum quantity"):
            add.handle(SESSION, "2")

    def test_out_of_stock_rejected(self):
        product_repo, cart_repo = _setup()
        with pytest.raises(ValidationError, match="out of stock"):
            AddToCartHandler(product_repo, cart_repo).handle(SESSION, "3")
        assert cart_repo.get(SESSION).is_empty

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            AddToCartHandler(*_setup()).handle(SESSION, "404")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            AddToCartHandler(*_setup()).handle(SESSION, "1", quantity=0)

    def test_sessions_are_isolated(self):
        product_repo, cart_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")
        assert cart_repo.get("other").is_empty


class TestUpdateAndRemove:

    def _filled(self):
        product_repo, cart_repo = _setup()
        add = AddToCartHandler(product_repo, cart_repo)
        add.handle(SESSION, "1", quantity=2, size="M")
        add.handle(SESSION, "2", quantity=1)
        return product_repo, cart_repo

    def test_update_quantity(self):
        product_repo, cart_repo = self._filled()
        cart = UpdateCartItemHandler(product_repo, cart_repo).handle(SESSION, "1-M", 4)

        assert cart.find("1-M").quantity == 4
        assert cart.total_amount == Money.of("65.50")

    def test_update_clamped_to_stock(self):
        product_repo, cart_repo = self._filled()
        cart = UpdateCartItemHandler(product_repo, cart_repo).handle(SESSION, "2-", 9)
        assert cart.find("2-").quantity == 3

    def test_update_to_zero_removes_line(self):
        product_repo, cart_repo = self._filled()
        cart = UpdateCartItemHandler(product_repo, cart_repo).handle(SESSION, "2-", 0)

        assert cart.find("2-") is None
        assert cart.total_amount == Money.of("20.00")

    def test_update_unknown_line(self):
        product_repo, cart_repo = self._filled()
        with pytest.raises(EntityNotFoundError, match="Cart item 'nope'"):
            UpdateCartItemHandler(product_repo, cart_repo).handle(SESSION, "nope", 1)

    def test_update_negative_rejected(self):
        product_repo, cart_repo = self._filled()
        with pytest.raises(ValidationError):
            UpdateCartItemHandler(product_repo, cart_repo).handle(SESSION, "1-M", -1)

    def test_remove(self):
        _, cart_repo = self._filled()
        cart = RemoveFromCartHandler(cart_repo).handle(SESSION, "1-M")

        assert [line.product_id for line in cart.items] == ["2"]
        assert cart_repo.get(SESSION).total_amount == Money.of("25.50")

    def test_remove_unknown_is_noop(self):
        _, cart_repo = self._filled()
        cart = RemoveFromCartHandler(cart_repo).handle(SESSION, "missing")
        assert cart.total_amount == Money.of("45.50")

    def test_clear(self):
        _, cart_repo = self._filled()
        ClearCartHandler(cart_repo).handle(SESSION)
        assert cart_repo.get(SESSION).is_empty


class TestShowCart:

    def test_dto(self):
        product_repo, cart_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1", quantity=2, size="L")

        dto = ShowCartHandler(cart_repo).handle(SESSION)

        assert dto.item_count == 2
        assert dto.total_amount == "20.00 SEK"
        line = dto.items[0]
        assert (line.cart_item_id, line.size, line.price, line.line_total) == (
            "1-L",
            "L",
            "10.00 SEK",
            "20.00 SEK",
        )

    def test_empty(self):
        dto = ShowCartHandler(FakeCartRepository()).handle(SESSION)
        assert dto.items == []
        assert dto.total_amount == "0.00 SEK"
