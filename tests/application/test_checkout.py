"""Integration tests for the Checkout use case."""

from decimal import Decimal

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CustomerDetails
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.pricing_rules import PricingRules
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository

SESSION = "s1"
CUSTOMER = CustomerDetails(
    name="Ada Lovelace",
    email="ada@example.com",
    shipping_address="Storgatan 1, 111 22 Stockholm",
    phone="070-000 00 00",
)


def _setup(scarf_stock: int = 5):
    products = [
        Product(id="1", name="Tee", slug="tee", price=Money.of("100")),
        Product(
            id="2",
            name="Scarf",
            slug="scarf",
            price=Money.of("50"),
            stock_quantity=scarf_stock,
            enable_stock_management=True,
        ),
    ]
    product_repo = FakeProductRepository(products)
    cart_repo = FakeCartRepository()
    order_repo = FakeOrderRepository()
    return product_repo, cart_repo, order_repo


def _fill(product_repo, cart_repo):
    add = AddToCartHandler(product_repo, cart_repo)
    add.handle(SESSION, "1", quantity=2, size="M")
    add.handle(SESSION, "2", quantity=1, size="S")
    add.handle(SESSION, "2", quantity=2, size="L")


class TestCheckoutHappyPath:

    def test_places_pending_order(self):
        product_repo, cart_repo, order_repo = _setup()
        _fill(product_repo, cart_repo)

        dto = CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

        order = order_repo.get_by_id(dto.id)
        assert order.status is OrderStatus.PENDING
        assert order.subtotal == Money.of("350")
        assert order.tax == Money.of("87.50")
        assert order.shipping == Money.of("99")
        assert order.total.amount == Decimal("536.50")
        assert order.customer_phone == "070-000 00 00"
        assert dto.total == "536.50 SEK"
        assert dto.order_number.startswith("WB-")

    def test_line_items_keep_size(self):
        product_repo, cart_repo, order_repo = _setup()
        _fill(product_repo, cart_repo)

        dto = CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

        order = order_repo.get_by_id(dto.id)
        assert [(i.product_id, i.size, i.quantity.value) for i in order.items] == [
            ("1", "M", 2),
            ("2", "S", 1),
            ("2", "L", 2),
        ]
        assert order.items[0].options == {"size": "M"}

    def test_deducts_managed_stock_only(self):
        product_repo, cart_repo, order_repo = _setup()
        _fill(product_repo, cart_repo)

        CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

        assert product_repo.get_by_id("2").stock_quantity == 2
        assert product_repo.get_by_id("1").stock_quantity is None

    def test_clears_cart(self):
        product_repo, cart_repo, order_repo = _setup()
        _fill(product_repo, cart_repo)

        CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

        assert cart_repo.get(SESSION).is_empty

    def test_price_captured_at_checkout(self):
        product_repo, cart_repo, order_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")
        product_repo.get_by_id("1").update_price(Money.of("80"))

        dto = CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

        product_repo.get_by_id("1").update_price(Money.of("120"))
        order = order_repo.get_by_id(dto.id)
        assert order.items[0].unit_price == Money.of("80")
        assert order.subtotal == Money.of("80")

    def test_discount_and_custom_pricing(self):
        product_repo, cart_repo, order_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")
        pricing = PricingRules(tax_rate=Decimal("0.12"), flat_shipping=Decimal("0"))

        dto = CheckoutHandler(cart_repo, product_repo, order_repo, pricing).handle(
            SESSION, CUSTOMER, discount="10"
        )

        assert dto.tax == "12.00 SEK"
        assert dto.discount == "10.00 SEK"
        assert dto.total == "102.00 SEK"

    def test_order_prefix(self):
        product_repo, cart_repo, order_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")

        dto = CheckoutHandler(
            cart_repo, product_repo, order_repo, order_number_prefix="SO"
        ).handle(SESSION, CUSTOMER)

        assert dto.order_number.startswith("SO-")

    def test_consecutive_orders_get_distinct_numbers(self):
        product_repo, cart_repo, order_repo = _setup()
        checkout = CheckoutHandler(cart_repo, product_repo, order_repo)
        numbers = set()
        for _ in range(3):
            AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")
            numbers.add(checkout.handle(SESSION, CUSTOMER).order_number)
        assert len(numbers) == 3


class TestCheckoutValidation:

    def test_empty_cart(self):
        product_repo, cart_repo, order_repo = _setup()
        with pytest.raises(ValidationError, match="empty cart"):
            CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

    def test_insufficient_stock_changes_nothing(self):
        product_repo, cart_repo, order_repo = _setup(scarf_stock=5)
        _fill(product_repo, cart_repo)
        # Stock drops after the items went into the cart.
        product_repo.get_by_id("2").stock_quantity = 2

        with pytest.raises(ValidationError, match='Not enough stock for product "Scarf"'):
            CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

        assert product_repo.get_by_id("2").stock_quantity == 2
        assert order_repo.list_all() == []
        assert not cart_repo.get(SESSION).is_empty

    def test_product_removed_from_catalog(self):
        product_repo, cart_repo, order_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")
        product_repo._store.pop("1")

        with pytest.raises(EntityNotFoundError, match="Product with ID 1"):
            CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, CUSTOMER)

    def test_missing_customer_email(self):
        product_repo, cart_repo, order_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")
        customer = CustomerDetails(name="Ada", email="", shipping_address="Street 1")

        with pytest.raises(ValidationError, match="e-mail"):
            CheckoutHandler(cart_repo, product_repo, order_repo).handle(SESSION, customer)
        assert order_repo.list_all() == []

    def test_discount_exceeding_total(self):
        product_repo, cart_repo, order_repo = _setup()
        AddToCartHandler(product_repo, cart_repo).handle(SESSION, "1")

        with pytest.raises(ValidationError, match="exceeds"):
            CheckoutHandler(cart_repo, product_repo, order_repo).handle(
                SESSION, CUSTOMER, discount="1000"
            )
