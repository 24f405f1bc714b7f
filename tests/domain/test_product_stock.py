"""Unit tests for the stock rules on Product."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, StockStatus
from storefront.domain.model.value_objects import Money


def _product(stock: int | None = None, managed: bool = False) -> Product:
    return Product(
        id="p1",
        name="Linen Shirt",
        slug="linen-shirt",
        price=Money.of("499"),
        stock_quantity=stock,
        enable_stock_management=managed,
    )


class TestStockStatus:

    @pytest.mark.parametrize("stock", [None, 0, -3, 100])
    def test_unmanaged_stock_is_never_out_of_stock(self, stock):
        product = _product(stock, managed=False)
        assert product.is_out_of_stock is False
        assert product.has_low_stock is False
        assert product.stock_status is StockStatus.IN_STOCK

    @pytest.mark.parametrize(
        ("stock", "expected"),
        [
            (None, StockStatus.OUT_OF_STOCK),
            (0, StockStatus.OUT_OF_STOCK),
            (1, StockStatus.LOW_STOCK),
            (5, StockStatus.LOW_STOCK),
            (6, StockStatus.IN_STOCK),
        ],
    )
    def test_managed_stock(self, stock, expected):
        assert _product(stock, managed=True).stock_status is expected


class TestMaxAddableQuantity:

    def test_unmanaged_uses_default_cap(self):
        assert _product(2, managed=False).max_addable_quantity() == 10

    def test_managed_capped_by_stock(self):
        assert _product(3, managed=True).max_addable_quantity() == 3

    def test_managed_capped_by_default(self):
        assert _product(40, managed=True).max_addable_quantity() == 10

    def test_custom_cap(self):
        assert _product(40, managed=True).max_addable_quantity(default_max=4) == 4

    def test_never_negative(self):
        assert _product(-2, managed=True).max_addable_quantity() == 0


class TestDeductStock:

    def test_deducts_managed_stock(self):
        product = _product(5, managed=True)
        product.deduct_stock(2)
        assert product.stock_quantity == 3

    def test_unmanaged_stock_untouched(self):
        product = _product(1, managed=False)
        product.deduct_stock(7)
        assert product.stock_quantity == 1

    def test_insufficient_stock(self):
        product = _product(1, managed=True)
        with pytest.raises(ValidationError, match='Not enough stock for product "Linen Shirt"'):
            product.deduct_stock(2)
        assert product.stock_quantity == 1

    def test_non_positive_quantity(self):
        with pytest.raises(ValidationError, match="positive"):
            _product(5, managed=True).deduct_stock(0)


class TestUpdates:

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().update_price(Money.of("0"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            _product().update_stock(-1)

    def test_enabling_management_requires_quantity(self):
        with pytest.raises(ValidationError, match="required"):
            _product(None).update_stock(None, enable_stock_management=True)

    def test_enabling_management_with_quantity(self):
        product = _product(None)
        product.update_stock(8, enable_stock_management=True)
        assert product.enable_stock_management is True
        assert product.stock_quantity == 8
