"""Product aggregate.

Products live independently of carts and orders. Besides the price they
carry the stock settings that decide whether a product can be sold and how
many units a shopper may put in the cart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

LOW_STOCK_THRESHOLD = 5
DEFAULT_MAX_QUANTITY = 10


class StockStatus(Enum):
    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


@dataclass
class Product:
    """A product in the catalog.

    When ``enable_stock_management`` is False the stored
    ``stock_quantity`` is ignored and the product is always available.
    """

    id: str
    name: str
    slug: str
    price: Money
    stock_quantity: int | None = None
    enable_stock_management: bool = False
    category_ids: list[int] = field(default_factory=list)

    # --- Stock rules ----------------------------------------------------------

    @property
    def _stock(self) -> int:
        return self.stock_quantity if self.stock_quantity is not None else 0

    @property
    def is_out_of_stock(self) -> bool:
        if not self.enable_stock_management:
            return False
        return self._stock <= 0

    @property
    def has_low_stock(self) -> bool:
        if not self.enable_stock_management:
            return False
        return 0 < self._stock <= LOW_STOCK_THRESHOLD

    @property
    def stock_status(self) -> StockStatus:
        if self.is_out_of_stock:
            return StockStatus.OUT_OF_STOCK
        if self.has_low_stock:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    def max_addable_quantity(self, default_max: int = DEFAULT_MAX_QUANTITY) -> int:
        """Upper bound for the quantity of this product in a single cart."""
        if not self.enable_stock_management:
            return default_max
        return max(0, min(self._stock, default_max))

    def deduct_stock(self, quantity: int) -> None:
        """Remove sold units from stock (no-op when stock is unmanaged)."""
        if quantity <= 0:
            raise ValidationError("Deduct quantity must be positive")
        if not self.enable_stock_management:
            return
        if quantity > self._stock:
            raise ValidationError(f'Not enough stock for product "{self.name}"')
        self.stock_quantity = self._stock - quantity

    # --- Mutations ------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders keep the price they captured at checkout.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def update_stock(
        self, stock_quantity: int | None, enable_stock_management: bool | None = None
    ) -> None:
        if enable_stock_management is not None:
            self.enable_stock_management = enable_stock_management
        if stock_quantity is not None and stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        if self.enable_stock_management and stock_quantity is None and self.stock_quantity is None:
            raise ValidationError("Stock quantity is required when stock management is enabled")
        if stock_quantity is not None:
            self.stock_quantity = stock_quantity
