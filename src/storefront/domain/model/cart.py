"""Cart aggregate. Consolidates line items for one shopping session.

A Cart is owned by a single session and only changes through its own
methods.  Every mutation keeps ``total_amount`` equal to the sum of the
line totals, rounded to two decimal places.

Stock is deliberately not consulted here: callers clamp quantities with
``Product.max_addable_quantity`` before calling ``add`` or
``update_quantity``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Cart quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity < 1:
        raise ValidationError("Cart quantity must be at least 1")


@dataclass
class CartItem:
    """One product/size selection in the cart."""

    product_id: str
    name: str
    price: Money
    quantity: int
    size: str = ""
    slug: str = ""
    cart_item_id: str | None = None

    @property
    def identity(self) -> str:
        """The explicit cart item id, or ``"<product_id>-<size>"``."""
        return self.cart_item_id or f"{self.product_id}-{self.size}"

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity

    def same_line_as(self, other: CartItem) -> bool:
        if self.cart_item_id and other.cart_item_id:
            return self.cart_item_id == other.cart_item_id
        return self.product_id == other.product_id and self.size == other.size

    def answers_to(self, identity: str) -> bool:
        if self.cart_item_id:
            return self.cart_item_id == identity
        return self.product_id == identity


@dataclass
class Cart:
    items: list[CartItem] = field(default_factory=list)
    total_amount: Money = field(default_factory=Money.zero)

    # --- Mutations ------------------------------------------------------------

    def add(self, item: CartItem) -> CartItem:
        """Add ``item``, merging into an existing line for the same product/size.

        Returns the line as stored in the cart.
        """
        _check_quantity(item.quantity)

        line = self._find_same_line(item)
        if line is not None:
            # A merged line keeps the price it was first added at.
            line.quantity += item.quantity
            added = line.price * item.quantity
        else:
            line = replace(item, cart_item_id=item.identity)
            self.items.append(line)
            added = line.line_total

        self.total_amount = (self.total_amount + added).rounded()
        return line

    def remove(self, identity: str) -> CartItem | None:
        """Drop the line answering to ``identity``; a miss is a no-op."""
        line = self.find(identity)
        if line is None:
            return None
        self.items.remove(line)
        self.total_amount = self._subtract(line.line_total)
        return line

    def update_quantity(self, identity: str, quantity: int) -> CartItem | None:
        """Set the quantity of an existing line; a miss is a no-op."""
        _check_quantity(quantity)
        line = self.find(identity)
        if line is None:
            return None

        if quantity >= line.quantity:
            self.total_amount = (
                self.total_amount + line.price * (quantity - line.quantity)
            ).rounded()
        else:
            self.total_amount = self._subtract(line.price * (line.quantity - quantity))
        line.quantity = quantity
        return line

    def clear(self) -> None:
        self.items = []
        self.total_amount = Money.zero(self.total_amount.currency)

    # --- Queries --------------------------------------------------------------

    def find(self, identity: str) -> CartItem | None:
        for line in self.items:
            if line.answers_to(identity):
                return line
        return None

    def quantity_of(self, product_id: str, size: str | None = None) -> int:
        """Units of a product already in the cart, optionally for one size."""
        return sum(
            line.quantity
            for line in self.items
            if line.product_id == product_id and (size is None or line.size == size)
        )

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # --- Internal helpers -----------------------------------------------------

    def _find_same_line(self, item: CartItem) -> CartItem | None:
        for line in self.items:
            if line.same_line_as(item):
                return line
        return None

    def _subtract(self, amount: Money) -> Money:
        # Sub-cent prices can leave the rounded total just below the line
        # being removed; never let the total go negative.
        if amount >= self.total_amount or not self.items:
            return Money.zero(self.total_amount.currency)
        return (self.total_amount - amount).rounded()
