"""Application service: Update Cart Item quantity use case."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import DEFAULT_MAX_QUANTITY
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateCartItemHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo
        self._max_quantity = max_quantity

    def handle(self, session_id: str, cart_item_id: str, quantity: int) -> Cart:
        """Set a line's quantity, clamped to stock; zero removes the line."""
        if quantity < 0:
            raise ValidationError("Cart quantity cannot be negative")

        cart = self._cart_repo.get(session_id)
        line = cart.find(cart_item_id)
        if line is None:
            raise EntityNotFoundError(f"Cart item '{cart_item_id}' not found")

        if quantity == 0:
            cart.remove(cart_item_id)
        else:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product with ID '{line.product_id}' not found"
                )
            in_other_lines = cart.quantity_of(product.id) - line.quantity
            allowed = product.max_addable_quantity(self._max_quantity) - in_other_lines
            if allowed < 1:
                raise ValidationError(f"'{product.name}' is out of stock")
            if quantity > allowed:
                logger.info(
                    "Clamped cart quantity",
                    product_id=product.id,
                    requested=quantity,
                    allowed=allowed,
                )
                quantity = allowed
            cart.update_quantity(cart_item_id, quantity)

        self._cart_repo.save(session_id, cart)
        logger.info(
            "Updated cart item",
            session_id=session_id,
            cart_item_id=cart_item_id,
            quantity=quantity,
            total_amount=str(cart.total_amount),
        )
        return cart
