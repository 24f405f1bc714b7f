"""Application service: Add To Cart use case.

The cart itself never looks at stock.  This handler clamps the requested
quantity to what the product allows, counting units of the same product
already in the cart (across all sizes).
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.product import DEFAULT_MAX_QUANTITY
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo
        self._max_quantity = max_quantity

    def handle(
        self,
        session_id: str,
        product_id: str,
        quantity: int = 1,
        size: str = "",
        cart_item_id: str | None = None,
    ) -> Cart:
        if quantity < 1:
            raise ValidationError("Cart quantity must be at least 1")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if product.is_out_of_stock:
            raise ValidationError(f"'{product.name}' is out of stock")

        cart = self._cart_repo.get(session_id)
        allowed = product.max_addable_quantity(self._max_quantity) - cart.quantity_of(
            product.id
        )
        if allowed < 1:
            raise ValidationError(
                f"Cart already holds the maximum quantity of '{product.name}'"
            )
        if quantity > allowed:
            logger.info(
                "Clamped cart quantity",
                product_id=product.id,
                requested=quantity,
                allowed=allowed,
            )
            quantity = allowed

        line = cart.add(
            CartItem(
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=quantity,
                size=size,
                slug=product.slug,
                cart_item_id=cart_item_id,
            )
        )
        self._cart_repo.save(session_id, cart)
        logger.info(
            "Added to cart",
            session_id=session_id,
            cart_item_id=line.identity,
            quantity=line.quantity,
            total_amount=str(cart.total_amount),
        )
        return cart
