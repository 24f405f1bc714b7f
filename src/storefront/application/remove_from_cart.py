"""Application service: Remove From Cart use case."""

from __future__ import annotations

import structlog

from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class RemoveFromCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, session_id: str, identity: str) -> Cart:
        """Remove by cart item id (or product id); unknown ids are ignored."""
        cart = self._cart_repo.get(session_id)
        removed = cart.remove(identity)
        if removed is None:
            logger.debug("Nothing to remove", session_id=session_id, identity=identity)
            return cart
        self._cart_repo.save(session_id, cart)
        logger.info(
            "Removed from cart",
            session_id=session_id,
            cart_item_id=removed.identity,
            total_amount=str(cart.total_amount),
        )
        return cart
