"""Abstract repository for session-scoped carts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get(self, session_id: str) -> Cart:
        """Return the cart for a session, or a new empty cart."""

    @abstractmethod
    def save(self, session_id: str, cart: Cart) -> None:
        """Persist the cart for a session."""
