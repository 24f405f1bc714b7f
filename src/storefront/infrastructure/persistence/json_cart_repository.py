"""JSON-file-backed implementation of CartRepository.

One file holds every session's cart.  Each cart is stored in the same
shape the storefront keeps in client-local storage::

    {"items": [{"productId": ..., "cartItemId": ..., "name": ...,
                "price": "149.00", "quantity": 2, "size": "M",
                "slug": ...}],
     "totalAmount": "298.00"}

so a payload can be moved between the two without translation.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file = JsonFile(file_path, empty={})
        self._currency = currency

    # --- CartRepository interface ---------------------------------------------

    def get(self, session_id: str) -> Cart:
        payload = self._file.load().get(session_id)
        if payload is None:
            return Cart(total_amount=Money.zero(self._currency))
        return cart_from_payload(payload, self._currency)

    def save(self, session_id: str, cart: Cart) -> None:
        carts = self._file.load()
        if cart.is_empty:
            carts.pop(session_id, None)
        else:
            carts[session_id] = cart_to_payload(cart)
        self._file.persist(carts)


# --- Serialization ------------------------------------------------------------


def cart_to_payload(cart: Cart) -> dict:
    return {
        "items": [
            {
                "productId": item.product_id,
                "cartItemId": item.identity,
                "name": item.name,
                "price": str(item.price.amount),
                "quantity": item.quantity,
                "size": item.size,
                "slug": item.slug,
            }
            for item in cart.items
        ],
        "totalAmount": str(cart.total_amount.amount),
    }


def cart_from_payload(payload: dict, currency: str = DEFAULT_CURRENCY) -> Cart:
    return Cart(
        items=[
            CartItem(
                product_id=str(raw["productId"]),
                name=raw["name"],
                price=Money(Decimal(str(raw["price"])), currency),
                quantity=int(raw["quantity"]),
                size=raw.get("size", ""),
                slug=raw.get("slug", ""),
                cart_item_id=raw.get("cartItemId") or None,
            )
            for raw in payload.get("items", [])
        ],
        total_amount=Money(Decimal(str(payload.get("totalAmount", "0"))), currency),
    )
