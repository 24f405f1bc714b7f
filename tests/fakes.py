"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from copy import deepcopy

from storefront.domain.exceptions import SlugConflictError
from storefront.domain.model.cart import Cart
from storefront.domain.model.category import Category
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p
        self.saves = 0

    def next_id(self) -> str:
        if not self._store:
            return "1"
        return str(max(int(pid) for pid in self._store) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_slug(self, slug: str) -> Product | None:
        for p in self._store.values():
            if p.slug == slug:
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        for other in self._store.values():
            if other.slug == product.slug and other.id != product.id:
                raise SlugConflictError(f"Product slug '{product.slug}' is already taken")
        self._store[product.id] = product
        self.saves += 1


class FakeCategoryRepository(CategoryRepository):

    def __init__(self, categories: list[Category] | None = None) -> None:
        self._store: dict[int, Category] = {}
        for c in categories or []:
            self._store[c.id] = c  # type: ignore[index]

    def get_by_id(self, category_id: int) -> Category | None:
        return self._store.get(category_id)

    def get_by_slug(self, slug: str, exclude_id: int | None = None) -> Category | None:
        for c in self._store.values():
            if c.slug == slug and c.id != exclude_id:
                return c
        return None

    def list_all(self) -> list[Category]:
        return list(self._store.values())

    def save(self, category: Category) -> None:
        for other in self._store.values():
            if other.slug == category.slug and other.id != category.id:
                raise SlugConflictError(f"Category slug '{category.slug}' is already taken")
        if category.id is None:
            category.id = max(self._store, default=0) + 1
        self._store[category.id] = category

    def delete(self, category_id: int) -> None:
        self._store.pop(category_id, None)
        for c in self._store.values():
            if c.parent_id == category_id:
                c.parent_id = None


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def get_by_order_number(self, order_number: str) -> Order | None:
        for o in self._store.values():
            if o.order_number == order_number:
                return o
        return None

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}

    def get(self, session_id: str) -> Cart:
        # Copy so unsaved mutations never leak into the store.
        return deepcopy(self._store.get(session_id, Cart()))

    def save(self, session_id: str, cart: Cart) -> None:
        self._store[session_id] = deepcopy(cart)
