"""Catalog storage contract for products.

The domain and application layers only see this interface; the JSON file
store and the test fakes implement it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Next free product ID, as a string."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """The product with this ID, or None."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Product | None:
        """Return a product by its exact slug, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        Raises SlugConflictError if another product already owns the slug.
        """
