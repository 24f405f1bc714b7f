"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import SlugConflictError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        products = self._load()
        if not products:
            return "1"
        return str(max(int(pid) for pid in products) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_slug(self, slug: str) -> Product | None:
        for product in self._load().values():
            if product.slug == slug:
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        for other in products.values():
            if other.slug == product.slug and other.id != product.id:
                raise SlugConflictError(
                    f"Product slug '{product.slug}' is already taken"
                )
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                slug=item["slug"],
                price=Money(
                    Decimal(item["price"]), item.get("currency", DEFAULT_CURRENCY)
                ),
                stock_quantity=item.get("stock_quantity"),
                enable_stock_management=item.get("enable_stock_management", False),
                category_ids=list(item.get("category_ids", [])),
            )
            for item in self._file.load()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist(
            [
                {
                    "id": p.id,
                    "name": p.name,
                    "slug": p.slug,
                    "price": str(p.price.amount),
                    "currency": p.price.currency,
                    "stock_quantity": p.stock_quantity,
                    "enable_stock_management": p.enable_stock_management,
                    "category_ids": p.category_ids,
                }
                for p in products.values()
            ]
        )
