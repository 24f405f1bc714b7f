"""Application service: Update Product use case."""

from __future__ import annotations

import structlog

from storefront.application.slug_claims import save_claiming_slug
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.slug_generator import (
    DEFAULT_MAX_ATTEMPTS,
    SlugGenerator,
    generate_slug,
)

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        slug_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._slugs = SlugGenerator(product_repo, category_repo, slug_max_attempts)

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        slug: str | None = None,
        price: str | None = None,
        stock_quantity: int | None = None,
        enable_stock_management: bool | None = None,
        category_ids: list[int] | None = None,
    ) -> Product:
        """Update a product.

        The slug is only recomputed when the name or the slug candidate
        actually changes.  Existing orders keep their captured prices.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if price is not None:
            product.update_price(Money.of(price, product.price.currency))

        if stock_quantity is not None or enable_stock_management is not None:
            product.update_stock(stock_quantity, enable_stock_management)

        if category_ids is not None:
            for category_id in category_ids:
                if self._category_repo.get_by_id(category_id) is None:
                    raise EntityNotFoundError(f"Category #{category_id} not found")
            product.category_ids = list(category_ids)

        if name is not None and not name.strip():
            raise ValidationError("Product name is required")
        renamed = name is not None and name.strip() != product.name
        reslugged = bool(slug and slug.strip()) and slug != product.slug

        if renamed or reslugged:
            if renamed:
                product.name = name.strip()  # type: ignore[union-attr]
            old_slug = product.slug
            save_claiming_slug(
                product,
                lambda: self._unique_slug(product, slug, old_slug),
                self._product_repo.save,
            )
            logger.info(
                "Product slug recomputed",
                product_id=product.id,
                old_slug=old_slug,
                slug=product.slug,
            )
        else:
            self._product_repo.save(product)
        return product

    def _unique_slug(self, product: Product, candidate: str | None, old_slug: str) -> str:
        # A rename that slugifies to the current slug keeps it.
        source = candidate if candidate and candidate.strip() else product.name
        if generate_slug(source) == old_slug:
            return old_slug
        return self._slugs.unique_product_slug(product.name, candidate)
