"""Application service: Create Product use case."""

from __future__ import annotations

import structlog

from storefront.application.slug_claims import save_claiming_slug
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.slug_generator import DEFAULT_MAX_ATTEMPTS, SlugGenerator

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        slug_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._slugs = SlugGenerator(product_repo, category_repo, slug_max_attempts)
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        slug: str | None = None,
        stock_quantity: int | None = None,
        enable_stock_management: bool = False,
        category_ids: list[int] | None = None,
    ) -> Product:
        """Add a new product to the catalog under a unique slug."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        money = Money.of(price, self._currency)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        category_ids = list(category_ids or [])
        for category_id in category_ids:
            if self._category_repo.get_by_id(category_id) is None:
                raise EntityNotFoundError(f"Category #{category_id} not found")

        product = Product(
            id=self._product_repo.next_id(),
            name=name.strip(),
            slug="",
            price=money,
            category_ids=category_ids,
        )
        product.update_stock(stock_quantity, enable_stock_management)

        save_claiming_slug(
            product,
            lambda: self._slugs.unique_product_slug(product.name, slug),
            self._product_repo.save,
        )
        logger.info("Product created", product_id=product.id, slug=product.slug)
        return product
