"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.domain.service.pricing_rules import PricingRules
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def category_repository() -> JsonCategoryRepository:
    return JsonCategoryRepository(get_settings().data_dir / "categories.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def cart_repository() -> JsonCartRepository:
    settings = get_settings()
    return JsonCartRepository(settings.data_dir / "carts.json", settings.currency)


def pricing_rules() -> PricingRules:
    settings = get_settings()
    return PricingRules(
        tax_rate=settings.tax_rate,
        flat_shipping=settings.flat_shipping,
        currency=settings.currency,
    )
