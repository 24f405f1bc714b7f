"""Application service: Create Category use case."""

from __future__ import annotations

import structlog

from storefront.application.slug_claims import save_claiming_slug
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.slug_generator import DEFAULT_MAX_ATTEMPTS, SlugGenerator

logger = structlog.get_logger(__name__)


class CreateCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
        slug_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._category_repo = category_repo
        self._slugs = SlugGenerator(product_repo, category_repo, slug_max_attempts)

    def handle(
        self,
        name: str,
        slug: str | None = None,
        parent_id: int | None = None,
        description: str | None = None,
        seo_title: str | None = None,
        seo_description: str | None = None,
        seo_keywords: str | None = None,
    ) -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required")

        # A brand-new category cannot close a cycle, only dangle.
        if parent_id is not None and self._category_repo.get_by_id(parent_id) is None:
            raise EntityNotFoundError(f"Parent category #{parent_id} not found")

        category = Category(
            id=None,
            name=name.strip(),
            slug="",
            parent_id=parent_id,
            description=description,
            seo_title=seo_title,
            seo_description=seo_description,
            seo_keywords=seo_keywords,
        )
        save_claiming_slug(
            category,
            lambda: self._slugs.unique_category_slug(category.name, slug),
            self._category_repo.save,
        )
        logger.info(
            "Category created",
            category_id=category.id,
            slug=category.slug,
            parent_id=parent_id,
        )
        return category
