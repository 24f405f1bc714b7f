"""Application service: Update Category use case.

Renaming recomputes the slug, excluding the category itself from the
collision check.  Re-parenting is validated against the whole category
set so a category can never become its own ancestor.
"""

from __future__ import annotations

import structlog

from storefront.application.slug_claims import save_claiming_slug
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.category_tree import assert_can_reparent
from storefront.domain.service.slug_generator import DEFAULT_MAX_ATTEMPTS, SlugGenerator

logger = structlog.get_logger(__name__)

_UNCHANGED = object()


class UpdateCategoryHandler:

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
        category_id: int,
        name: str | None = None,
        slug: str | None = None,
        parent_id: int | None | object = _UNCHANGED,
        description: str | None = None,
        seo_title: str | None = None,
        seo_description: str | None = None,
        seo_keywords: str | None = None,
    ) -> Category:
        """Update a category.

        Pass ``parent_id=None`` to detach the category to the root level;
        leave it out to keep the current parent.
        """
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category #{category_id} not found")

        if parent_id is not _UNCHANGED and parent_id != category.parent_id:
            assert_can_reparent(
                self._category_repo.list_all(), category_id, parent_id  # type: ignore[arg-type]
            )
            category.move_to(parent_id)  # type: ignore[arg-type]
            logger.info("Category moved", category_id=category_id, parent_id=parent_id)

        category.update_details(description, seo_title, seo_description, seo_keywords)

        if name is not None and not name.strip():
            raise ValidationError("Category name is required")
        new_name = name.strip() if name is not None else category.name
        renamed = new_name != category.name
        reslugged = bool(slug and slug.strip()) and slug != category.slug

        if renamed or reslugged:
            old_slug = category.slug
            category.rename(new_name, old_slug)
            save_claiming_slug(
                category,
                lambda: self._slugs.unique_category_slug(
                    category.name, slug, exclude_id=category.id
                ),
                self._category_repo.save,
            )
            logger.info(
                "Category slug recomputed",
                category_id=category_id,
                old_slug=old_slug,
                slug=category.slug,
            )
        else:
            self._category_repo.save(category)
        return category
