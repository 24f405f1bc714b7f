"""Application service: Delete Category use case.

Children of the deleted category are not removed; the repository detaches
them so they become top-level categories.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.category_repository import CategoryRepository

logger = structlog.get_logger(__name__)


class DeleteCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, category_id: int) -> None:
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category #{category_id} not found")
        self._category_repo.delete(category_id)
        logger.info("Category deleted", category_id=category_id, slug=category.slug)
