"""Application service: category navigation queries."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.service.category_tree import (
    Crumb,
    FlatCategory,
    TreeNode,
    breadcrumb,
    build_tree,
    filter_by_term,
    flatten,
)


class ShowCategoriesHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def tree(self) -> list[TreeNode]:
        return build_tree(self._category_repo.list_all())

    def flat(self, term: str | None = None) -> list[FlatCategory]:
        """Hierarchy-annotated list, optionally narrowed by a search term."""
        return filter_by_term(flatten(self._category_repo.list_all()), term)

    def breadcrumb(self, slug: str) -> list[Crumb]:
        leaf = self._category_repo.get_by_slug(slug)
        if leaf is None:
            raise EntityNotFoundError(f"Category '{slug}' not found")
        return breadcrumb(leaf, self._category_repo.get_by_id)
