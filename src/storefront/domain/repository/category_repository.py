"""Abstract repository for Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str, exclude_id: int | None = None) -> Category | None:
        """Return the category owning ``slug``, ignoring ``exclude_id``."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category, in insertion order."""

    @abstractmethod
    def save(self, category: Category) -> None:
        """Persist a new or updated category, assigning an ID to new ones.

        Raises SlugConflictError if another category already owns the slug.
        """

    @abstractmethod
    def delete(self, category_id: int) -> None:
        """Delete a category; its children are detached to the root level."""
