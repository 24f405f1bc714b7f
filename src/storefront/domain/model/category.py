"""Category aggregate.

Categories are stored flat with a ``parent_id`` pointing at another
category.  Children are never stored; they are derived by grouping on
``parent_id`` (see ``storefront.domain.service.category_tree``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Category:
    id: int | None
    name: str
    slug: str
    parent_id: int | None = None
    description: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def rename(self, name: str, slug: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        self.name = name.strip()
        self.slug = slug
        self.touch()

    def move_to(self, parent_id: int | None) -> None:
        """Attach to a new parent, or detach to the root level with None.

        Only the trivial self-reference is checked here; deeper cycles
        need the whole category set and are checked by the tree service.
        """
        if parent_id is not None and parent_id == self.id:
            raise ValidationError("A category cannot be its own parent")
        self.parent_id = parent_id
        self.touch()

    def update_details(
        self,
        description: str | None = None,
        seo_title: str | None = None,
        seo_description: str | None = None,
        seo_keywords: str | None = None,
    ) -> None:
        if description is not None:
            self.description = description
        if seo_title is not None:
            self.seo_title = seo_title
        if seo_description is not None:
            self.seo_description = seo_description
        if seo_keywords is not None:
            self.seo_keywords = seo_keywords
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()
