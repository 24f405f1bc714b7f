"""Domain service: Slug Generator.

Derives URL slugs for products and categories and makes them unique by
probing the catalog: ``base``, ``base-1``, ``base-2`` and so on.

Probing is a read followed by a later write, so two concurrent creations
can still pick the same slug.  Repositories therefore reject a duplicate
slug on save (``SlugConflictError``) and the application handlers
regenerate and retry.
"""

from __future__ import annotations

import secrets
from typing import Callable

import structlog
from slugify import slugify

from storefront.domain.exceptions import SlugConflictError, ValidationError
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 50
RANDOM_SUFFIX_ATTEMPTS = 5

_REPLACEMENTS = [["&", "and"]]


def generate_slug(text: str) -> str:
    """Lowercase, transliterate and hyphenate ``text``.

    Anything outside ``[a-z0-9-]`` is dropped and runs of separators are
    collapsed, so ``generate_slug(generate_slug(x)) == generate_slug(x)``.
    """
    return slugify(text or "", lowercase=True, replacements=_REPLACEMENTS)


class SlugGenerator:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._product_repo = product_repo
        self._category_repo = category_repo
        self._max_attempts = max_attempts

    def unique_product_slug(self, name: str, candidate_slug: str | None = None) -> str:
        """Return the first free product slug for ``name``/``candidate_slug``."""
        base = self._base_slug(name, candidate_slug)
        return self._first_free(
            base, lambda slug: self._product_repo.get_by_slug(slug) is not None
        )

    def unique_category_slug(
        self,
        name: str,
        candidate_slug: str | None = None,
        exclude_id: int | None = None,
    ) -> str:
        """Return the first free category slug.

        ``exclude_id`` lets a category keep its own slug when renamed.
        """
        base = self._base_slug(name, candidate_slug)
        return self._first_free(
            base,
            lambda slug: self._category_repo.get_by_slug(slug, exclude_id=exclude_id)
            is not None,
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _base_slug(name: str, candidate_slug: str | None) -> str:
        source = candidate_slug if candidate_slug and candidate_slug.strip() else name
        base = generate_slug(source)
        if not base:
            raise ValidationError(f"Cannot derive a slug from {source!r}")
        return base

    def _first_free(self, base: str, is_taken: Callable[[str], bool]) -> str:
        slug = base
        for attempt in range(1, self._max_attempts + 1):
            if not is_taken(slug):
                return slug
            logger.debug("Slug taken, probing next suffix", slug=slug, attempt=attempt)
            slug = f"{base}-{attempt}"

        logger.warning(
            "Numbered slug suffixes exhausted, falling back to random suffix",
            base=base,
            max_attempts=self._max_attempts,
        )
        for _ in range(RANDOM_SUFFIX_ATTEMPTS):
            slug = f"{base}-{secrets.token_hex(3)}"
            if not is_taken(slug):
                return slug

        raise SlugConflictError(f"Could not find a free slug for '{base}'")
