"""Store-side backstop for slug uniqueness.

The probe in ``SlugGenerator`` and the later save are not atomic.  When the
repository reports that another record claimed the slug in between, a new
slug is generated and the save retried a bounded number of times.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import structlog

from storefront.domain.exceptions import SlugConflictError

logger = structlog.get_logger(__name__)

STORE_CONFLICT_RETRIES = 3

T = TypeVar("T")


def save_claiming_slug(
    entity: T,
    make_slug: Callable[[], str],
    save: Callable[[T], None],
    retries: int = STORE_CONFLICT_RETRIES,
) -> None:
    for attempt in range(1, retries + 1):
        entity.slug = make_slug()  # type: ignore[attr-defined]
        try:
            save(entity)
            return
        except SlugConflictError:
            if attempt == retries:
                raise
            logger.warning(
                "Slug claimed concurrently, regenerating",
                slug=entity.slug,  # type: ignore[attr-defined]
                attempt=attempt,
            )
