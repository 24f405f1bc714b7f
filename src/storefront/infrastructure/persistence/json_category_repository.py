"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.exceptions import SlugConflictError
from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- CategoryRepository interface -----------------------------------------

    def get_by_id(self, category_id: int) -> Category | None:
        for raw in self._file.load():
            if raw["id"] == category_id:
                return self._to_domain(raw)
        return None

    def get_by_slug(self, slug: str, exclude_id: int | None = None) -> Category | None:
        for raw in self._file.load():
            if raw["slug"] == slug and raw["id"] != exclude_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Category]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, category: Category) -> None:
        records = self._file.load()
        for raw in records:
            if raw["slug"] == category.slug and raw["id"] != category.id:
                raise SlugConflictError(
                    f"Category slug '{category.slug}' is already taken"
                )

        if category.id is None:
            category.id = max((raw["id"] for raw in records), default=0) + 1

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(records):
            if raw["id"] == category.id:
                records[i] = self._to_raw(category)
                break
        else:
            records.append(self._to_raw(category))
        self._file.persist(records)

    def delete(self, category_id: int) -> None:
        now = datetime.now(timezone.utc).isoformat()
        records = []
        for raw in self._file.load():
            if raw["id"] == category_id:
                continue
            if raw["parent_id"] == category_id:
                raw["parent_id"] = None
                raw["updated_at"] = now
            records.append(raw)
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "slug": category.slug,
            "parent_id": category.parent_id,
            "description": category.description,
            "seo_title": category.seo_title,
            "seo_description": category.seo_description,
            "seo_keywords": category.seo_keywords,
            "created_at": category.created_at.isoformat(),
            "updated_at": category.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            slug=raw["slug"],
            parent_id=raw.get("parent_id"),
            description=raw.get("description"),
            seo_title=raw.get("seo_title"),
            seo_description=raw.get("seo_description"),
            seo_keywords=raw.get("seo_keywords"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
