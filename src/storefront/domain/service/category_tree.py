"""Domain service: Category Tree.

Builds nested and flattened views over the flat category list, and
reconstructs breadcrumb trails.  Everything here is a pure function of its
input, so it is safe to call from several threads on the same list.

Children are found by grouping on ``parent_id``; categories never hold
references to each other.  Every traversal keeps the set of ancestors on
the current path and raises ``CategoryCycleError`` instead of recursing
forever on corrupt data.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Iterable

from storefront.domain.exceptions import CategoryCycleError, EntityNotFoundError
from storefront.domain.model.category import Category

SEPARATOR = " → "


@dataclass
class TreeNode:
    category: Category
    children: list[TreeNode] = field(default_factory=list)

    @property
    def id(self) -> int | None:
        return self.category.id

    @property
    def name(self) -> str:
        return self.category.name

    @property
    def slug(self) -> str:
        return self.category.slug


@dataclass(frozen=True)
class FlatCategory:
    """A category in a pre-order listing, named after its ancestor chain."""

    id: int | None
    name: str
    slug: str
    parent_id: int | None
    depth: int


@dataclass(frozen=True)
class Crumb:
    name: str
    slug: str


def _group_by_parent(categories: Iterable[Category]) -> dict[int | None, list[Category]]:
    groups: dict[int | None, list[Category]] = defaultdict(list)
    for category in categories:
        groups[category.parent_id].append(category)
    return groups


def _children_of(
    category: Category, groups: dict[int | None, list[Category]]
) -> list[Category]:
    # An unsaved category has no id, so nothing can point at it.
    if category.id is None:
        return []
    return groups.get(category.id, [])


def build_tree(categories: Iterable[Category]) -> list[TreeNode]:
    """Nest categories under their parents; roots have ``parent_id is None``.

    Siblings keep their input order.  Categories whose parent is missing
    from the input are not reachable from a root and are left out.
    """
    categories = list(categories)
    cycle = find_cycle(categories)
    if cycle:
        raise CategoryCycleError(
            "Category parent cycle: " + " -> ".join(f"#{cid}" for cid in cycle)
        )
    groups = _group_by_parent(categories)

    def build(category: Category, ancestors: frozenset[int | None]) -> TreeNode:
        if category.id in ancestors:
            raise CategoryCycleError(
                f"Category '{category.slug}' (#{category.id}) is its own ancestor"
            )
        path = ancestors | {category.id}
        return TreeNode(
            category=category,
            children=[build(child, path) for child in _children_of(category, groups)],
        )

    return [build(root, frozenset()) for root in groups.get(None, [])]


def flatten_nodes(
    nodes: Iterable[TreeNode], prefix: str = "", depth: int = 0
) -> list[FlatCategory]:
    flat: list[FlatCategory] = []
    for node in nodes:
        name = f"{prefix}{SEPARATOR}{node.name}" if prefix else node.name
        flat.append(
            FlatCategory(
                id=node.id,
                name=name,
                slug=node.slug,
                parent_id=node.category.parent_id,
                depth=depth,
            )
        )
        flat.extend(flatten_nodes(node.children, name, depth + 1))
    return flat


def flatten(categories: Iterable[Category], root_name: str | None = None) -> list[FlatCategory]:
    """Pre-order listing with display names like ``Parent → Child``.

    Every parent immediately precedes its children.  ``root_name``, when
    given, is prefixed to every entry.
    """
    return flatten_nodes(build_tree(categories), prefix=root_name or "")


def filter_by_term(flat: list[FlatCategory], term: str | None) -> list[FlatCategory]:
    """Case-insensitive match on display name or slug, or a substring of the id."""
    if not term:
        return flat
    needle = term.lower()
    return [
        entry
        for entry in flat
        if needle in entry.name.lower()
        or needle in entry.slug.lower()
        or needle in str(entry.id)
    ]


def breadcrumb(
    leaf: Category, lookup: Callable[[int], Category | None]
) -> list[Crumb]:
    """Root-first trail from the top-level ancestor down to ``leaf``.

    ``lookup`` resolves a parent id; the walk stops at a category without a
    parent or whose parent cannot be resolved.
    """
    trail: list[Crumb] = []
    seen: set[int | None] = set()
    current: Category | None = leaf
    while current is not None:
        if current.id in seen:
            raise CategoryCycleError(
                f"Category '{current.slug}' (#{current.id}) is its own ancestor"
            )
        seen.add(current.id)
        trail.append(Crumb(name=current.name, slug=current.slug))
        current = lookup(current.parent_id) if current.parent_id is not None else None
    trail.reverse()
    return trail


def find_cycle(categories: Iterable[Category]) -> list[int] | None:
    """Return the ids forming a parent cycle, or None for a valid forest."""
    parents = {c.id: c.parent_id for c in categories}
    verified: set[int | None] = set()
    for start in parents:
        path: list[int] = []
        on_path: set[int] = set()
        current = start
        while current is not None and current in parents and current not in verified:
            if current in on_path:
                return path[path.index(current):]
            on_path.add(current)
            path.append(current)
            current = parents[current]
        verified.update(path)
    return None


def assert_can_reparent(
    categories: Iterable[Category], category_id: int, new_parent_id: int | None
) -> None:
    """Reject a move that would reference a missing parent or close a cycle."""
    if new_parent_id is None:
        return
    parents = {c.id: c.parent_id for c in categories}
    if new_parent_id not in parents:
        raise EntityNotFoundError(f"Parent category #{new_parent_id} not found")

    current: int | None = new_parent_id
    seen: set[int] = set()
    while current is not None and current not in seen:
        if current == category_id:
            raise CategoryCycleError(
                f"Moving category #{category_id} under #{new_parent_id} "
                f"would make it its own ancestor"
            )
        seen.add(current)
        current = parents.get(current)
