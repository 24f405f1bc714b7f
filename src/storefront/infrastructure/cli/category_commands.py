"""CLI commands for the category tree."""

from __future__ import annotations

import click

from storefront.application.create_category import CreateCategoryHandler
from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.show_categories import ShowCategoriesHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.service.category_tree import SEPARATOR, TreeNode
from storefront.infrastructure.bootstrap import category_repository, product_repository
from storefront.infrastructure.config import get_settings


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--slug", default=None, help="Slug candidate (defaults to the name).")
@click.option("--parent", "parent_id", type=int, default=None, help="Parent category ID.")
@click.option("--description", default=None)
def category_add(
    name: str, slug: str | None, parent_id: int | None, description: str | None
) -> None:
    """Create a category."""
    handler = CreateCategoryHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
        slug_max_attempts=get_settings().slug_max_attempts,
    )

    try:
        created = handler.handle(
            name=name, slug=slug, parent_id=parent_id, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{created.id} '{created.name}' created as '{created.slug}'")


@click.command("update")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
@click.option("--name", default=None, help="New name (recomputes the slug).")
@click.option("--slug", default=None, help="New slug candidate.")
@click.option("--parent", "parent_id", type=int, default=None, help="New parent ID.")
@click.option("--root", is_flag=True, default=False, help="Detach to the top level.")
@click.option("--description", default=None)
@click.option("--seo-title", default=None)
@click.option("--seo-description", default=None)
@click.option("--seo-keywords", default=None)
def category_update(
    category_id: int,
    name: str | None,
    slug: str | None,
    parent_id: int | None,
    root: bool,
    description: str | None,
    seo_title: str | None,
    seo_description: str | None,
    seo_keywords: str | None,
) -> None:
    """Rename, move or describe a category."""
    if root and parent_id is not None:
        raise click.ClickException("--root and --parent are mutually exclusive")

    handler = UpdateCategoryHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
        slug_max_attempts=get_settings().slug_max_attempts,
    )
    kwargs = {}
    if root:
        kwargs["parent_id"] = None
    elif parent_id is not None:
        kwargs["parent_id"] = parent_id

    try:
        updated = handler.handle(
            category_id,
            name=name,
            slug=slug,
            description=description,
            seo_title=seo_title,
            seo_description=seo_description,
            seo_keywords=seo_keywords,
            **kwargs,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{updated.id} updated ('{updated.slug}')")


@click.command("delete")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
def category_delete(category_id: int) -> None:
    """Delete a category; its children move to the top level."""
    handler = DeleteCategoryHandler(category_repo=category_repository())

    try:
        handler.handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category_id} deleted.")


def _echo_node(node: TreeNode, depth: int) -> None:
    click.echo(f"{'  ' * depth}- {node.name} ({node.slug}, #{node.id})")
    for child in node.children:
        _echo_node(child, depth + 1)


@click.command("tree")
def category_tree() -> None:
    """Show the category hierarchy."""
    handler = ShowCategoriesHandler(category_repo=category_repository())

    try:
        roots = handler.tree()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not roots:
        click.echo("No categories found.")
        return
    for node in roots:
        _echo_node(node, 0)


@click.command("list")
@click.option("--search", default=None, help="Filter by name, slug or ID.")
def category_list(search: str | None) -> None:
    """List categories flat, parents before children."""
    handler = ShowCategoriesHandler(category_repo=category_repository())

    try:
        entries = handler.flat(search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Slug':<28} Name")
    click.echo("-" * 60)
    for entry in entries:
        click.echo(f"{entry.id!s:<6} {entry.slug:<28} {entry.name}")


@click.command("breadcrumb")
@click.argument("slug")
def category_breadcrumb(slug: str) -> None:
    """Show the path from the top level down to a category."""
    handler = ShowCategoriesHandler(category_repo=category_repository())

    try:
        crumbs = handler.breadcrumb(slug)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(SEPARATOR.join(crumb.name for crumb in crumbs))
