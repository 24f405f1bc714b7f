"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.create_product import CreateProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.service.order_ledger import format_currency
from storefront.infrastructure.bootstrap import category_repository, product_repository
from storefront.infrastructure.config import get_settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 149.00).")
@click.option("--slug", default=None, help="Slug candidate (defaults to the name).")
@click.option("--stock", "stock_quantity", type=int, default=None, help="Units in stock.")
@click.option(
    "--manage-stock/--no-manage-stock",
    default=False,
    help="Enforce stock levels for this product.",
)
@click.option("--category", "category_ids", type=int, multiple=True, help="Category ID.")
def product_add(
    name: str,
    price: str,
    slug: str | None,
    stock_quantity: int | None,
    manage_stock: bool,
    category_ids: tuple[int, ...],
) -> None:
    """Add a new product to the catalog."""
    settings = get_settings()
    handler = CreateProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
        slug_max_attempts=settings.slug_max_attempts,
        currency=settings.currency,
    )

    try:
        product = handler.handle(
            name=name,
            price=price,
            slug=slug,
            stock_quantity=stock_quantity,
            enable_stock_management=manage_stock,
            category_ids=list(category_ids),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added as '{product.slug}' "
        f"at {format_currency(product.price, locale=settings.locale)}"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    locale = get_settings().locale
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Slug':<28} {'Price':>14} {'Stock':>7}  Status")
    click.echo("-" * 72)
    for p in products:
        stock = p.stock_quantity if p.enable_stock_management else "-"
        click.echo(
            f"{p.id:<6} {p.slug:<28} {format_currency(p.price, locale=locale):>14} "
            f"{stock!s:>7}  {p.stock_status.value}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name (recomputes the slug).")
@click.option("--slug", default=None, help="New slug candidate.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", "stock_quantity", type=int, default=None, help="Units in stock.")
@click.option(
    "--manage-stock/--no-manage-stock",
    default=None,
    help="Turn stock management on or off.",
)
@click.option("--category", "category_ids", type=int, multiple=True, help="Category ID.")
def product_update(
    product_id: str,
    name: str | None,
    slug: str | None,
    price: str | None,
    stock_quantity: int | None,
    manage_stock: bool | None,
    category_ids: tuple[int, ...],
) -> None:
    """Update a product."""
    settings = get_settings()
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
        slug_max_attempts=settings.slug_max_attempts,
    )

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            slug=slug,
            price=price,
            stock_quantity=stock_quantity,
            enable_stock_management=manage_stock,
            category_ids=list(category_ids) or None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated ('{product.slug}')")
