"""CLI commands for session carts."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.config import get_settings

session_option = click.option(
    "--session", "session_id", default="default", show_default=True, help="Cart session ID."
)


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'Item':<16} {'Product':<20} {'Size':<5} {'Qty':>4} {'Total':>14}")
    click.echo(f"  {'-'*63}")
    for line in dto.items:
        click.echo(
            f"  {line.cart_item_id:<16} {line.name:<20} {line.size:<5} "
            f"{line.quantity:>4} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Cart Total':<30} {dto.total_amount:>33}")


@click.command("add")
@session_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", type=int, default=1, show_default=True)
@click.option("--size", default="", help="Size variant (e.g. M).")
def cart_add(session_id: str, product_id: str, quantity: int, size: str) -> None:
    """Add a product to the cart (same product and size are merged)."""
    handler = AddToCartHandler(
        product_repo=product_repository(),
        cart_repo=cart_repository(),
        max_quantity=get_settings().cart_max_quantity,
    )

    try:
        cart = handler.handle(session_id, product_id, quantity=quantity, size=size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(CartDTO.from_cart(cart))


@click.command("update")
@session_option
@click.option("--item", "cart_item_id", required=True, help="Cart item ID.")
@click.option("--quantity", type=int, required=True, help="New quantity (0 removes).")
def cart_update(session_id: str, cart_item_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(
        product_repo=product_repository(),
        cart_repo=cart_repository(),
        max_quantity=get_settings().cart_max_quantity,
    )

    try:
        cart = handler.handle(session_id, cart_item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(CartDTO.from_cart(cart))


@click.command("remove")
@session_option
@click.option("--item", "identity", required=True, help="Cart item ID or product ID.")
def cart_remove(session_id: str, identity: str) -> None:
    """Remove a line from the cart."""
    cart = RemoveFromCartHandler(cart_repo=cart_repository()).handle(session_id, identity)
    _display_cart(CartDTO.from_cart(cart))


@click.command("show")
@session_option
def cart_show(session_id: str) -> None:
    """Show the cart."""
    _display_cart(ShowCartHandler(cart_repo=cart_repository()).handle(session_id))


@click.command("clear")
@session_option
def cart_clear(session_id: str) -> None:
    """Empty the cart."""
    ClearCartHandler(cart_repo=cart_repository()).handle(session_id)
    click.echo("Cart cleared.")
