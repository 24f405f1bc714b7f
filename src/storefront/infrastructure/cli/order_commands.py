"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import CustomerDetails, OrderDTO
from storefront.application.order_statistics import OrderStatisticsHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    pricing_rules,
    product_repository,
)
from storefront.infrastructure.config import get_settings


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    closed = ", closed" if dto.closed else ""
    click.echo(f"Order {dto.order_number} (#{dto.id}, status={dto.status}{closed})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Created:  {dto.created_at}")
    if dto.paid_at:
        click.echo(f"Paid:     {dto.paid_at}")
    if dto.shipped_at:
        click.echo(f"Shipped:  {dto.shipped_at}")
    if dto.admin_note:
        click.echo(f"Note:     {dto.admin_note}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Size':<5} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*62}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.size:<5} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*62}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>35}")
    click.echo(f"  {'Tax':<27} {dto.tax:>35}")
    click.echo(f"  {'Shipping':<27} {dto.shipping:>35}")
    if dto.discount:
        click.echo(f"  {'Discount':<27} {'-' + dto.discount:>35}")
    click.echo(f"  {'Order Total':<27} {dto.total:>35}")


@click.command("checkout")
@click.option("--session", "session_id", default="default", show_default=True)
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer e-mail.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--phone", default=None)
@click.option("--billing-address", default=None)
@click.option("--note", default=None, help="Customer note.")
@click.option("--payment-method", default=None)
@click.option("--discount", default=None, help="Discount amount (e.g. 50.00).")
def order_checkout(
    session_id: str,
    name: str,
    email: str,
    address: str,
    phone: str | None,
    billing_address: str | None,
    note: str | None,
    payment_method: str | None,
    discount: str | None,
) -> None:
    """Place an order from the session's cart."""
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        order_repo=order_repository(),
        pricing=pricing_rules(),
        order_number_prefix=get_settings().order_number_prefix,
    )
    customer = CustomerDetails(
        name=name,
        email=email,
        shipping_address=address,
        phone=phone,
        billing_address=billing_address,
        note=note,
        payment_method=payment_method,
    )

    try:
        dto = handler.handle(session_id, customer, discount=discount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID.")
@click.option("--number", "order_number", default=None, help="Order number (e.g. WB-12345678).")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.ClickException("Give exactly one of --id or --number")

    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id) if order_id is not None else handler.by_number(order_number)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
)
@click.option("--note", default=None, help="Admin note.")
def order_status(order_id: int, new_status: str, note: str | None) -> None:
    """Set an order's status."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        enforce_transitions=get_settings().strict_status_transitions,
    )

    try:
        dto = handler.handle(order_id, new_status, admin_note=note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("stats")
def order_stats() -> None:
    """Show order statistics for the admin dashboard."""
    settings = get_settings()
    stats = OrderStatisticsHandler(order_repository(), settings.currency).handle()

    click.echo(f"Total orders:        {stats.total_orders}")
    click.echo(f"Total revenue:       {stats.total_revenue}")
    click.echo(f"Average order value: {stats.average_order_value}")
    click.echo(f"Pending orders:      {stats.pending_orders}")
    click.echo(f"Completed orders:    {stats.completed_orders}")
    if stats.recent_orders:
        click.echo()
        click.echo("Recent orders:")
        for dto in stats.recent_orders:
            click.echo(f"  {dto.order_number:<12} {dto.status:<11} {dto.total:>14}")
