"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CustomerDetails:
    """Input: who is checking out and where the parcel goes."""

    name: str
    email: str
    shipping_address: str
    phone: str | None = None
    billing_address: str | None = None
    note: str | None = None
    payment_method: str | None = None


@dataclass(frozen=True)
class CartLineDTO:
    cart_item_id: str
    product_id: str
    name: str
    size: str
    quantity: int
    price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    items: list[CartLineDTO]
    item_count: int
    total_amount: str

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            items=[
                CartLineDTO(
                    cart_item_id=line.identity,
                    product_id=line.product_id,
                    name=line.name,
                    size=line.size,
                    quantity=line.quantity,
                    price=str(line.price),
                    line_total=str(line.line_total.rounded()),
                )
                for line in cart.items
            ],
            item_count=cart.item_count,
            total_amount=str(cart.total_amount),
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    name: str
    size: str
    quantity: int
    unit_price: str  # formatted, e.g. "149.00 SEK"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    status: str
    customer_name: str
    customer_email: str
    items: list[OrderLineItemDTO]
    subtotal: str
    tax: str
    shipping: str
    discount: str | None
    total: str
    created_at: str
    admin_note: str | None = None
    paid_at: str | None = None
    shipped_at: str | None = None
    closed: bool = False  # no further fulfilment expected

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            status=order.status.value,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            items=[
                OrderLineItemDTO(
                    name=item.name,
                    size=item.size,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total.rounded()),
                )
                for item in order.items
            ],
            subtotal=str(order.subtotal),
            tax=str(order.tax),
            shipping=str(order.shipping),
            discount=str(order.discount) if order.discount is not None else None,
            total=str(order.total),
            created_at=_stamp(order.created_at),
            admin_note=order.admin_note,
            paid_at=_stamp(order.paid_at) if order.paid_at else None,
            shipped_at=_stamp(order.shipped_at) if order.shipped_at else None,
            closed=order.status.is_terminal,
        )


@dataclass(frozen=True)
class OrderStatisticsDTO:
    total_orders: int
    total_revenue: str
    average_order_value: str
    pending_orders: int
    completed_orders: int
    recent_orders: list[OrderDTO] = field(default_factory=list)


def _stamp(moment) -> str:
    return moment.strftime("%Y-%m-%d %H:%M UTC")
