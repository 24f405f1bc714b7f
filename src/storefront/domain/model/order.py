"""Order aggregate: the persisted result of a checkout.

The Order owns its line items and the monetary breakdown captured at
checkout.  After creation only the status and the notes change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
        OrderStatus.REFUNDED,
        OrderStatus.FAILED,
    }
)

# Only consulted when transitions are enforced; by default an administrator
# may move an order from any status to any other.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {
            OrderStatus.PROCESSING,
            OrderStatus.ON_HOLD,
            OrderStatus.COMPLETED,
            OrderStatus.CANCELLED,
            OrderStatus.FAILED,
        }
    ),
    OrderStatus.PROCESSING: frozenset(
        {
            OrderStatus.ON_HOLD,
            OrderStatus.COMPLETED,
            OrderStatus.CANCELLED,
            OrderStatus.REFUNDED,
            OrderStatus.FAILED,
        }
    ),
    OrderStatus.ON_HOLD: frozenset(
        {
            OrderStatus.PENDING,
            OrderStatus.PROCESSING,
            OrderStatus.CANCELLED,
            OrderStatus.FAILED,
        }
    ),
    OrderStatus.COMPLETED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.FAILED: frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderLineItem:
    """Captures the price of a product at checkout time."""

    product_id: str
    name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout
    size: str = ""
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it validates the
    customer details and computes the totals.  The ``__init__`` stays
    simple so the repository can reconstitute persisted orders as-is.
    """

    id: int | None
    order_number: str
    items: list[OrderLineItem]
    subtotal: Money
    tax: Money
    shipping: Money
    total: Money
    customer_name: str
    customer_email: str
    shipping_address: str
    discount: Money | None = None
    currency: str = DEFAULT_CURRENCY
    status: OrderStatus = OrderStatus.PENDING
    customer_phone: str | None = None
    billing_address: str | None = None
    customer_note: str | None = None
    admin_note: str | None = None
    payment_method: str = "pending"
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    paid_at: datetime | None = None
    shipped_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        customer_name: str,
        customer_email: str,
        shipping_address: str,
        items: list[OrderLineItem],
        tax: Money,
        shipping: Money,
        discount: Money | None = None,
        *,
        currency: str = DEFAULT_CURRENCY,
        customer_phone: str | None = None,
        billing_address: str | None = None,
        customer_note: str | None = None,
        payment_method: str | None = None,
    ) -> Order:
        """Create a new PENDING order, enforcing all invariants."""
        from storefront.domain.service.order_ledger import compute_totals

        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not customer_email or not customer_email.strip():
            raise ValidationError("Customer e-mail is required")
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        totals = compute_totals(items, tax, shipping, discount)

        return Order(
            id=None,
            order_number=order_number,
            items=list(items),
            subtotal=totals.subtotal,
            tax=tax,
            shipping=shipping,
            discount=discount,
            total=totals.total,
            currency=currency,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            shipping_address=shipping_address.strip(),
            customer_phone=customer_phone or None,
            billing_address=billing_address or None,
            customer_note=customer_note or None,
            payment_method=payment_method or "pending",
        )

    # --- Administrative mutations ---------------------------------------------

    def update_status(
        self, new_status: OrderStatus, *, enforce_transitions: bool = False
    ) -> None:
        """Replace the status.

        Any status may follow any other unless ``enforce_transitions`` is
        set, in which case ``ALLOWED_TRANSITIONS`` is applied.  Completing
        an order stamps ``shipped_at``; completing or processing it stamps
        ``paid_at``.  Existing stamps are never overwritten.
        """
        if (
            enforce_transitions
            and new_status != self.status
            and new_status not in ALLOWED_TRANSITIONS[self.status]
        ):
            raise ValidationError(
                f"Cannot move order {self.order_number} from "
                f"{self.status.value} to {new_status.value}"
            )

        now = _now()
        if new_status == OrderStatus.COMPLETED and self.shipped_at is None:
            self.shipped_at = now
        if (
            new_status in (OrderStatus.COMPLETED, OrderStatus.PROCESSING)
            and self.paid_at is None
        ):
            self.paid_at = now

        self.status = new_status
        self.updated_at = now

    def set_admin_note(self, note: str | None) -> None:
        self.admin_note = note or None
        self.updated_at = _now()

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
