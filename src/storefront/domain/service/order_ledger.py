"""Domain service: Order Ledger.

Pure monetary computations for orders: totals, display formatting,
order numbers and the admin dashboard summary.  Nothing here touches a
repository.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Protocol

from babel.numbers import format_currency as _babel_format_currency

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money

DEFAULT_LOCALE = "sv_SE"
REVENUE_STATUSES = (OrderStatus.COMPLETED, OrderStatus.PROCESSING)
RECENT_ORDERS = 5


class Priced(Protocol):
    @property
    def line_total(self) -> Money: ...


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    total: Money


def compute_totals(
    items: Iterable[Priced],
    tax: Money,
    shipping: Money,
    discount: Money | None = None,
) -> OrderTotals:
    """``subtotal = Σ line totals``; ``total = subtotal + tax + shipping - discount``.

    The currency is carried along, never converted.
    """
    subtotal = Money.zero(tax.currency)
    for item in items:
        subtotal = subtotal + item.line_total

    gross = subtotal + tax + shipping
    if discount is not None:
        if discount > gross:
            raise ValidationError(f"Discount {discount} exceeds order amount {gross}")
        gross = gross - discount

    return OrderTotals(subtotal=subtotal.rounded(), total=gross.rounded())


def format_currency(
    amount: Money | Decimal | float | int,
    currency: str | None = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Locale-aware display string with two fraction digits.

    For display only; never parse the result back into an amount.
    """
    if isinstance(amount, Money):
        currency = currency or amount.currency
        amount = amount.amount
    return _babel_format_currency(
        Decimal(str(amount)),
        currency or DEFAULT_CURRENCY,
        locale=locale,
        currency_digits=False,
    )


def generate_order_number(prefix: str = "WB", now_ms: int | None = None) -> str:
    """``<prefix>-`` followed by the last eight digits of the epoch-ms clock."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{prefix}-{str(now_ms)[-8:]}"


@dataclass(frozen=True)
class OrderStatistics:
    total_orders: int
    total_revenue: Money
    average_order_value: Money
    pending_orders: int
    completed_orders: int
    recent_orders: list[Order] = field(default_factory=list)


def summarize(
    orders: Iterable[Order], currency: str = DEFAULT_CURRENCY
) -> OrderStatistics:
    """Dashboard figures.

    Revenue counts COMPLETED and PROCESSING orders only, while the average
    divides that revenue by the number of all orders.
    """
    orders = list(orders)
    revenue = Money.zero(currency)
    pending = completed = 0
    for order in orders:
        if order.status in REVENUE_STATUSES:
            revenue = revenue + order.total
        if order.status == OrderStatus.PENDING:
            pending += 1
        elif order.status == OrderStatus.COMPLETED:
            completed += 1

    if orders:
        average = Money(revenue.amount / len(orders), currency).rounded()
    else:
        average = Money.zero(currency)

    recent = sorted(orders, key=lambda o: o.created_at, reverse=True)[:RECENT_ORDERS]
    return OrderStatistics(
        total_orders=len(orders),
        total_revenue=revenue.rounded(),
        average_order_value=average,
        pending_orders=pending,
        completed_orders=completed,
        recent_orders=recent,
    )
