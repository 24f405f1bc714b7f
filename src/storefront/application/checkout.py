"""Application service: Checkout use case.

Turns a session's cart into a PENDING order.  Prices are re-read from the
catalog (the cart's prices are only a display snapshot), tax and shipping
come from the configured ``PricingRules``, and stock is deducted for
products that manage it.

Stock is handled in two phases, like any multi-product reservation:
validate every product first, then deduct and persist, so a shortage on
one line never leaves the others half-deducted.
"""

from __future__ import annotations

import time

import structlog

from storefront.application.dto import CustomerDetails, OrderDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_ledger import compute_totals, generate_order_number
from storefront.domain.service.pricing_rules import PricingRules

logger = structlog.get_logger(__name__)

ORDER_NUMBER_ATTEMPTS = 10


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        pricing: PricingRules | None = None,
        order_number_prefix: str = "WB",
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._pricing = pricing or PricingRules()
        self._order_number_prefix = order_number_prefix

    def handle(
        self,
        session_id: str,
        customer: CustomerDetails,
        discount: str | None = None,
    ) -> OrderDTO:
        cart = self._cart_repo.get(session_id)
        if cart.is_empty:
            raise ValidationError("Cannot check out an empty cart")

        # Phase 1: resolve products and validate stock
        products: dict[str, Product] = {}
        demand: dict[str, int] = {}
        lines: list[OrderLineItem] = []
        for item in cart.items:
            product = products.get(item.product_id) or self._product_repo.get_by_id(
                item.product_id
            )
            if product is None:
                raise EntityNotFoundError(
                    f"Product with ID {item.product_id} not found"
                )
            products[product.id] = product
            demand[product.id] = demand.get(product.id, 0) + item.quantity
            lines.append(
                OrderLineItem(
                    product_id=product.id,
                    name=product.name,
                    quantity=Quantity(item.quantity),
                    unit_price=product.price,  # <-- price snapshot
                    size=item.size,
                    options={"size": item.size} if item.size else {},
                )
            )

        for product_id, quantity in demand.items():
            product = products[product_id]
            if product.enable_stock_management and quantity > (product.stock_quantity or 0):
                raise ValidationError(f'Not enough stock for product "{product.name}"')

        currency = self._pricing.currency
        subtotal = compute_totals(lines, Money.zero(currency), Money.zero(currency)).subtotal
        order = Order.create(
            order_number=self._next_order_number(),
            customer_name=customer.name,
            customer_email=customer.email,
            shipping_address=customer.shipping_address,
            items=lines,
            tax=self._pricing.tax_for(subtotal),
            shipping=self._pricing.shipping_for(subtotal),
            discount=Money.of(discount, currency) if discount else None,
            currency=currency,
            customer_phone=customer.phone,
            billing_address=customer.billing_address,
            customer_note=customer.note,
            payment_method=customer.payment_method,
        )

        # Phase 2: deduct stock and persist
        for product_id, quantity in demand.items():
            product = products[product_id]
            product.deduct_stock(quantity)
            self._product_repo.save(product)

        self._order_repo.save(order)
        cart.clear()
        self._cart_repo.save(session_id, cart)

        logger.info(
            "Order placed",
            order_id=order.id,
            order_number=order.order_number,
            total=str(order.total),
            session_id=session_id,
        )
        return OrderDTO.from_order(order)

    def _next_order_number(self) -> str:
        now_ms = time.time_ns() // 1_000_000
        for offset in range(ORDER_NUMBER_ATTEMPTS):
            number = generate_order_number(self._order_number_prefix, now_ms + offset)
            if self._order_repo.get_by_order_number(number) is None:
                return number
        raise ValidationError("Could not allocate a unique order number")
