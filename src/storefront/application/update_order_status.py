"""Application service: Update Order Status use case (admin).

By default any status may replace any other, last writer wins.  Strict
transition checking is opt-in through configuration.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError as exc:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown order status '{raw}' (expected one of {allowed})"
        ) from exc


class UpdateOrderStatusHandler:

    def __init__(
        self, order_repo: OrderRepository, enforce_transitions: bool = False
    ) -> None:
        self._order_repo = order_repo
        self._enforce_transitions = enforce_transitions

    def handle(
        self,
        order_id: int,
        new_status: str | OrderStatus,
        admin_note: str | None = None,
    ) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        status = new_status if isinstance(new_status, OrderStatus) else parse_status(new_status)
        previous = order.status
        order.update_status(status, enforce_transitions=self._enforce_transitions)
        if admin_note is not None:
            order.set_admin_note(admin_note)
        self._order_repo.save(order)

        logger.info(
            "Order status updated",
            order_id=order_id,
            order_number=order.order_number,
            previous=previous.value,
            status=status.value,
        )
        return OrderDTO.from_order(order)
