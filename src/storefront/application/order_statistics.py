"""Application service: Order Statistics use case (admin dashboard query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, OrderStatisticsDTO
from storefront.domain.model.value_objects import DEFAULT_CURRENCY
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.order_ledger import summarize


class OrderStatisticsHandler:

    def __init__(self, order_repo: OrderRepository, currency: str = DEFAULT_CURRENCY) -> None:
        self._order_repo = order_repo
        self._currency = currency

    def handle(self) -> OrderStatisticsDTO:
        stats = summarize(self._order_repo.list_all(), self._currency)
        return OrderStatisticsDTO(
            total_orders=stats.total_orders,
            total_revenue=str(stats.total_revenue),
            average_order_value=str(stats.average_order_value),
            pending_orders=stats.pending_orders,
            completed_orders=stats.completed_orders,
            recent_orders=[OrderDTO.from_order(o) for o in stats.recent_orders],
        )
