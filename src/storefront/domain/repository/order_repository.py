"""Storage contract for placed orders."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """ID the next new order will receive."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """The order with this ID, or None."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its human-readable number, or None."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Insert or replace; assigns an ID to a new order."""
