"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        orders = self._file.load()

        if order.id is None:
            order.id = self.next_id()

        record = self._to_raw(order)
        positions = {raw["id"]: i for i, raw in enumerate(orders)}
        if order.id in positions:
            orders[positions[order.id]] = record
        else:
            orders.append(record)
        self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status.value,
            "currency": order.currency,
            "subtotal": str(order.subtotal.amount),
            "tax": str(order.tax.amount),
            "shipping": str(order.shipping.amount),
            "discount": str(order.discount.amount) if order.discount is not None else None,
            "total": str(order.total.amount),
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "customer_phone": order.customer_phone,
            "shipping_address": order.shipping_address,
            "billing_address": order.billing_address,
            "customer_note": order.customer_note,
            "admin_note": order.admin_note,
            "payment_method": order.payment_method,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "paid_at": order.paid_at.isoformat() if order.paid_at else None,
            "shipped_at": order.shipped_at.isoformat() if order.shipped_at else None,
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "size": item.size,
                    "options": item.options,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw["currency"]

        def money(value: str | None) -> Money | None:
            return Money(Decimal(value), currency) if value is not None else None

        def moment(value: str | None) -> datetime | None:
            return datetime.fromisoformat(value) if value else None

        items = [
            OrderLineItem(
                product_id=i["product_id"],
                name=i["name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                size=i.get("size", ""),
                options=i.get("options", {}),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            status=OrderStatus(raw["status"]),
            items=items,
            subtotal=money(raw["subtotal"]),  # type: ignore[arg-type]
            tax=money(raw["tax"]),  # type: ignore[arg-type]
            shipping=money(raw["shipping"]),  # type: ignore[arg-type]
            discount=money(raw.get("discount")),
            total=money(raw["total"]),  # type: ignore[arg-type]
            currency=currency,
            customer_name=raw["customer_name"],
            customer_email=raw["customer_email"],
            customer_phone=raw.get("customer_phone"),
            shipping_address=raw["shipping_address"],
            billing_address=raw.get("billing_address"),
            customer_note=raw.get("customer_note"),
            admin_note=raw.get("admin_note"),
            payment_method=raw.get("payment_method", "pending"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            paid_at=moment(raw.get("paid_at")),
            shipped_at=moment(raw.get("shipped_at")),
        )
