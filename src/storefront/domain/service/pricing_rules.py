"""Tax and shipping rules applied at checkout.

Totals are computed by the order ledger; this module only decides what
tax and shipping to charge.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money


@dataclass(frozen=True)
class PricingRules:
    tax_rate: Decimal = Decimal("0.25")
    flat_shipping: Decimal = Decimal("99")
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if self.tax_rate < 0:
            raise ValidationError("Tax rate cannot be negative")
        if self.flat_shipping < 0:
            raise ValidationError("Shipping cost cannot be negative")

    def tax_for(self, subtotal: Money) -> Money:
        return Money(subtotal.amount * self.tax_rate, subtotal.currency).rounded()

    def shipping_for(self, subtotal: Money) -> Money:
        return Money(self.flat_shipping, subtotal.currency).rounded()
