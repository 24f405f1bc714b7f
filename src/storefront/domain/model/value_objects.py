"""Money and Quantity, the value objects shared by carts and orders.

Both are frozen and validate on construction, so an instance that exists
is always usable in a total.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "SEK"
_CENT = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Arithmetic never rounds; call ``rounded()`` where a figure is stored or
    shown.  Mixing currencies raises instead of converting.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Invalid money amount: {self.amount}")
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    @classmethod
    def of(
        cls, amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY
    ) -> Money:
        """Build from user input; floats go through ``str`` to keep 0.1 exact."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal("0.00"), currency)

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._same_currency(other).amount
        if difference < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(difference, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def rounded(self) -> Money:
        """Half-up to whole cents."""
        return Money(self.amount.quantize(_CENT, rounding=ROUND_HALF_UP), self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return other


@dataclass(frozen=True)
class Quantity:
    """Units of one product on an order line; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
