"""Money and Quantity, the two value types the ledger arithmetic runs on."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from cafe_ledger.domain.exceptions import InvalidQuantityError, ValidationError

CENT = Decimal("0.01")

_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount tagged with an ISO currency code.

    Prices, sale totals and product revenue are all Money.  Amounts keep
    full Decimal precision; only ``str()`` rounds, to whole cents.
    Mixing currencies in arithmetic or comparisons is an error.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @classmethod
    def of(cls, amount: str | int | Decimal, currency: str = "USD") -> Money:
        """Build Money from user or snapshot input (``" 3.50"``, ``4``, ``Decimal``)."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str = "USD") -> Money:
        return cls(Decimal("0"), currency)

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __sub__(self, other: Money) -> Money:
        remainder = self.amount - self._amount_of(other)
        if remainder < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(remainder, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def per_unit(self, count: int) -> Money:
        """Split this amount evenly over ``count`` units.

        The share is rounded to whole cents when that rounding still adds
        back up to exactly this amount; otherwise the exact quotient is kept.
        """
        share = self.amount / count
        rounded = share.quantize(CENT)
        return Money(rounded if rounded * count == self.amount else share, self.currency)

    def __str__(self) -> str:
        cents = self.amount.quantize(CENT, rounding=ROUND_HALF_UP)
        symbol = _SYMBOLS.get(self.currency)
        if symbol is None:
            return f"{cents} {self.currency}"
        return f"{symbol}{cents}"

    def _amount_of(self, other: Money) -> Decimal:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other.amount


@dataclass(frozen=True)
class Quantity:
    """A whole, positive number of units."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise InvalidQuantityError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
