"""Product aggregate: catalogue entry plus its running sales statistics.

Products own the authoritative stock level, ``total_sold`` and
``revenue``. Only the ledger service moves those three together; direct
edits from product management touch name, price and quantity only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from cafe_ledger.domain.exceptions import (
    InsufficientStockError,
    InvalidAmountError,
    ValidationError,
)
from cafe_ledger.domain.model.value_objects import Money

DEFAULT_LOW_STOCK_THRESHOLD = 5


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Product:
    """A sellable item in the café catalogue.

    Invariants:
    - ``quantity`` and ``total_sold`` are never negative
    - ``revenue`` equals the sum of totals of the active sales
      referencing this product (maintained by the ledger service)
    """

    id: str
    name: str
    price: Money
    quantity: int = 0
    total_sold: int = 0
    revenue: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(product_id: str, name: str, price: Money, quantity: int) -> Product:
        """Create a new product with empty sales statistics."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not _is_int(quantity) or quantity < 0:
            raise ValidationError("Stock quantity must be a non-negative integer")
        return Product(id=product_id, name=name.strip(), price=price, quantity=quantity)

    # --- Direct edits -----------------------------------------------------------

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing sales keep the unit price they were recorded at.
        """
        if new_price.currency != self.price.currency:
            raise ValidationError(
                f"Cannot reprice {self.name} from {self.price.currency} "
                f"to {new_price.currency}"
            )
        self.price = new_price

    def set_quantity(self, quantity: int) -> None:
        """Overwrite the on-hand stock (manual stock count)."""
        if not _is_int(quantity) or quantity < 0:
            raise ValidationError("Stock quantity must be a non-negative integer")
        self.quantity = quantity

    def is_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
        return self.quantity <= threshold

    # --- Ledger movements -------------------------------------------------------

    def add_stock(self, amount: int) -> None:
        """Receive new stock. Sales statistics are unaffected."""
        if not _is_int(amount) or amount <= 0:
            raise InvalidAmountError("Stock amount must be a positive integer")
        self.quantity += amount

    def ensure_in_stock(self, quantity: int) -> None:
        if quantity > self.quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.quantity})"
            )

    def ensure_reversible(self, quantity: int, amount: Money) -> None:
        """Check that ``quantity``/``amount`` can be taken back out of the totals."""
        if quantity > self.total_sold or amount > self.revenue:
            raise ValidationError(
                f"Cannot reverse {quantity} x {self.name} ({amount}) "
                f"(only {self.total_sold} sold for {self.revenue})"
            )

    def record_sale(self, quantity: int, amount: Money) -> None:
        """Move ``quantity`` units out of stock and into the sales totals."""
        if quantity <= 0:
            raise ValidationError("Sold quantity must be positive")
        self.ensure_in_stock(quantity)
        self.quantity -= quantity
        self.total_sold += quantity
        self.revenue = self.revenue + amount

    def reverse_sale(self, quantity: int, amount: Money) -> None:
        """Return ``quantity`` units to stock and take them out of the totals."""
        if quantity <= 0:
            raise ValidationError("Returned quantity must be positive")
        self.ensure_reversible(quantity, amount)
        self.quantity += quantity
        self.total_sold -= quantity
        self.revenue = self.revenue - amount
