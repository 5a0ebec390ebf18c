"""Sale aggregate: one recorded transaction against a product."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from cafe_ledger.domain.model.value_objects import Money, Quantity


@dataclass
class Sale:
    """A sale of ``quantity`` units of one product to a customer.

    ``product_name`` and ``unit_price`` are snapshots taken when the sale
    is recorded; later catalogue edits never change them.  ``total`` is
    what the product's revenue was credited with.  It starts as
    ``unit_price * quantity`` and moves by the unit price for every unit
    added or removed in ``revise()``, so a total carried over from an
    older snapshot stays exactly what was booked.
    """

    id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at recording time
    customer: str
    sale_date: date
    total: Money | None = None  # unit_price * quantity when omitted

    def __post_init__(self) -> None:
        if self.total is None:
            self.total = self.unit_price * self.quantity.value

    def revise(self, quantity: Quantity, customer: str, sale_date: date) -> None:
        delta = quantity.value - self.quantity.value
        if delta > 0:
            self.total = self.total + self.unit_price * delta
        elif delta < 0:
            self.total = self.total - self.unit_price * -delta
        self.quantity = quantity
        self.customer = customer.strip()
        self.sale_date = sale_date
