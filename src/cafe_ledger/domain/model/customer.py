"""Customer aggregate for the café's customer directory.

Customers are independent of the sale ledger: a sale records the
customer's name as free text and never references this record.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from cafe_ledger.domain.exceptions import ValidationError


@dataclass
class Customer:

    id: str
    name: str
    email: str
    phone: str
    address: str = ""
    loyalty_points: int = 0
    birthday: date | None = None

    # --- Factory ----------------------------------------------------------------

    @staticmethod
    def create(
        customer_id: str,
        name: str,
        email: str,
        phone: str,
        address: str = "",
        loyalty_points: int = 0,
        birthday: date | None = None,
    ) -> Customer:
        customer = Customer(
            id=customer_id,
            name="",
            email="",
            phone="",
        )
        customer.update_contact(name=name, email=email, phone=phone, address=address)
        customer.set_loyalty_points(loyalty_points)
        customer.birthday = birthday
        return customer

    # --- Mutations ----------------------------------------------------------------

    def update_contact(self, name: str, email: str, phone: str, address: str = "") -> None:
        for label, value in (("name", name), ("email", email), ("phone", phone)):
            if not value or not value.strip():
                raise ValidationError(f"Customer {label} is required")
        self.name = name.strip()
        self.email = email.strip()
        self.phone = phone.strip()
        self.address = (address or "").strip()

    def set_loyalty_points(self, points: int) -> None:
        if not isinstance(points, int) or isinstance(points, bool) or points < 0:
            raise ValidationError("Loyalty points must be a non-negative integer")
        self.loyalty_points = points

    # --- Queries ------------------------------------------------------------------

    def matches(self, term: str) -> bool:
        """Case-insensitive match on name or email, substring match on phone."""
        needle = term.strip().lower()
        return (
            needle in self.name.lower()
            or needle in self.email.lower()
            or term.strip() in self.phone
        )

    def has_birthday_on(self, day: date) -> bool:
        if self.birthday is None:
            return False
        return (self.birthday.month, self.birthday.day) == (day.month, day.day)
