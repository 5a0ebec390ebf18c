"""Application service: Update Customer use case."""

from __future__ import annotations

import logging

from cafe_ledger.application.parsing import parse_non_negative_int, parse_optional_date
from cafe_ledger.domain.exceptions import CustomerNotFoundError
from cafe_ledger.domain.model.customer import Customer
from cafe_ledger.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class UpdateCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        customer_id: str,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
        loyalty_points: str | int | None = None,
        birthday: str | None = None,
    ) -> Customer:
        """Update the given fields; ``None`` keeps the current value."""
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer with ID '{customer_id}' not found")

        points = (
            parse_non_negative_int(loyalty_points, "loyalty points")
            if loyalty_points is not None
            else customer.loyalty_points
        )
        new_birthday = (
            parse_optional_date(birthday) if birthday is not None else customer.birthday
        )

        customer.update_contact(
            name=name if name is not None else customer.name,
            email=email if email is not None else customer.email,
            phone=phone if phone is not None else customer.phone,
            address=address if address is not None else customer.address,
        )
        customer.set_loyalty_points(points)
        customer.birthday = new_birthday

        self._customer_repo.save(customer)
        logger.info("Updated customer %s '%s'", customer.id, customer.name)
        return customer
