"""Application service: Add Customer use case."""

from __future__ import annotations

import logging

from cafe_ledger.application.parsing import parse_non_negative_int, parse_optional_date
from cafe_ledger.domain.model.customer import Customer
from cafe_ledger.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class AddCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        name: str,
        email: str,
        phone: str,
        address: str = "",
        loyalty_points: str | int = 0,
        birthday: str | None = None,
    ) -> Customer:
        customer = Customer.create(
            customer_id=self._customer_repo.next_id(),
            name=name,
            email=email,
            phone=phone,
            address=address,
            loyalty_points=parse_non_negative_int(loyalty_points, "loyalty points"),
            birthday=parse_optional_date(birthday),
        )
        self._customer_repo.save(customer)
        logger.info("Added customer %s '%s'", customer.id, customer.name)
        return customer
