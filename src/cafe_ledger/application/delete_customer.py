"""Application service: Delete Customer use case."""

from __future__ import annotations

import logging

from cafe_ledger.domain.exceptions import CustomerNotFoundError
from cafe_ledger.domain.repository.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class DeleteCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, customer_id: str) -> None:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer with ID '{customer_id}' not found")
        self._customer_repo.delete(customer.id)
        logger.info("Deleted customer %s '%s'", customer.id, customer.name)
