"""Application service: Find Customers use case (query)."""

from __future__ import annotations

from datetime import date

from cafe_ledger.application.dto import CustomerDTO, customer_to_dto
from cafe_ledger.domain.repository.customer_repository import CustomerRepository


class FindCustomersHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, search: str | None = None, today: date | None = None) -> list[CustomerDTO]:
        """List customers, optionally filtered by name, email or phone."""
        today = today or date.today()
        customers = self._customer_repo.list_all()
        if search and search.strip():
            customers = [c for c in customers if c.matches(search)]
        return [customer_to_dto(c, c.has_birthday_on(today)) for c in customers]
