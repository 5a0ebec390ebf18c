"""Application service: Edit Sale use case.

Fields left as ``None`` keep the sale's current value, so the CLI can
change just the quantity or just the customer.
"""

from __future__ import annotations

from datetime import date

from cafe_ledger.application.dto import SaleDTO, sale_to_dto
from cafe_ledger.application.parsing import parse_date, parse_quantity
from cafe_ledger.domain.exceptions import SaleNotFoundError
from cafe_ledger.domain.repository.sale_repository import SaleRepository
from cafe_ledger.domain.service.ledger_service import LedgerService


class EditSaleHandler:

    def __init__(self, ledger: LedgerService, sale_repo: SaleRepository) -> None:
        self._ledger = ledger
        self._sale_repo = sale_repo

    def handle(
        self,
        sale_id: str,
        quantity: str | int | None = None,
        customer: str | None = None,
        sale_date: str | date | None = None,
    ) -> SaleDTO:
        current = self._sale_repo.get_by_id(sale_id)
        if current is None:
            raise SaleNotFoundError(f"Sale #{sale_id} not found")

        sale = self._ledger.edit_sale(
            sale_id=sale_id,
            new_quantity=(
                parse_quantity(quantity) if quantity is not None else current.quantity.value
            ),
            new_customer=customer if customer is not None else current.customer,
            new_date=parse_date(sale_date, default=current.sale_date),
        )
        return sale_to_dto(sale)
