"""Application service: Record Sale use case.

Parses the raw form values and hands them to the ledger service, which
creates the sale and takes its quantity out of stock in one step.
"""

from __future__ import annotations

from datetime import date

from cafe_ledger.application.dto import SaleDTO, sale_to_dto
from cafe_ledger.application.parsing import parse_date, parse_quantity
from cafe_ledger.domain.service.ledger_service import LedgerService


class RecordSaleHandler:

    def __init__(self, ledger: LedgerService) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        quantity: str | int,
        customer: str,
        sale_date: str | date | None = None,
    ) -> SaleDTO:
        """Record a sale; a blank date means today."""
        sale = self._ledger.record_sale(
            product_id=product_id,
            quantity=parse_quantity(quantity),
            customer=customer or "",
            sale_date=parse_date(sale_date, default=date.today()),
        )
        return sale_to_dto(sale)
