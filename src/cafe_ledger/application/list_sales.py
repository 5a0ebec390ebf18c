"""Application service: List Sales use case (query)."""

from __future__ import annotations

from cafe_ledger.application.dto import SaleDTO, sale_to_dto
from cafe_ledger.domain.service.ledger_service import LedgerService


class ListSalesHandler:

    def __init__(self, ledger: LedgerService) -> None:
        self._ledger = ledger

    def handle(self, product_id: str | None = None) -> list[SaleDTO]:
        if product_id is not None:
            sales = self._ledger.sales_for_product(product_id)
        else:
            sales = self._ledger.list_sales()
        return [sale_to_dto(s) for s in sales]
