"""Application service: Delete Sale use case."""

from __future__ import annotations

from cafe_ledger.domain.service.ledger_service import LedgerService


class DeleteSaleHandler:

    def __init__(self, ledger: LedgerService) -> None:
        self._ledger = ledger

    def handle(self, sale_id: str) -> None:
        self._ledger.delete_sale(sale_id)
