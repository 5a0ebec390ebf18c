"""Application service: Restock Product use case."""

from __future__ import annotations

from cafe_ledger.application.dto import ProductDTO, product_to_dto
from cafe_ledger.application.parsing import parse_amount
from cafe_ledger.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD
from cafe_ledger.domain.service.ledger_service import LedgerService


class RestockProductHandler:

    def __init__(
        self,
        ledger: LedgerService,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._ledger = ledger
        self._low_stock_threshold = low_stock_threshold

    def handle(self, product_id: str, amount: str | int) -> ProductDTO:
        product = self._ledger.add_stock(product_id, parse_amount(amount))
        return product_to_dto(product, self._low_stock_threshold)
