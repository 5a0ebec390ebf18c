"""Application service: List Products use case (query)."""

from __future__ import annotations

from cafe_ledger.application.dto import ProductDTO, product_to_dto
from cafe_ledger.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD
from cafe_ledger.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._product_repo = product_repo
        self._low_stock_threshold = low_stock_threshold

    def handle(self, search: str | None = None, low_stock_only: bool = False) -> list[ProductDTO]:
        products = self._product_repo.list_all()
        if search:
            needle = search.strip().lower()
            products = [p for p in products if needle in p.name.lower()]
        if low_stock_only:
            products = [p for p in products if p.is_low_stock(self._low_stock_threshold)]
        return [product_to_dto(p, self._low_stock_threshold) for p in products]
