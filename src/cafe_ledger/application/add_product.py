"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from cafe_ledger.application.parsing import parse_non_negative_int, parse_price
from cafe_ledger.domain.exceptions import ValidationError
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, price: str, quantity: str | int = 0) -> Product:
        """Add a new product to the catalogue with empty sales totals."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        product = Product.create(
            product_id=self._product_repo.next_id(),
            name=name,
            price=parse_price(price),
            quantity=parse_non_negative_int(quantity, "stock quantity"),
        )
        self._product_repo.save(product)
        logger.info("Added product %s '%s' at %s", product.id, product.name, product.price)
        return product
