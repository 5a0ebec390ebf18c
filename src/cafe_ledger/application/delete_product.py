"""Application service: Delete Product use case.

What happens to sales that still reference the product is an explicit
policy choice rather than a silent orphaning:

- ``RESTRICT`` refuses the deletion while any sale references it.
- ``CASCADE`` removes those sales along with the product.  Their stock
  is not returned, since the product they would return it to is gone.
"""

from __future__ import annotations

import logging
from enum import Enum

from cafe_ledger.domain.exceptions import ProductInUseError, ProductNotFoundError
from cafe_ledger.domain.repository.product_repository import ProductRepository
from cafe_ledger.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class ProductDeletionPolicy(Enum):
    RESTRICT = "restrict"
    CASCADE = "cascade"


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        policy: ProductDeletionPolicy = ProductDeletionPolicy.RESTRICT,
    ) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo
        self._policy = policy

    def handle(self, product_id: str) -> int:
        """Delete a product. Returns the number of sales removed with it."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        dependents = self._sale_repo.list_by_product(product.id)
        if dependents and self._policy is ProductDeletionPolicy.RESTRICT:
            raise ProductInUseError(
                f"Cannot delete {product.name}: {len(dependents)} sale(s) still "
                f"reference it"
            )

        for sale in dependents:
            self._sale_repo.delete(sale.id)
        self._product_repo.delete(product.id)

        logger.info(
            "Deleted product %s '%s' (%d dependent sale(s) removed)",
            product.id, product.name, len(dependents),
        )
        return len(dependents)
