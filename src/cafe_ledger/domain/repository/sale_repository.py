"""Abstract repository for the Sale ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cafe_ledger.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique sale ID."""

    @abstractmethod
    def get_by_id(self, sale_id: str) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        """Return every sale in recording order."""

    @abstractmethod
    def list_by_product(self, product_id: str) -> list[Sale]:
        """Return the sales referencing a product, in recording order."""

    @abstractmethod
    def save(self, sale: Sale) -> None:
        """Persist a new or updated sale."""

    @abstractmethod
    def delete(self, sale_id: str) -> None:
        """Remove a sale from the ledger. Unknown IDs are ignored."""
